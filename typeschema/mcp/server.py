from fastmcp import FastMCP

from typeschema.api import compute_schema
from typeschema.loaders.loaders import get_file_loader
from typeschema.mcp.helper import auto_mcp_tool, parsed_data, safe_error
from typeschema.settings import load_settings

mcp = FastMCP(
    "Typeschema MCP", instructions=parsed_data["tool_description"]["instructions"]
)


@safe_error
def mcp_compute_schema(target_path: str):
    settings = load_settings()
    loader = get_file_loader(target_path, github_token=settings.github_token, timeout=settings.http_timeout)
    return compute_schema(target_path, loader, default_branch=settings.default_branch)


auto_mcp_tool(mcp, "compute_schema")(mcp_compute_schema)


if __name__ == "__main__":
    mcp.run(transport="stdio")

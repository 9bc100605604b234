import argparse
import json
import sys
import traceback

from typeschema.api import compute_schema
from typeschema.loaders.loaders import get_file_loader
from typeschema.settings import load_settings


def run_schema(target: str, indent: int = 2) -> int:
    settings = load_settings()
    loader = get_file_loader(target, github_token=settings.github_token, timeout=settings.http_timeout)
    schema = compute_schema(target, loader, default_branch=settings.default_branch)
    if "error" in schema:
        print(f"{schema['kind']}: {schema['error']}", file=sys.stderr)
        return 1
    print(json.dumps(schema, indent=indent, ensure_ascii=False))
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="JSON Schema of a TypeScript module's exports")
    subparsers = parser.add_subparsers(dest="function", help="Available functions")

    parser_schema = subparsers.add_parser("schema", help="Print the JSON Schema of a module's exports")
    parser_schema.add_argument("target", help="Local file/directory or GitHub URL of a file or repository")
    parser_schema.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")

    parser_serve = subparsers.add_parser("serve", help="Run the MCP server")
    parser_serve.add_argument("--transport", choices=["sse", "stdio"], default="stdio",
                              help="MCP transport (default: stdio)")

    args = parser.parse_args(argv)

    if not args.function:
        parser.print_help(sys.stderr)
        return 2

    try:
        if args.function == "schema":
            return run_schema(args.target, indent=args.indent)
        if args.function == "serve":
            from typeschema.mcp.server import mcp
            mcp.run(transport=args.transport)
            return 0
    except Exception as e:
        print(traceback.format_exc(), file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

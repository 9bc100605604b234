import json
import os

from typeschema.main import main


def test_schema_command(sample_package, capsys):
    assert main(["schema", sample_package]) == 0
    out = capsys.readouterr().out
    document = json.loads(out)
    assert "Button" in document["properties"]


def test_schema_command_failure(fixtures_dir, capsys):
    assert main(["schema", os.path.join(fixtures_dir, "no_main")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("ManifestError:")


def test_no_command(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().err


def test_mcp_tool(sample_package):
    from typeschema.mcp.server import mcp_compute_schema

    result = mcp_compute_schema(sample_package)
    assert result["type"] == "object"
    assert "greet" in result["properties"]

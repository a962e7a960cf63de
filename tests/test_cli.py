"""
Tests for the actionresolver command line interface.
"""

import io
import json
import sys
import textwrap

import pytest

from actionresolver.cli import main


CATALOG_YAML = textwrap.dedent("""
    containers:
      Blog: /blog

    actions:
      - id: capitalize
        name: capitalize text
        description: Capitalize every word
        examples: ["uppercase {text}"]
        handler: "string:capwords"
      - id: open_settings
        name: open settings
        description: Go to the settings page
        examples: ["open settings"]
        category: navigation
        route: /settings
      - id: publish_post
        name: publish post
        examples: ["publish post"]
        scope: Blog
        handler: "string:capwords"
""")


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "actions.yaml"
    path.write_text(CATALOG_YAML)
    return str(path)


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_missing_catalog_file(tmp_path, capsys):
    assert main(["--catalog", str(tmp_path / "nope.yaml"), "list"]) == 1
    assert "not found" in capsys.readouterr().err


def test_bad_config_file(tmp_path, catalog_path, capsys):
    config = tmp_path / "config.json"
    config.write_text("{broken")
    assert main(["--catalog", catalog_path, "--config", str(config), "list"]) == 1


def test_list_is_scope_filtered(catalog_path, capsys):
    assert main(["--catalog", catalog_path, "list"]) == 0
    out = capsys.readouterr().out
    assert "capitalize text" in out
    assert "publish post" not in out

    assert main(["--catalog", catalog_path, "--container", "Blog", "list"]) == 0
    assert "publish post" in capsys.readouterr().out


def test_list_all(catalog_path, capsys):
    assert main(["--catalog", catalog_path, "list", "--all"]) == 0
    out = capsys.readouterr().out
    assert "Blog:" in out
    assert "publish post" in out


def test_run_executes_with_extracted_argument(catalog_path, capsys):
    assert main(["--catalog", catalog_path, "--yes", "run", "uppercase", "hello"]) == 0
    out = capsys.readouterr().out
    assert "✅" in out
    assert "result: Hello" in out


def test_run_navigation(catalog_path, capsys):
    assert main(["--catalog", catalog_path, "run", "open", "settings"]) == 0
    assert "Navigating to /settings" in capsys.readouterr().out


def test_run_without_match_fails(catalog_path, capsys):
    assert main(["--catalog", catalog_path, "run", "zzzz", "qqqq", "wwww", "xxxx"]) == 1
    assert "No matching command found" in capsys.readouterr().out


def test_candidates(catalog_path, capsys):
    assert main(["--catalog", catalog_path, "candidates", "uppercase", "hello"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("1. capitalize text")


def test_suggest(catalog_path, capsys):
    assert main(["--catalog", catalog_path, "suggest", "open", "setings"]) == 0
    assert '"open settings"' in capsys.readouterr().out


def test_serve_answers_requests(catalog_path, capsys, monkeypatch):
    requests = "\n".join([
        json.dumps({"jsonrpc": "2.0", "id": 1, "method": "tools/list"}),
        json.dumps({
            "jsonrpc": "2.0",
            "id": 2,
            "method": "tools/call",
            "params": {"name": "global.capitalize text", "arguments": {"text": "hi there"}},
        }),
    ]) + "\n"
    monkeypatch.setattr(sys, "stdin", io.StringIO(requests))

    assert main(["--catalog", catalog_path, "serve"]) == 0

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    names = [tool["name"] for tool in lines[0]["result"]["tools"]]
    assert "global.capitalize text" in names
    payload = json.loads(lines[1]["result"]["content"][0]["text"])
    assert payload["result"] == "Hi There"


def test_run_help_lists_commands(catalog_path, capsys):
    assert main(["--catalog", catalog_path, "run", "help"]) == 0
    out = capsys.readouterr().out
    assert "Available commands:" in out
    assert '"open settings"' in out
    assert '"publish post"' not in out

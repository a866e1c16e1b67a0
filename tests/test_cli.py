"""Integration tests for CLI commands using Click's CliRunner."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from mccomplete.cli.main import cli

GAMEMODE = {
    "type": "root",
    "children": {
        "gamemode": {
            "type": "literal",
            "children": {"survival": {"type": "literal", "executable": True}},
        },
    },
}


@pytest.fixture
def cli_runner(tmp_path, monkeypatch):
    """Return a CliRunner whose config directory is a temporary one."""
    monkeypatch.setenv("MCCOMPLETE_CONFIG_DIR", str(tmp_path / "config"))
    return CliRunner()


@pytest.fixture
def grammar_file(tmp_path):
    path = tmp_path / "commands.json"
    path.write_text(json.dumps(GAMEMODE))
    return path


def _json(result) -> dict:
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestRootCLI:
    def test_help(self, cli_runner):
        result = cli_runner.invoke(cli, ["--help"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "mccomplete" in result.output
        assert "complete" in result.output
        assert "parse" in result.output
        assert "tree" in result.output
        assert "config" in result.output

    def test_version(self, cli_runner):
        result = cli_runner.invoke(cli, ["--version"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCompleteCLI:
    def test_bundled_gamemodes(self, cli_runner):
        result = cli_runner.invoke(cli, ["complete", "gamemode "], catch_exceptions=False)
        assert result.exit_code == 0
        for mode in ("survival", "creative", "adventure", "spectator"):
            assert mode in result.output

    def test_json_output(self, cli_runner):
        payload = _json(cli_runner.invoke(cli, ["--json", "complete", "give @p sto"], catch_exceptions=False))
        assert payload["status"] == "success"
        assert [c["label"] for c in payload["data"]] == ["minecraft:stone"]
        assert payload["data"][0]["kind"] == "enum_value"
        assert payload["data"][0]["commit_characters"] == [" "]

    def test_alias_uses_target_children(self, cli_runner):
        payload = _json(cli_runner.invoke(cli, ["--json", "complete", "tp "], catch_exceptions=False))
        labels = [c["label"] for c in payload["data"]]
        # teleport's location, destination and targets arguments
        assert labels[:2] == ["~ ~ ~", "^ ^ ^"]
        assert labels.count("@p") == 2
        assert len(labels) == 14

    def test_no_completions(self, cli_runner):
        result = cli_runner.invoke(cli, ["complete", "nosuchcommand "], catch_exceptions=False)
        assert result.exit_code == 0
        assert "No completions" in result.output

    def test_custom_grammar_file(self, cli_runner, grammar_file):
        payload = _json(
            cli_runner.invoke(cli, ["--json", "--commands", str(grammar_file), "complete", ""], catch_exceptions=False)
        )
        assert [c["label"] for c in payload["data"]] == ["gamemode"]

    def test_missing_grammar_file(self, cli_runner, tmp_path):
        result = cli_runner.invoke(cli, ["--commands", str(tmp_path / "missing.json"), "complete", "x"])
        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_missing_grammar_file_json(self, cli_runner, tmp_path):
        result = cli_runner.invoke(cli, ["--json", "--commands", str(tmp_path / "missing.json"), "complete", "x"])
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["status"] == "error"

    def test_configured_grammar_path(self, cli_runner, grammar_file):
        result = cli_runner.invoke(cli, ["config", "set", "data.commands_path", str(grammar_file)], catch_exceptions=False)
        assert result.exit_code == 0
        payload = _json(cli_runner.invoke(cli, ["--json", "complete", "gamemode "], catch_exceptions=False))
        assert [c["label"] for c in payload["data"]] == ["survival"]


class TestParseCLI:
    def test_parse_json(self, cli_runner):
        payload = _json(
            cli_runner.invoke(cli, ["--json", "parse", "give @p minecraft:stone 3 "], catch_exceptions=False)
        )
        data = payload["data"]
        assert data["path"] == ["give", "targets", "item", "count"]
        assert data["properties"] == {"targets": "@p", "item": "minecraft:stone", "count": "3"}
        assert data["remainder"] == ""
        assert data["executable"] is True

    def test_parse_human(self, cli_runner):
        result = cli_runner.invoke(cli, ["parse", "setblock ~ ~1 ~ "], catch_exceptions=False)
        assert result.exit_code == 0
        assert "setblock pos" in result.output
        assert "~ ~1 ~" in result.output


class TestTreeCLI:
    def test_tree_subcommand(self, cli_runner):
        result = cli_runner.invoke(cli, ["tree", "gamemode"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "survival" in result.output
        assert "spectator" in result.output

    def test_tree_follows_alias(self, cli_runner):
        payload = _json(cli_runner.invoke(cli, ["--json", "tree", "tp"], catch_exceptions=False))
        assert list(payload["data"]["children"]) == ["location", "destination", "targets"]

    def test_tree_unknown_path(self, cli_runner):
        result = cli_runner.invoke(cli, ["tree", "nope"])
        assert result.exit_code == 1
        assert "No such command path" in result.output


class TestConfigCLI:
    def test_show_defaults(self, cli_runner):
        payload = _json(cli_runner.invoke(cli, ["--json", "config", "show"], catch_exceptions=False))
        assert payload["data"]["logging"]["level"] == "WARNING"
        assert payload["data"]["repl"]["history"] is True

    def test_set_and_show(self, cli_runner):
        result = cli_runner.invoke(cli, ["config", "set", "repl.history", "off"], catch_exceptions=False)
        assert result.exit_code == 0
        payload = _json(cli_runner.invoke(cli, ["--json", "config", "show"], catch_exceptions=False))
        assert payload["data"]["repl"]["history"] is False

    def test_set_unknown_key(self, cli_runner):
        result = cli_runner.invoke(cli, ["config", "set", "data.nope", "1"])
        assert result.exit_code == 1
        assert "Unknown setting" in result.output

    def test_path(self, cli_runner, tmp_path):
        result = cli_runner.invoke(cli, ["config", "path"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "config.toml" in result.output

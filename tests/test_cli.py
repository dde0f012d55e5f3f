"""
Tests for the CLI entry point — parsing, dispatch and exit statuses
"""

import orjson

from launchpad.cli import build_parser, main
from launchpad.commands import get_registered_commands


def run_json(root, *argv):
    return main(["--root", str(root), "--json", *argv])


class TestParser:

    def test_every_command_registered(self):
        build_parser()
        assert set(get_registered_commands()) == {
            "ideas", "idea", "new", "move", "audit", "audits",
            "sops", "sop", "search", "stats", "projects",
            "ask", "next", "config", "call",
        }

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: launchpad" in capsys.readouterr().out


class TestMain:
    """Whole runs against a tmp_path root."""

    def test_stats_json(self, sample_vault, capsys):
        assert run_json(sample_vault.root, "stats") == 0

        data = orjson.loads(capsys.readouterr().out)
        assert data["total"] == 3
        assert data["audit_coverage"] == 67

    def test_new_then_list(self, vault, capsys):
        code = main([
            "--root", str(vault.root), "new", "invoice-chaser", "Invoice Chaser",
            "--problem", "Chasing", "--solution", "Reminders",
        ])
        assert code == 0
        capsys.readouterr()

        assert run_json(vault.root, "ideas", "backlog") == 0
        data = orjson.loads(capsys.readouterr().out)
        assert data["ideas"][0]["name"] == "Invoice Chaser"

    def test_error_exit_status(self, vault, capsys):
        assert run_json(vault.root, "idea", "ghost") == 1
        assert orjson.loads(capsys.readouterr().out)["kind"] == "not_found"

    def test_call(self, vault, capsys):
        assert run_json(vault.root, "call", "search_sops", '{"query": ""}') == 1
        assert orjson.loads(capsys.readouterr().out)["kind"] == "invalid"

    def test_ask_without_key(self, vault, capsys):
        assert run_json(vault.root, "ask", "What first?") == 1
        data = orjson.loads(capsys.readouterr().out)
        assert data["error"] == "ANTHROPIC_API_KEY not set"

    def test_config_set_persists(self, vault, capsys):
        assert main(["--root", str(vault.root), "config", "--set", "llm.provider", "openai"]) == 0
        assert (vault.root / ".launchpad" / "config.yaml").is_file()
        capsys.readouterr()

        assert run_json(vault.root, "ask", "What first?") == 1
        assert orjson.loads(capsys.readouterr().out)["error"] == "OPENAI_API_KEY not set"

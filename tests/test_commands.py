"""
Tests for CLI command classes — human output and exit statuses

Commands are built without __init__ and wired to a mock CLI that holds
a real Launchpad over a tmp_path root (see VaultFactory.create_command).
"""

import orjson

from launchpad.commands.assistant_cmd import AssistantCommand
from launchpad.commands.audits_cmd import AuditsCommand
from launchpad.commands.call_cmd import CallCommand
from launchpad.commands.config_cmd import ConfigCommand
from launchpad.commands.ideas_cmd import IdeasCommand
from launchpad.commands.sops_cmd import SOPsCommand
from launchpad.commands.vault_cmd import VaultCommand
from launchpad.config import ConfigManager


class TestIdeasCommand:
    """ideas / idea / new / move."""

    def test_list_all_statuses(self, sample_vault, capsys):
        cmd = sample_vault.create_command(IdeasCommand)

        assert cmd.list_ideas() == 0

        out = capsys.readouterr().out
        for header in ("BACKLOG (1)", "ACTIVE (1)", "SHIPPED (1)", "KILLED (0)"):
            assert header in out
        assert "No ideas." in out

    def test_list_json(self, sample_vault, capsys):
        cli = sample_vault.create_cli_mock()
        cli.json_output = True
        cmd = sample_vault.create_command(IdeasCommand, cli)

        assert cmd.list_ideas("active") == 0
        data = orjson.loads(capsys.readouterr().out)
        assert data["ideas"][0]["slug"] == "b"

    def test_show_missing(self, vault, capsys):
        cmd = vault.create_command(IdeasCommand)

        assert cmd.show_idea("ghost") == 1

        out = capsys.readouterr().out
        assert "[ERR] Idea 'ghost' not found in any vault folder" in out
        assert "Searched: backlog, active, shipped, killed" in out

    def test_show_suggests_audit(self, sample_vault, capsys):
        cmd = sample_vault.create_command(IdeasCommand)

        assert cmd.show_idea("b") == 0

        out = capsys.readouterr().out
        assert "[>] B [b]" in out
        assert "Run SOP 01a" in out

    def test_create_and_move(self, vault, capsys):
        cmd = vault.create_command(IdeasCommand)

        assert cmd.create_idea("a", "A", "p", "s") == 0
        assert cmd.move_idea("a", "active", "Audit passed") == 0

        out = capsys.readouterr().out
        assert "[OK] Created a in [ ] backlog" in out
        assert "[OK] Moved a: [ ] backlog -> [~] active" in out
        assert "Reason: Audit passed" in out

    def test_move_conflict(self, vault, capsys):
        vault.add_idea("a", status="active")
        cmd = vault.create_command(IdeasCommand)

        assert cmd.move_idea("a", "active") == 1
        assert "already in active" in capsys.readouterr().out


class TestAuditsCommand:

    def test_listing_summary(self, sample_vault, capsys):
        cmd = sample_vault.create_command(AuditsCommand)

        assert cmd.list_audits() == 0

        out = capsys.readouterr().out
        assert "AUDITS (2 of 2)" in out
        assert "Average score: 385/500" in out
        assert out.index("420/500") < out.index("350/500")

    def test_bad_verdict_lists_valid(self, vault, capsys):
        cmd = vault.create_command(AuditsCommand)

        assert cmd.list_audits(verdict="MAYBE") == 1
        assert "Valid verdicts: STRONG GO, GO, CONDITIONAL, WEAK, KILL" in capsys.readouterr().out

    def test_show_with_criteria(self, vault, capsys):
        vault.add_audit("a", score=300, verdict="KILL", criteria={"Market Size": (40, False)})
        cmd = vault.create_command(AuditsCommand)

        assert cmd.show_audit("a") == 0

        out = capsys.readouterr().out
        assert "[ERR] KILL" in out
        assert "Market Size: 40/100 [ERR]" in out


class TestSOPsCommand:

    def test_catalog(self, vault, capsys):
        assert vault.create_command(SOPsCommand).list_sops() == 0
        out = capsys.readouterr().out
        assert "SOPs (14)" in out
        assert "Post-Launch" in out

    def test_search(self, vault, capsys):
        vault.add_sop("09", content="Check the pricing page\n")

        assert vault.create_command(SOPsCommand).search("pricing") == 0

        out = capsys.readouterr().out
        assert "1 match(es) in 1 SOP(s)" in out
        assert "Line 1: Check the pricing page" in out

    def test_show_missing_file(self, vault, capsys):
        assert vault.create_command(SOPsCommand).show_sop("3") == 1
        assert "SOP 03 not found" in capsys.readouterr().out


class TestVaultCommand:

    def test_stats(self, sample_vault, capsys):
        assert sample_vault.create_command(VaultCommand).stats() == 0
        out = capsys.readouterr().out
        assert "67%" in out
        assert "1 backlog idea(s) may need an audit" in out

    def test_projects(self, vault, capsys):
        vault.add_project("site", phase="Build")
        assert vault.create_command(VaultCommand).projects() == 0
        assert "site" in capsys.readouterr().out

    def test_missing_project(self, vault, capsys):
        assert vault.create_command(VaultCommand).projects("ghost") == 1


class TestAssistantCommand:

    def test_ask(self, vault, capsys):
        cmd = vault.create_command(AssistantCommand)

        assert cmd.ask("What first?") == 0

        out = capsys.readouterr().out
        assert "Asking the SOP assistant" in out
        assert "[*] Run SOP 00 (Idea Intake)." in out

    def test_control_characters_stripped(self, vault, capsys):
        vault.provider.reply = "SOP 05\x1b[2J"
        cmd = vault.create_command(AssistantCommand)

        cmd.next_sop("new project")

        out = capsys.readouterr().out
        assert "\x1b" not in out
        assert "SOP 05[2J" in out


class TestConfigCommand:

    def make_cmd(self, vault, tmp_path):
        cli = vault.create_cli_mock()
        cli.config_manager = ConfigManager(vault.root, user_config_path=tmp_path / "user.yaml")
        return vault.create_command(ConfigCommand, cli)

    def test_show(self, vault, tmp_path, capsys):
        assert self.make_cmd(vault, tmp_path).show_config() == 0
        assert "Configuration:" in capsys.readouterr().out

    def test_set(self, vault, tmp_path, capsys):
        cmd = self.make_cmd(vault, tmp_path)

        assert cmd.set_config("llm.provider", "openai") == 0
        assert "[OK] Set llm.provider = openai" in capsys.readouterr().out

    def test_set_invalid(self, vault, tmp_path, capsys):
        assert self.make_cmd(vault, tmp_path).set_config("llm.provider", "llama") == 1
        assert "Unknown provider" in capsys.readouterr().out


class TestCallCommand:

    def test_invalid_json(self, vault, capsys):
        assert vault.create_command(CallCommand).call("get_idea", "{slug") == 1
        assert orjson.loads(capsys.readouterr().out)["kind"] == "invalid"

    def test_call(self, vault, capsys):
        vault.add_idea("a")

        assert vault.create_command(CallCommand).call("get_idea", '{"slug": "a"}') == 0
        assert orjson.loads(capsys.readouterr().out)["status"] == "backlog"

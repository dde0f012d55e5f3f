"""
Tests for configuration — layering, validation, persistence
"""

import yaml

from launchpad.config import Config, ConfigManager, LLMConfig


def make_manager(tmp_path) -> ConfigManager:
    return ConfigManager(tmp_path / "root", user_config_path=tmp_path / "user.yaml")


class TestDefaults:

    def test_defaults(self):
        config = Config()
        assert config.paths.vault == "_vault"
        assert config.llm.provider == "claude"
        assert config.llm.effective_model == "claude-sonnet-4-20250514"
        assert config.parallel.io_workers == 4
        assert config.validate() is None

    def test_openai_default_model(self):
        assert LLMConfig(provider="openai").effective_model == "gpt-5-mini"

    def test_round_trip_dict(self):
        config = Config()
        config.display.symbols = "ascii"
        assert Config.from_dict(config.to_dict()) == config


class TestLayering:
    """Environment over project over user over defaults."""

    def test_project_overrides_user(self, tmp_path):
        manager = make_manager(tmp_path)
        (tmp_path / "user.yaml").write_text("llm:\n  provider: openai\nparallel:\n  io_workers: 2\n")
        project = manager.project_config_path
        project.parent.mkdir(parents=True)
        project.write_text("llm:\n  provider: claude\n")

        config = manager.load()

        assert config.llm.provider == "claude"
        assert config.parallel.io_workers == 2

    def test_environment_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LAUNCHPAD_LLM_PROVIDER", "openai")
        monkeypatch.setenv("LAUNCHPAD_IO_WORKERS", "8")

        config = make_manager(tmp_path).load()

        assert config.llm.provider == "openai"
        assert config.parallel.io_workers == 8

    def test_malformed_yaml_ignored(self, tmp_path):
        (tmp_path / "user.yaml").write_text("llm: [unclosed\n")
        assert make_manager(tmp_path).load().llm.provider == "claude"

    def test_non_integer_workers_default(self, tmp_path):
        (tmp_path / "user.yaml").write_text("parallel:\n  io_workers: many\n")
        assert make_manager(tmp_path).load().parallel.io_workers == 4


class TestSet:
    """ConfigManager.set validation and persistence."""

    def test_set_project(self, tmp_path):
        manager = make_manager(tmp_path)

        assert manager.set("llm.provider", "openai") is None

        saved = yaml.safe_load(manager.project_config_path.read_text())
        assert saved["llm"]["provider"] == "openai"

    def test_set_user(self, tmp_path):
        manager = make_manager(tmp_path)
        assert manager.set("display.symbols", "ascii", scope="user") is None
        assert yaml.safe_load((tmp_path / "user.yaml").read_text())["display"]["symbols"] == "ascii"

    def test_int_coercion(self, tmp_path):
        manager = make_manager(tmp_path)
        assert manager.set("parallel.io_workers", "6") is None
        assert manager.load().parallel.io_workers == 6

    def test_rejects_bad_values(self, tmp_path):
        manager = make_manager(tmp_path)

        assert "Invalid key format" in manager.set("provider", "openai")
        assert "Unknown section" in manager.set("cache.size", "1")
        assert "Unknown llm setting" in manager.set("llm.temperature", "1")
        assert "Unknown provider" in manager.set("llm.provider", "llama")
        assert "Invalid value" in manager.set("parallel.io_workers", "lots")
        assert "must be >= 1" in manager.set("parallel.io_workers", "0")
        assert not manager.project_config_path.exists()

    def test_display_width(self, tmp_path):
        manager = make_manager(tmp_path)

        assert manager.set("display.width", "100") is None
        assert manager.load().display.width == 100
        assert "at least 40" in manager.set("display.width", "20")
        assert manager.load().display.width == 100

    def test_rejected_value_not_kept(self, tmp_path):
        manager = make_manager(tmp_path)
        manager.set("llm.provider", "llama")
        assert manager.load().llm.provider == "claude"

    def test_get(self, tmp_path):
        manager = make_manager(tmp_path)
        assert manager.get("llm.model") == "claude-sonnet-4-20250514"
        assert manager.get("parallel.io_workers") == "4"
        assert manager.get("nope") is None

    def test_display_mentions_key_status(self, tmp_path):
        text = make_manager(tmp_path).display()
        assert "ANTHROPIC_API_KEY" in text
        assert "Missing" in text

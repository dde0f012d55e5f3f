"""
Shared pytest fixtures for the Launchpad test suite.

Usage in tests:
    def test_something(vault):
        vault.add_idea("a")
        lp = vault.launchpad()

    def test_with_data(sample_vault):
        # ideas a (backlog), b (active), c (shipped); audits for a and c
        lp = sample_vault.launchpad()
"""

import pytest

from tests.factories import VaultFactory


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user config and environment overrides out of every test."""
    for name in (
        "LAUNCHPAD_ROOT", "LAUNCHPAD_LLM_PROVIDER", "LAUNCHPAD_LLM_MODEL",
        "LAUNCHPAD_VAULT_DIR", "LAUNCHPAD_IO_WORKERS", "LAUNCHPAD_LOG_LEVEL",
        "ANTHROPIC_API_KEY", "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr(
        "launchpad.config.ConfigManager.USER_CONFIG_FILE",
        tmp_path / "home" / ".launchpad" / "config.yaml",
    )


@pytest.fixture
def vault(tmp_path):
    """Empty Launchpad root (no directories created yet)."""
    return VaultFactory(tmp_path / "root")


@pytest.fixture
def sample_vault(vault):
    """
    Ideas a (backlog), b (active), c (shipped); audits for a and c.
    """
    vault.add_idea("a", status="backlog")
    vault.add_idea("b", status="active")
    vault.add_idea("c", status="shipped")
    vault.add_audit("a", score=350, verdict="GO")
    vault.add_audit("c", score=420, verdict="STRONG GO", style="report")
    return vault


@pytest.fixture
def lp(vault):
    return vault.launchpad()

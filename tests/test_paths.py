"""
Tests for the path resolver — bit-exact file naming shared with other tools
"""

from pathlib import Path

import pytest

from launchpad.config import Config
from launchpad.core.errors import UnknownStatusError, UnknownSOPError
from launchpad.core.paths import (
    STATUSES, SOP_FILES, VaultPaths,
    is_valid_slug, is_safe_name, normalize_sop_number,
    idea_filename, audit_filename, slug_from_filename, IDEA_PREFIX, AUDIT_PREFIX,
)


ROOT = Path("/lp")


class TestLayout:
    """Default directory layout."""

    def test_idea_path(self):
        paths = VaultPaths(ROOT)
        assert paths.idea_path("invoice-chaser", "active") == ROOT / "_vault" / "active" / "IDEA-invoice-chaser.md"

    def test_audit_path(self):
        paths = VaultPaths(ROOT)
        assert paths.audit_path("invoice-chaser") == ROOT / "_vault" / "audits" / "AUDIT-invoice-chaser.md"

    def test_sop_path_accepts_aliases(self):
        """"1a", "01a" and "01A" resolve to the rigorous audit document."""
        paths = VaultPaths(ROOT)
        expected = ROOT / "_sops" / "01a-rigorous-idea-audit.md"
        assert paths.sop_path("1a") == expected
        assert paths.sop_path("01a") == expected
        assert paths.sop_path("01A") == expected

    def test_sop_path_numeric(self):
        paths = VaultPaths(ROOT)
        assert paths.sop_path(7) == ROOT / "_sops" / "07-development-protocol.md"

    def test_resource_documents(self):
        paths = VaultPaths(ROOT)
        assert paths.ideas_index == ROOT / "_vault" / "IDEAS.md"
        assert paths.stack_doc == ROOT / "_stack" / "STACK.md"
        assert paths.assistant_prompt == ROOT / "_agents" / "prompts" / "sop-assistant.md"

    def test_project_path(self):
        assert VaultPaths(ROOT).project_path("site") == ROOT / "projects" / "site"

    def test_from_config(self):
        config = Config()
        config.paths.vault = "vault"
        paths = VaultPaths.from_config(ROOT, config)
        assert paths.status_dir("killed") == ROOT / "vault" / "killed"


class TestMisuse:
    """Unknown statuses and SOP numbers raise."""

    def test_unknown_status(self):
        with pytest.raises(UnknownStatusError):
            VaultPaths(ROOT).idea_path("a", "archived")

    def test_unknown_sop(self):
        with pytest.raises(UnknownSOPError):
            VaultPaths(ROOT).sop_path("13")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            VaultPaths(ROOT).status_dir("done")


class TestNames:
    """Slug validation and filename round-trips."""

    def test_statuses_in_lifecycle_order(self):
        assert STATUSES == ("backlog", "active", "shipped", "killed")

    def test_catalog_has_fourteen_files(self):
        assert len(SOP_FILES) == 14

    @pytest.mark.parametrize("slug", ["a", "invoice-chaser", "v2-api", "123"])
    def test_valid_slugs(self, slug):
        assert is_valid_slug(slug)

    @pytest.mark.parametrize("slug", ["", "Invoice", "invoice_chaser", "a b", "a/b", "café", "abc\n", "\nabc"])
    def test_invalid_slugs(self, slug):
        assert not is_valid_slug(slug)

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b", "../etc"])
    def test_unsafe_names(self, name):
        assert not is_safe_name(name)

    def test_safe_name_allows_non_kebab(self):
        """Lookups accept any single path component; only creation is strict."""
        assert is_safe_name("My_Project")

    def test_normalize_sop_number(self):
        assert normalize_sop_number("1") == "01"
        assert normalize_sop_number(12) == "12"
        assert normalize_sop_number(" 1A ") == "01a"
        assert normalize_sop_number("x") == "x"

    def test_filenames(self):
        assert idea_filename("a") == "IDEA-a.md"
        assert audit_filename("a") == "AUDIT-a.md"
        assert slug_from_filename("IDEA-a-b.md", IDEA_PREFIX) == "a-b"
        assert slug_from_filename("AUDIT-a.md", IDEA_PREFIX) is None
        assert slug_from_filename("AUDIT-.md", AUDIT_PREFIX) is None
        assert slug_from_filename("AUDIT-a.txt", AUDIT_PREFIX) is None

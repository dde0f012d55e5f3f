"""
Tests for AuditStore — parsing, filtering and aggregating audits

Unknown scores stay None: they never count toward the average and
never pass a minimum-score filter, but they sort as zero.
"""

from launchpad.core.results import Outcome
from launchpad.vault.audits import AuditStore, average_score, round_half_up, AuditSummary


def make_store(vault) -> AuditStore:
    return AuditStore(vault.paths, workers=2)


class TestGetAudit:
    """Single audit."""

    def test_frontmatter_audit(self, vault):
        vault.add_audit("a", score=350, verdict="GO", ai_assisted=True)

        data = make_store(vault).get("a").to_dict()

        assert data["score"] == 350
        assert data["verdict"] == "GO"
        assert data["ai_assisted"] is True
        assert data["audit_date"] == "2026-01-20"
        assert data["criteria"] is None

    def test_report_audit_with_criteria(self, vault):
        vault.add_audit(
            "b", score=412, verdict="STRONG GO", style="report",
            criteria={"Problem Evidence": (72, True), "Market Size": (40, False)},
        )

        data = make_store(vault).get("b").to_dict()

        assert data["score"] == 412
        assert data["verdict"] == "STRONG GO"
        assert data["ai_assisted"] is False
        assert data["criteria"] == {
            "Problem Evidence": {"score": 72, "pass": True},
            "Market Size": {"score": 40, "pass": False},
        }

    def test_missing_audit(self, vault):
        vault.add_audit("invoice-chaser", score=1, verdict="KILL")

        result = make_store(vault).get("invoice-chasr")

        assert result.outcome == Outcome.NOT_FOUND
        assert result.details["expected_path"].endswith("AUDIT-invoice-chasr.md")
        assert "SOP 01a" in result.details["suggestion"]
        assert result.details["suggestions"] == ["invoice-chaser"]

    def test_unsafe_slug(self, vault):
        result = make_store(vault).get("../x")
        assert result.outcome == Outcome.INVALID


class TestListAudits:
    """Filtering, ordering and summary."""

    def populate(self, vault):
        vault.add_audit("low", score=120, verdict="KILL")
        vault.add_audit("high", score=420, verdict="STRONG GO", style="report")
        vault.add_audit("mid", score=300, verdict="GO")
        vault.add_audit("unknown", content="# Audit in progress\n")

    def test_empty(self, vault):
        data = make_store(vault).list_audits().to_dict()

        assert data["audits"] == []
        assert data["total"] == 0
        assert data["summary"] == {"verdict_counts": {}, "average_score": None}

    def test_sorted_by_score_descending(self, vault):
        self.populate(vault)

        data = make_store(vault).list_audits().to_dict()

        assert [a["slug"] for a in data["audits"]] == ["high", "mid", "low", "unknown"]
        assert data["count"] == 4
        assert data["total"] == 4

    def test_summary_counts_and_average(self, vault):
        self.populate(vault)

        summary = make_store(vault).list_audits().to_dict()["summary"]

        assert summary["verdict_counts"] == {"KILL": 1, "STRONG GO": 1, "GO": 1}
        # (120 + 420 + 300) / 3, unknown excluded
        assert summary["average_score"] == 280

    def test_min_score_excludes_unknown(self, vault):
        self.populate(vault)

        data = make_store(vault).list_audits(min_score=0).to_dict()

        assert "unknown" not in [a["slug"] for a in data["audits"]]
        assert data["count"] == 3
        assert data["total"] == 4

    def test_verdict_filter(self, vault):
        self.populate(vault)

        data = make_store(vault).list_audits(verdict="GO").to_dict()

        assert [a["slug"] for a in data["audits"]] == ["mid"]
        assert data["filters"] == {"verdict": "GO", "min_score": None}
        # summary still covers everything
        assert data["summary"]["verdict_counts"]["KILL"] == 1

    def test_combined_filters(self, vault):
        self.populate(vault)
        data = make_store(vault).list_audits(verdict="KILL", min_score=200).to_dict()
        assert data["audits"] == []

    def test_ties_keep_filename_order(self, vault):
        vault.add_audit("b", score=200, verdict="WEAK")
        vault.add_audit("a", score=200, verdict="WEAK")

        data = make_store(vault).list_audits().to_dict()
        assert [a["slug"] for a in data["audits"]] == ["a", "b"]

    def test_unknown_verdict(self, vault):
        result = make_store(vault).list_audits(verdict="MAYBE")

        assert result.outcome == Outcome.INVALID
        assert result.details["valid_verdicts"] == ["STRONG GO", "GO", "CONDITIONAL", "WEAK", "KILL"]

    def test_unreadable_audit_degrades(self, vault):
        vault.add_audit("good", score=100, verdict="WEAK")
        vault.paths.audit_path("broken").write_bytes(b"\xff\xfe\x00")

        audits = make_store(vault).list_audits().to_dict()["audits"]

        broken = next(a for a in audits if a["slug"] == "broken")
        assert broken["score"] is None
        assert broken["verdict"] is None
        assert broken["ai_assisted"] is None


class TestAverage:
    """Rounding rules."""

    def test_half_rounds_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(66.66) == 67

    def test_zero_score_counts(self, tmp_path):
        summaries = [
            AuditSummary(slug="a", path=tmp_path, score=0),
            AuditSummary(slug="b", path=tmp_path, score=101),
            AuditSummary(slug="c", path=tmp_path, score=None),
        ]
        # 50.5 rounds half up
        assert average_score(summaries) == 51

    def test_no_known_scores(self, tmp_path):
        assert average_score([AuditSummary(slug="a", path=tmp_path)]) is None

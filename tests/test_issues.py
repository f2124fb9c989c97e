"""Tests for severities, issues and the issue collector."""

from __future__ import annotations

import pytest

from podlint.core.issues import IssueCollector
from podlint.models.issue import Issue, Severity


class TestSeverity:
    def test_ordering(self):
        assert Severity.ERROR > Severity.WARNING > Severity.INFO
        assert max([Severity.INFO, Severity.ERROR, Severity.WARNING]) == Severity.ERROR

    def test_from_str(self):
        assert Severity.from_str("warn") == Severity.WARNING
        assert Severity.from_str(" Error ") == Severity.ERROR


class TestIssue:
    def test_add_sub_issue_returns_parent(self):
        parent = Issue("Container best practices", Severity.WARNING)
        result = parent.add_sub_issue("c1", Issue("No probes defined", Severity.WARNING))
        result.add_sub_issue("c1", Issue("No resources defined", Severity.WARNING))

        assert result is parent
        assert len(parent.sub_issues["c1"]) == 2

    def test_max_severity_folds_sub_issues(self):
        parent = Issue("Resource utilization", Severity.INFO)
        parent.add_sub_issue("c1", Issue("CPU", Severity.WARNING))
        parent.add_sub_issue("c2", Issue("Memory", Severity.ERROR))

        assert parent.severity == Severity.INFO
        assert parent.max_severity() == Severity.ERROR

    def test_to_dict(self):
        parent = Issue("Container best practices", Severity.WARNING)
        parent.add_sub_issue("c1", Issue("No probes defined", Severity.WARNING))

        assert parent.to_dict() == {
            "message": "Container best practices",
            "severity": "warning",
            "sub_issues": {"c1": [{"message": "No probes defined", "severity": "warning"}]},
        }


class TestIssueCollector:
    def test_registered_resource_has_empty_list(self):
        report = IssueCollector()
        report.register("default/p1")

        assert "default/p1" in report
        assert report.issues_for("default/p1") == []
        assert report.has_no_issues("default/p1")
        assert report.max_severity("default/p1") is None

    def test_record_preserves_order(self):
        report = IssueCollector()
        report.record("default/p2", Issue("b", Severity.INFO))
        report.record("default/p1", Issue("a", Severity.ERROR))
        report.record("default/p2", Issue("c", Severity.WARNING))

        assert list(report.issues()) == ["default/p2", "default/p1"]
        assert [i.message for i in report.issues_for("default/p2")] == ["b", "c"]
        assert report.max_severity("default/p2") == Severity.WARNING

    def test_max_severity_walks_sub_issues(self):
        report = IssueCollector()
        parent = Issue("Container best practices", Severity.INFO)
        parent.add_sub_issue("c1", Issue("boom", Severity.ERROR))
        report.record("default/p1", parent)

        assert report.max_severity("default/p1") == Severity.ERROR

    def test_summary_counts_worst_severity(self):
        report = IssueCollector()
        report.register("default/ok")
        report.record("default/p1", Issue("a", Severity.ERROR))
        report.record("default/p1", Issue("b", Severity.INFO))
        report.record("default/p2", Issue("c", Severity.WARNING))

        assert report.summary() == {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 1}
        assert report.max_severity_overall() == Severity.ERROR

    def test_merge(self):
        report = IssueCollector()
        report.record("default/p1", Issue("a", Severity.INFO))
        shard = IssueCollector()
        shard.register("default/p2")
        shard.record("default/p1", Issue("b", Severity.INFO))

        report.merge(shard)

        assert list(report.issues()) == ["default/p1", "default/p2"]
        assert [i.message for i in report.issues_for("default/p1")] == ["a", "b"]
        assert report.has_no_issues("default/p2")

    def test_issues_view_is_read_only(self):
        report = IssueCollector()
        report.register("default/p1")

        with pytest.raises(TypeError):
            report.issues()["default/p2"] = []
        assert "default/p2" not in report

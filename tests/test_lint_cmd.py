"""Tests for the ``podlint lint`` command."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from conftest import make_pod
from podlint.cli.app import app
from podlint.core.errors import LoadError
from podlint.models.pod import PodPhase


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cluster(loader):
    """Patch the cluster adapter so the command lints ``loader``'s pods."""
    with patch("podlint.cli.commands.lint_cmd.K8sClient"), \
            patch("podlint.cli.commands.lint_cmd.ClusterLoader", return_value=loader):
        yield loader


class TestLintCommand:
    def test_json_output(self, runner, cluster):
        cluster.list_pods.return_value = {
            "default/p1": make_pod("p1", phase=PodPhase.FAILED, service_account="fred"),
        }

        result = runner.invoke(app, ["lint", "-o", "json"])

        assert result.exit_code == 0
        assert '"default/p1"' in result.output
        assert '"error"' in result.output

    def test_yaml_output(self, runner, cluster):
        cluster.list_pods.return_value = {
            "default/p1": make_pod("p1", phase=PodPhase.RUNNING),
        }

        result = runner.invoke(app, ["lint", "-o", "yaml"])

        assert result.exit_code == 0
        assert "default/p1:" in result.output
        assert "severity: info" in result.output

    def test_table_output(self, runner, cluster):
        cluster.list_pods.return_value = {
            "default/p1": make_pod("p1", phase=PodPhase.RUNNING, service_account="fred"),
        }

        result = runner.invoke(app, ["lint"])

        assert result.exit_code == 0
        assert "all clear" in result.output

    def test_load_error_reports_partial_result(self, runner, cluster):
        cluster.list_pods.side_effect = LoadError("pods", "connection refused")

        result = runner.invoke(app, ["lint", "-o", "json"])

        assert result.exit_code == 1
        assert "could not be fully evaluated" in result.output

    def test_metrics_failure_still_renders_findings(self, runner, cluster):
        cluster.list_pods.return_value = {
            "default/p1": make_pod("p1", phase=PodPhase.PENDING, service_account="fred"),
        }
        cluster.cluster_has_metrics.return_value = True
        cluster.fetch_pods_metrics.side_effect = LoadError("pod metrics", "timed out")

        result = runner.invoke(app, ["lint", "-o", "json"])

        assert result.exit_code == 1
        assert '"default/p1"' in result.output
        assert "Pod is pending" in result.output
        assert "could not be fully evaluated" in result.output

    def test_bad_config_file(self, runner, cluster, tmp_path):
        result = runner.invoke(app, ["lint", "--config", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 2
        cluster.list_pods.assert_not_called()

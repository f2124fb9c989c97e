"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from podlint.config.settings import Settings, load_settings
from podlint.core.errors import ConfigError
from podlint.models.issue import Severity


def test_defaults():
    cfg = Settings()

    assert cfg.restarts_limit == 5
    assert cfg.cpu_limit_percent == 80.0
    assert cfg.mem_limit_percent == 80.0
    assert cfg.utilization_severity == Severity.WARNING


def test_from_file(tmp_path):
    path = tmp_path / "podlint.yaml"
    path.write_text(
        "pod:\n"
        "  restarts: 3\n"
        "  limits:\n"
        "    cpu: 90\n"
        "  utilization_severity: error\n"
        "excludes:\n"
        "  namespaces: [kube-system]\n"
    )

    cfg = Settings.from_file(path)

    assert cfg.restarts_limit == 3
    assert cfg.cpu_limit_percent == 90.0
    assert cfg.mem_limit_percent == 80.0
    assert cfg.utilization_severity == Severity.ERROR
    assert cfg.excluded_namespaces == ["kube-system"]


def test_empty_file_keeps_defaults(tmp_path):
    path = tmp_path / "podlint.yaml"
    path.write_text("")

    assert Settings.from_file(path) == Settings()


@pytest.mark.parametrize(
    "content",
    [
        "pod: [unclosed",
        "- just\n- a list\n",
        "pod:\n  restarts: many\n",
        "pod: [1, 2]\n",
        "pod:\n  limits: 80\n",
        "excludes: kube-system\n",
        "pod:\n  utilization_severity: 3\n",
    ],
)
def test_bad_file_raises(tmp_path, content):
    path = tmp_path / "podlint.yaml"
    path.write_text(content)

    with pytest.raises(ConfigError):
        Settings.from_file(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        Settings.from_file(tmp_path / "nope.yaml")


def test_load_settings_uses_env(tmp_path, monkeypatch):
    path = tmp_path / "podlint.yaml"
    path.write_text("pod:\n  restarts: 7\n")
    monkeypatch.setenv("PODLINT_CONFIG", str(path))

    assert load_settings().restarts_limit == 7


def test_load_settings_without_file(monkeypatch):
    monkeypatch.delenv("PODLINT_CONFIG", raising=False)

    assert load_settings() == Settings()

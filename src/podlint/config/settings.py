"""Application configuration and defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from podlint.core.errors import ConfigError
from podlint.models.issue import Severity

logger = logging.getLogger(__name__)

DEFAULT_RESTARTS_LIMIT = 5
DEFAULT_CPU_LIMIT_PERCENT = 80.0
DEFAULT_MEM_LIMIT_PERCENT = 80.0


def _section(d: dict, key: str) -> dict:
    value = d.get(key) or {}
    if not isinstance(value, dict):
        raise TypeError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _default_config_path() -> Path | None:
    raw = os.environ.get("PODLINT_CONFIG", "")
    return Path(raw) if raw else None


@dataclass
class Settings:
    restarts_limit: int = DEFAULT_RESTARTS_LIMIT
    cpu_limit_percent: float = DEFAULT_CPU_LIMIT_PERCENT
    mem_limit_percent: float = DEFAULT_MEM_LIMIT_PERCENT
    utilization_severity: Severity = Severity.WARNING
    excluded_namespaces: list[str] = field(default_factory=list)
    default_output: str = "table"

    @classmethod
    def from_dict(cls, d: dict | None) -> Settings:
        """Build settings from a parsed config document, keeping defaults for gaps."""
        d = d or {}
        pod = _section(d, "pod")
        limits = _section(pod, "limits")
        excludes = _section(d, "excludes")
        severity = pod.get("utilization_severity")
        return cls(
            restarts_limit=int(pod.get("restarts", DEFAULT_RESTARTS_LIMIT)),
            cpu_limit_percent=float(limits.get("cpu", DEFAULT_CPU_LIMIT_PERCENT)),
            mem_limit_percent=float(limits.get("memory", DEFAULT_MEM_LIMIT_PERCENT)),
            utilization_severity=Severity.from_str(str(severity)) if severity else Severity.WARNING,
            excluded_namespaces=list(excludes.get("namespaces") or []),
            default_output=d.get("output", "table"),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> Settings:
        path = Path(path)
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(str(path), e.strerror or str(e)) from e
        except yaml.YAMLError as e:
            raise ConfigError(str(path), f"malformed YAML: {e}") from e
        if raw is not None and not isinstance(raw, dict):
            raise ConfigError(str(path), "top-level document must be a mapping")
        try:
            return cls.from_dict(raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(str(path), str(e)) from e


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from ``path``, ``$PODLINT_CONFIG`` or built-in defaults."""
    target = Path(path) if path else _default_config_path()
    if target is None:
        return Settings()
    logger.debug("Loading configuration from %s", target)
    return Settings.from_file(target)


# Global singleton
settings = Settings()

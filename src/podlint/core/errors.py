"""Exception hierarchy for podlint."""

from __future__ import annotations


class PodlintError(Exception):
    """Base exception for all podlint errors."""


class LoadError(PodlintError):
    """Raised when pods, their status or metrics cannot be fetched from the cluster."""

    def __init__(self, what: str, reason: str) -> None:
        super().__init__(f"Failed to load {what}: {reason}")
        self.what = what
        self.reason = reason


class ConfigError(PodlintError):
    """Raised when an explicitly requested configuration file is unusable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid configuration '{path}': {reason}")
        self.path = path
        self.reason = reason

"""Severity levels and lint issue records."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field


@functools.total_ordering
class Severity(enum.Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return _RANKS[self] < _RANKS[other]

    @classmethod
    def from_str(cls, s: str) -> Severity:
        value = s.strip().lower()
        if value == "warn":
            return cls.WARNING
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Unknown severity level: {s!r}")


_RANKS = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


@dataclass
class Issue:
    """A single finding, optionally broken down per container."""

    message: str
    severity: Severity
    sub_issues: dict[str, list[Issue]] = field(default_factory=dict)

    def add_sub_issue(self, name: str, issue: Issue) -> Issue:
        self.sub_issues.setdefault(name, []).append(issue)
        return self

    def max_severity(self) -> Severity:
        """Fold this issue's severity with every nested sub-issue."""
        level = self.severity
        for issues in self.sub_issues.values():
            for sub in issues:
                level = max(level, sub.max_severity())
        return level

    def to_dict(self) -> dict:
        data: dict = {"message": self.message, "severity": self.severity.value}
        if self.sub_issues:
            data["sub_issues"] = {
                name: [i.to_dict() for i in issues]
                for name, issues in self.sub_issues.items()
            }
        return data

"""Per-resource issue collection and aggregation."""

from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import Mapping

from podlint.models.issue import Issue, Severity


class IssueCollector:
    """Ordered mapping of ``namespace/name`` to the issues found for it.

    Every examined resource is registered, so an empty list means "linted,
    nothing found" while a missing key means "never examined".
    """

    def __init__(self) -> None:
        self._issues: dict[str, list[Issue]] = {}

    def register(self, fqn: str) -> None:
        self._issues.setdefault(fqn, [])

    def record(self, fqn: str, issue: Issue) -> None:
        self._issues.setdefault(fqn, []).append(issue)

    def issues(self) -> Mapping[str, list[Issue]]:
        return MappingProxyType(self._issues)

    def issues_for(self, fqn: str) -> list[Issue]:
        return list(self._issues.get(fqn, []))

    def has_no_issues(self, fqn: str) -> bool:
        return not self._issues.get(fqn)

    def max_severity(self, fqn: str) -> Severity | None:
        """Highest severity across the resource's issues and their sub-issues.

        Returns None when the resource has no issues.
        """
        issues = self._issues.get(fqn)
        if not issues:
            return None
        return max(i.max_severity() for i in issues)

    def max_severity_overall(self) -> Severity | None:
        levels = [s for s in (self.max_severity(k) for k in self._issues) if s is not None]
        return max(levels) if levels else None

    def summary(self) -> dict[Severity, int]:
        """Count resources by their maximum severity."""
        counts: Counter[Severity] = Counter()
        for fqn in self._issues:
            level = self.max_severity(fqn)
            if level is not None:
                counts[level] += 1
        return {level: counts[level] for level in Severity}

    def merge(self, other: IssueCollector) -> None:
        """Fold a shard collector into this one, keeping the shard's key order."""
        for fqn, issues in other._issues.items():
            self.register(fqn)
            self._issues[fqn].extend(issues)

    def __len__(self) -> int:
        return len(self._issues)

    def __contains__(self, fqn: object) -> bool:
        return fqn in self._issues

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IssueCollector):
            return NotImplemented
        return list(self._issues.items()) == list(other._issues.items())

    def to_dict(self) -> dict[str, list[dict]]:
        return {fqn: [i.to_dict() for i in issues] for fqn, issues in self._issues.items()}

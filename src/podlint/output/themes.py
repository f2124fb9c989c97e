"""Severity color maps."""

from podlint.models.issue import Severity

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.INFO: "blue",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red bold",
}

SEVERITY_ICONS: dict[Severity, str] = {
    Severity.INFO: "i",
    Severity.WARNING: "!",
    Severity.ERROR: "X",
}


def styled_severity(severity: Severity | None) -> str:
    if severity is None:
        return "[green]ok[/green]"
    color = SEVERITY_COLORS.get(severity, "white")
    return f"[{color}]{severity.value}[/{color}]"


def severity_icon(severity: Severity) -> str:
    color = SEVERITY_COLORS.get(severity, "white")
    icon = SEVERITY_ICONS.get(severity, "?")
    return f"[{color}]{icon}[/{color}]"

"""Rich table builders for lint reports."""

from __future__ import annotations

from rich.table import Table

from podlint.core.issues import IssueCollector
from podlint.models.issue import Severity
from podlint.output.themes import severity_icon, styled_severity


def report_table(report: IssueCollector, title: str = "Pods") -> Table:
    table = Table(title=title, expand=True, show_lines=False)
    table.add_column("", width=3, no_wrap=True)
    table.add_column("Pod", style="cyan", no_wrap=True)
    table.add_column("Container", style="magenta", no_wrap=True)
    table.add_column("Issue", max_width=70)

    for fqn, issues in report.issues().items():
        if not issues:
            table.add_row("[green]✓[/green]", fqn, "", "[dim]no issues[/dim]")
            continue
        for issue in issues:
            table.add_row(severity_icon(issue.max_severity()), fqn, "", issue.message)
            for container, subs in issue.sub_issues.items():
                for sub in subs:
                    table.add_row(severity_icon(sub.severity), "", container, f"  {sub.message}")
    return table


def summary_line(report: IssueCollector) -> str:
    counts = report.summary()
    parts = []
    if counts[Severity.ERROR]:
        parts.append(f"[red]{counts[Severity.ERROR]} error(s)[/red]")
    if counts[Severity.WARNING]:
        parts.append(f"[yellow]{counts[Severity.WARNING]} warning(s)[/yellow]")
    if counts[Severity.INFO]:
        parts.append(f"[blue]{counts[Severity.INFO]} info(s)[/blue]")
    scanned = f"{len(report)} pod(s) linted"
    overall = styled_severity(report.max_severity_overall())
    if not parts:
        return f"{scanned}: [green]all clear[/green]"
    return f"{scanned}: {', '.join(parts)} (worst: {overall})"

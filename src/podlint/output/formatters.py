"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json

import yaml
from rich.console import Console

from podlint.core.issues import IssueCollector

console = Console()


def output_report(report: IssueCollector, fmt: str, note: str = "") -> None:
    """Render a report; ``note`` flags a run that could not complete."""
    if fmt == "json":
        data = {"pods": report.to_dict()}
        if note:
            data["note"] = note
        console.print_json(json.dumps(data, indent=2))
    elif fmt == "yaml":
        data = {"pods": report.to_dict()}
        if note:
            data["note"] = note
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        from podlint.output.tables import report_table, summary_line
        console.print(report_table(report))
        console.print(f"\n{summary_line(report)}")
        if note:
            console.print(f"[red bold]Note:[/red bold] {note}")

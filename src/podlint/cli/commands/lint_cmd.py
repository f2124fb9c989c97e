"""podlint lint - Lint pods in the current cluster."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from podlint.cli.options import ConfigOption, ContextOption, NamespaceOption, OutputOption
from podlint.config.settings import load_settings
from podlint.core.errors import ConfigError, LoadError
from podlint.core.k8s_client import K8sClient
from podlint.core.loader import ClusterLoader
from podlint.core.pod_linter import PodLinter
from podlint.output.formatters import output_report

app = typer.Typer()
console = Console(stderr=True)


@app.callback(invoke_without_command=True)
def lint(
    output: Optional[str] = OutputOption,
    namespace: Optional[str] = NamespaceOption,
    context: Optional[str] = ContextOption,
    config_file: Optional[str] = ConfigOption,
    workers: int = typer.Option(1, "--workers", "-w", min=1, help="Pods linted in parallel"),
) -> None:
    """Lint pod status, container best practices and resource utilization."""
    try:
        cfg = load_settings(config_file)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    loader = ClusterLoader(K8sClient(context=context), namespace=namespace, config=cfg)
    linter = PodLinter(loader, utilization_severity=cfg.utilization_severity)

    note = ""
    with console.status("[bold cyan]Linting pods…"):
        try:
            linter.lint(workers=workers)
        except LoadError as e:
            note = f"pods could not be fully evaluated: {e}"

    output_report(linter.report, output or cfg.default_output, note=note)
    if note:
        raise typer.Exit(code=1)

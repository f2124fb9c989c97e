"""Shared CLI options."""

from __future__ import annotations

import typer

OutputOption = typer.Option(None, "--output", "-o", help="Output format: table, json, yaml")
NamespaceOption = typer.Option(None, "--namespace", "-n", help="Kubernetes namespace (default: all)")
ContextOption = typer.Option(None, "--context", help="Kubernetes context name")
ConfigOption = typer.Option(None, "--config", "-c", help="YAML file with lint thresholds")

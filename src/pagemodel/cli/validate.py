"""CLI command: pagemodel validate -- check a page model JSON file."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from pagemodel.model.diagnostic import Severity
from pagemodel.validation import validate as run_validate


@click.command()
@click.argument("modelfile", type=click.Path(exists=True))
def validate(modelfile: str) -> None:
    """Validate a page model JSON file against its version's schema.

    Prints diagnostics (errors, warnings, info) and exits with code 0 if
    no errors are found, or code 1 if there are errors.
    """
    model_path = Path(modelfile)

    # Load
    try:
        data = json.loads(model_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    if not isinstance(data, dict):
        click.echo("Parse error: page model must be a JSON object", err=True)
        sys.exit(1)

    # Validate
    diagnostics = run_validate(data).diagnostics

    if not diagnostics:
        click.echo(f"OK: {model_path.name} is valid (0 diagnostics)")
        sys.exit(0)

    # Print diagnostics grouped by severity
    errors = [d for d in diagnostics if d.severity is Severity.ERROR]
    warnings = [d for d in diagnostics if d.severity is Severity.WARNING]
    infos = [d for d in diagnostics if d.severity is Severity.INFO]

    for diag in diagnostics:
        click.echo(str(diag))

    click.echo()
    click.echo(
        f"Summary: {len(errors)} error(s), {len(warnings)} warning(s), {len(infos)} info"
    )

    if errors:
        sys.exit(1)
    sys.exit(0)

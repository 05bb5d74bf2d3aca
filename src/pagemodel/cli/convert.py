"""CLI command: pagemodel convert -- convert an HTML page to a page model."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from pagemodel.converter import convert as run_convert
from pagemodel.errors import PageModelError
from pagemodel.model.page import PageModelVersion


@click.command()
@click.argument("htmlfile", type=click.Path(exists=True))
@click.option(
    "--target",
    type=click.Choice([v.value for v in PageModelVersion]),
    default=PageModelVersion.V4.value,
    show_default=True,
    help="Page model version to produce",
)
@click.option("--output", "-o", default=None, type=click.Path(), help="Write JSON here instead of stdout")
@click.option("--indent", default=2, show_default=True, help="JSON indentation")
@click.option("--strict", is_flag=True, help="Fail without writing output when the model has schema errors")
def convert(htmlfile: str, target: str, output: str | None, indent: int, strict: bool) -> None:
    """Convert an HTML file (with embedded <style> blocks) into page model JSON.

    Validation diagnostics are printed to stderr; the exit code is 1 when
    the produced model has schema errors or the input is rejected.
    """
    html_path = Path(htmlfile)

    try:
        html = html_path.read_text(encoding="utf-8")
        result = run_convert(html, target=target, strict=strict)
    except PageModelError as exc:
        click.echo(f"Conversion failed: {exc}", err=True)
        sys.exit(1)

    payload = json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)
    if output:
        Path(output).write_text(payload + "\n", encoding="utf-8")
        click.echo(f"Wrote {target} page model to {output}", err=True)
    else:
        click.echo(payload)

    for diag in result.validation.diagnostics:
        click.echo(str(diag), err=True)

    if not result.valid:
        sys.exit(1)

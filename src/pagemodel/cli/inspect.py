"""CLI command: pagemodel inspect -- summarise what a page converts into."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from pagemodel.converter import convert
from pagemodel.errors import PageModelError
from pagemodel.model.page import PageModelVersion
from pagemodel.transforms.sections import classify_section, section_roots


@click.command()
@click.argument("htmlfile", type=click.Path(exists=True))
def inspect(htmlfile: str) -> None:
    """Convert an HTML file and display its structure.

    Shows page metadata, the top-level nodes with their section type,
    design tokens and reusable CSS classes.
    """
    html_path = Path(htmlfile)

    try:
        html = html_path.read_text(encoding="utf-8")
        result = convert(html, target=PageModelVersion.V4)
    except PageModelError as exc:
        click.echo(f"Conversion failed: {exc}", err=True)
        sys.exit(1)

    model = result.model
    nodes = model.nodes or []
    total = sum(1 for root in nodes for _ in root.iter_preorder())

    # Page info
    click.echo(f"Title: {model.meta.title or '(untitled)'}")
    if model.meta.description:
        click.echo(f"Description: {model.meta.description}")
    if model.meta.keywords:
        click.echo(f"Keywords: {', '.join(model.meta.keywords)}")
    click.echo(f"Nodes: {total}")
    click.echo(f"Classes: {len(model.css_classes)}")
    click.echo()

    # Sections
    click.echo("Sections:")
    for index, root in enumerate(section_roots(nodes)):
        section_type = classify_section(root, index)
        parts = [f"  {root.id}", f"<{root.tag}>", f"type={section_type.value}"]
        if root.class_names:
            parts.append(f'class="{" ".join(root.class_names)}"')
        buckets = [b for b in root.styles if b != "desktop"]
        if buckets:
            parts.append(f"responsive={','.join(buckets)}")
        click.echo("  ".join(parts))
    click.echo()

    # Tokens
    tokens = model.design_tokens
    click.echo("Tokens:")
    for name, value in tokens.colors.items():
        click.echo(f"  {name}: {value}")
    for name, token in tokens.typography.items():
        click.echo(f"  {name}: {token.font_size}")
    for name, value in tokens.spacing.items():
        click.echo(f"  {name}: {value}")

    if not result.valid:
        click.echo()
        for diag in result.validation.errors:
            click.echo(str(diag), err=True)
        sys.exit(1)

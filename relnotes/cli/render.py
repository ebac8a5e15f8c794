"""Render command implementation."""

import json
import sys

import click
from pydantic import ValidationError

from ..config import FilterOptions
from ..exceptions import RelnotesError
from ..markdown import to_markdown
from ..releasenote import build_release_notes


def merge_options(base: FilterOptions, **overrides) -> FilterOptions:
    """Apply command line values on top of the configured filter options."""
    data = base.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return FilterOptions(**data)


@click.command()
@click.argument('repo')
@click.option('--after', '-a', help='Only show releases after this date (YYYY-MM-DD, -Nw or -Nm)')
@click.option('--skip-sections', help='Regex pattern of section headings to leave out')
@click.option('--skip-lines', help='Regex pattern of list items to leave out')
@click.option('--remove-empty-sections/--keep-empty-sections', default=None,
              help='Remove sections that are empty after filtering')
@click.option('--format', '-f', 'output_format', type=click.Choice(['json', 'markdown']),
              default='markdown', show_default=True, help='Output format')
@click.option('--output', '-o', help='Write to file instead of stdout')
@click.option('--refresh', is_flag=True, help='Ignore cached release data')
@click.pass_context
def render(ctx, repo, after, skip_sections, skip_lines, remove_empty_sections,
           output_format, output, refresh):
    """Render consolidated release notes of REPO (org/repo)."""

    # Import here to avoid circular dependency
    from .main import create_client

    logger = ctx.obj['logger']

    try:
        options = merge_options(
            ctx.obj['base_config'].options,
            after=after,
            skip_sections=skip_sections,
            skip_lines=skip_lines,
            remove_empty_sections=remove_empty_sections,
        )
        client = create_client(ctx)
        logger.info(f"Rendering release notes for {repo}")
        nodes = build_release_notes(repo, client, options, refresh=refresh)
    except (RelnotesError, ValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_format == 'json':
        content = json.dumps(nodes, indent=2, ensure_ascii=False) + "\n"
    else:
        content = to_markdown(nodes)

    if output:
        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            click.echo(f"Error writing to file {output}: {e}", err=True)
            sys.exit(1)
        click.echo(f"Release notes saved to: {output}")
    else:
        click.echo(content, nl=False)

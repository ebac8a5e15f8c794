"""Main CLI entry point for relnotes."""

import logging
import sys

import click
from pydantic import ValidationError

from .. import __version__
from ..config import get_config, create_sample_config
from ..exceptions import RelnotesError
from ..github import GitHubClient, ReleaseCache
from .render import render


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config-file', '-c', help='Path to JSON configuration file')
@click.version_option(version=__version__, prog_name="relnotes")
@click.pass_context
def cli(ctx, debug, config_file):
    """relnotes - consolidated release notes for GitHub repositories."""

    # Setup logging
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        base_config = get_config(config_file)
    except (RelnotesError, ValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ctx.ensure_object(dict)
    ctx.obj['base_config'] = base_config
    ctx.obj['logger'] = logging.getLogger('relnotes')


def create_client(ctx):
    """Create GitHub client from the loaded configuration."""
    return GitHubClient(ctx.obj['base_config'], ctx.obj['logger'])


@cli.command()
@click.option('--path', '-p', default='relnotes.json', help='Path for the config file')
def init_config(path):
    """Create a sample configuration file."""
    try:
        create_sample_config(path)
    except OSError as e:
        click.echo(f"Error creating config file: {e}", err=True)
        sys.exit(1)
    click.echo(f"Sample configuration file created at: {path}")
    click.echo("Please edit the file and add your GitHub token and filter options.")


@cli.command()
@click.pass_context
def clear_cache(ctx):
    """Delete the cached release data."""
    cache = ReleaseCache(ctx.obj['base_config'].cache_file)
    if cache.clear():
        click.echo(f"Removed {cache.path}")
    else:
        click.echo("Cache is already empty")


@cli.command()
def version():
    """Show version information."""
    click.echo(f"relnotes version {__version__}")


# Add subcommands
cli.add_command(render)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()

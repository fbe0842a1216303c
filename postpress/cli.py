"""Command-line interface for postpress.

This module defines the CLI using the Click framework. Running ``postpress``
with no arguments builds the site found in the current working directory.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__


@click.command()
@click.version_option(version=__version__, prog_name="postpress")
def cli():
    """Build the blog in the current directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(project_root)
    except BuildError as exc:
        # Display user-friendly error message
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(
            click.style(f"  File: {_display_path(exc.source_path, project_root)}", fg="yellow"),
            err=True,
        )
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(f"Built {len(result.posts)} posts into {result.output_dir}")


def _display_path(path: Path, project_root: Path) -> Path:
    """Show a path relative to the project when it lies inside it."""
    try:
        return path.relative_to(project_root)
    except ValueError:
        return path


def main():
    """Entry point for the CLI application."""
    cli()

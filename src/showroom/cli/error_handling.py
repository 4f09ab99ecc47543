"""CLI error handling helpers."""

import click

from showroom.domain.errors import DomainError, DuplicateKeyError, PersistenceError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, DuplicateKeyError):
        click.echo("Use 'showroom update' to change an existing model.", err=True)
    ctx.exit(1)


def handle_persistence_error(ctx: click.Context, error: PersistenceError) -> None:
    """Render a storage failure and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    click.echo("The change was not saved. Check the data directory and try again.", err=True)
    ctx.exit(1)

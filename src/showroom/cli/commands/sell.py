"""Sell command."""

import click

from showroom.cli.error_handling import handle_domain_error, handle_persistence_error
from showroom.domain.errors import DomainError, PersistenceError
from showroom.utils.amount_parser import format_price


@click.command("sell")
@click.argument("brand")
@click.argument("model")
@click.pass_context
def sell_model(ctx, brand: str, model: str):
    """Sell one unit of a model at its current price.

    Examples:
        showroom sell Toyota Corolla
    """
    service = ctx.obj["service"]

    try:
        result = service.sell(brand, model)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)

    entry = result.entry
    click.echo(f"Sold {entry.brand} {entry.model} for Rs {format_price(result.sale.sale_price)}")
    click.echo(f"Remaining stock: {entry.quantity}")


def register_commands(cli):
    """Register sell command with main CLI."""
    cli.add_command(sell_model)

"""Catalog browsing and search commands."""

import click

from showroom.cli.error_handling import handle_domain_error
from showroom.domain.entities import CatalogEntry
from showroom.utils.amount_parser import format_price, parse_amount


def echo_table(entries: list[CatalogEntry]) -> None:
    """Print catalog entries as a table."""
    click.echo(f"{'Brand':15s} | {'Model':20s} | {'Price (Rs)':>14s} | {'Qty':>4s}")
    click.echo("-" * 64)
    for entry in entries:
        click.echo(
            f"{entry.brand:15s} | {entry.model:20s} | {format_price(entry.price):>14s} | {entry.quantity:4d}"
        )


@click.command("brands")
@click.pass_context
def list_brands(ctx):
    """List all brands in the catalog."""
    service = ctx.obj["service"]

    brands = service.all_brands()
    if not brands:
        click.echo("No models in the catalog.")
        return

    for brand in brands:
        click.echo(brand)


@click.command("list")
@click.option("--brand", help="Only show models of this brand")
@click.pass_context
def list_models(ctx, brand: str | None):
    """List catalog models, sorted by brand and model."""
    service = ctx.obj["service"]

    entries = service.entries_for_brand(brand) if brand else list(service.all_entries())
    if not entries:
        click.echo(f"No models found for brand '{brand}'." if brand else "No models in the catalog.")
        return

    echo_table(sorted(entries, key=lambda entry: (entry.brand, entry.model)))


@click.command("search")
@click.argument("text", required=False, default="")
@click.option("--min-price", help="Minimum price (inclusive)")
@click.option("--max-price", help="Maximum price (inclusive)")
@click.option("--in-stock", is_flag=True, help="Only models with stock left")
@click.pass_context
def search_models(ctx, text: str, min_price: str | None, max_price: str | None, in_stock: bool):
    """Search models by brand or model name and price range.

    Examples:
        showroom search corolla
        showroom search --min-price 10000 --max-price 25000 --in-stock
    """
    service = ctx.obj["service"]

    try:
        low = parse_amount(min_price) if min_price else None
        high = parse_amount(max_price) if max_price else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    entries = service.filter(text, low, high, in_stock)
    if not entries:
        click.echo("No models match the search.")
        return

    echo_table(entries)
    click.echo(f"\n{len(entries)} model{'s' if len(entries) != 1 else ''} found")


def register_commands(cli):
    """Register browsing commands with main CLI."""
    cli.add_command(list_brands)
    cli.add_command(list_models)
    cli.add_command(search_models)

"""Catalog management commands."""

import click

from showroom.cli.error_handling import handle_domain_error, handle_persistence_error
from showroom.domain.entities import CatalogEntry
from showroom.domain.errors import DomainError, PersistenceError
from showroom.utils.amount_parser import format_price, parse_price, parse_quantity


def echo_entry(entry: CatalogEntry, indent: str = "  ") -> None:
    """Print the fields of a catalog entry."""
    click.echo(f"{indent}Price: Rs {format_price(entry.price)}")
    click.echo(f"{indent}Quantity: {entry.quantity}")
    click.echo(f"{indent}Image: {entry.image_path or '(none)'}")


@click.command("add")
@click.argument("brand")
@click.argument("model")
@click.option("--price", required=True, help="Price (e.g., 20000 or 'Rs 20,000.00')")
@click.option("--quantity", required=True, help="Units in stock")
@click.option("--image", "image_source", default="", help="Image URL or local file path")
@click.pass_context
def add_model(ctx, brand: str, model: str, price: str, quantity: str, image_source: str):
    """Add a new model to the catalog.

    Examples:
        showroom add Toyota Corolla --price 20000 --quantity 5
        showroom add Honda Civic --price "Rs 24,500" --quantity 2 --image https://example.com/civic.jpg
    """
    service = ctx.obj["service"]

    try:
        parsed_price = parse_price(price)
        parsed_quantity = parse_quantity(quantity)
    except ValueError as e:
        handle_domain_error(ctx, e)

    try:
        result = service.add_entry(brand, model, parsed_price, parsed_quantity, image_source)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)

    entry = result.entry
    click.echo(f"Added {entry.brand} {entry.model}")
    echo_entry(entry)
    if result.image_failed:
        click.echo(
            "Warning: Could not save image. Please check the URL/path. Model added without image.",
            err=True,
        )


@click.command("update")
@click.argument("brand")
@click.argument("model")
@click.option("--brand", "new_brand", help="New brand name")
@click.option("--model", "new_model", help="New model name")
@click.option("--price", help="New price")
@click.option("--quantity", help="New stock quantity")
@click.option("--image", "image_source", default="", help="New image URL or local file path")
@click.pass_context
def update_model(
    ctx,
    brand: str,
    model: str,
    new_brand: str | None,
    new_model: str | None,
    price: str | None,
    quantity: str | None,
    image_source: str,
):
    """Update an existing model.

    Only the options given are changed.

    Examples:
        showroom update Toyota Corolla --price 21000
        showroom update toyota corolla --model "Corolla Cross" --image ./cross.png
    """
    service = ctx.obj["service"]

    if all(value is None for value in (new_brand, new_model, price, quantity)) and not image_source:
        click.echo("Error: Nothing to update. Give at least one of --brand, --model, --price, --quantity, --image.", err=True)
        ctx.exit(1)

    try:
        parsed_price = parse_price(price) if price is not None else None
        parsed_quantity = parse_quantity(quantity) if quantity is not None else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    try:
        result = service.update_entry(
            brand,
            model,
            new_brand=new_brand,
            new_model=new_model,
            new_price=parsed_price,
            new_quantity=parsed_quantity,
            image_source=image_source,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)

    entry = result.entry
    click.echo(f"Updated {entry.brand} {entry.model}")
    echo_entry(entry)
    if result.image_failed:
        click.echo("Warning: Could not save the new image. Keeping the previous one.", err=True)


@click.command("remove")
@click.argument("brand")
@click.argument("model")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_model(ctx, brand: str, model: str, yes: bool):
    """Remove a model and its image from the catalog.

    Examples:
        showroom remove Toyota Corolla
        showroom remove toyota corolla --yes
    """
    service = ctx.obj["service"]

    try:
        entry = service.require_entry(brand, model)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to remove '{entry.brand} {entry.model}'?"):
        click.echo("Removal cancelled.")
        return

    try:
        removed = service.remove_entry(entry.brand, entry.model)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)

    click.echo(f"Removed {removed.brand} {removed.model}")


@click.command("show")
@click.argument("brand")
@click.argument("model")
@click.pass_context
def show_model(ctx, brand: str, model: str):
    """Show the details of one model."""
    service = ctx.obj["service"]

    try:
        entry = service.require_entry(brand, model)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"{entry.brand} {entry.model}")
    echo_entry(entry)
    if entry.image_path and not service.assets.exists(entry.image_path):
        click.echo("  (image file is missing)")
    click.echo(f"  Status: {'In stock' if entry.in_stock else 'Out of stock'}")


def register_commands(cli):
    """Register catalog commands with main CLI."""
    cli.add_command(add_model)
    cli.add_command(update_model)
    cli.add_command(remove_model)
    cli.add_command(show_model)

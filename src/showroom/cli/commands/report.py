"""Financial report command."""

import click

from showroom.utils.amount_parser import format_price


@click.command("report")
@click.pass_context
def show_report(ctx):
    """Show inventory value, revenue and the best-selling model."""
    service = ctx.obj["service"]

    click.echo("\nKey Financial Reports")
    click.echo("-" * 50)
    click.echo(f"Total current inventory value:  Rs {format_price(service.total_inventory_value())}")
    click.echo(f"Total sales revenue (lifetime): Rs {format_price(service.total_revenue())}")
    click.echo(f"Total units sold:               {service.total_units_sold()} Units")
    click.echo(f"Best selling model:             {service.best_selling_model()}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(show_report)

"""Sales history command."""

import click

from showroom.cli.date_filters import resolve_cli_date_range
from showroom.utils.amount_parser import format_price
from showroom.utils.date_parser import PERIODS

DISPLAY_TIMESTAMP = "%d-%m-%Y %H:%M"


def period_options(func):
    """Attach one flag per named period (--today, --this-month, ...)."""
    for period in reversed(PERIODS):
        func = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Only sales from {period.replace('-', ' ')}",
        )(func)
    return func


@click.command("sales")
@click.option("--start-date", help="Earliest sale date (YYYY-MM-DD or 'last month', ...)")
@click.option("--end-date", help="Latest sale date (inclusive)")
@period_options
@click.pass_context
def list_sales(ctx, start_date: str | None, end_date: str | None, **period_flags: bool):
    """Show the sales history, newest first.

    Examples:
        showroom sales
        showroom sales --this-month
        showroom sales --start-date 2024-01-01 --end-date 2024-03-31
    """
    service = ctx.obj["service"]

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={key.replace("_", "-"): value for key, value in period_flags.items()},
    )

    sales = service.sales_history(start, end)
    if not sales:
        click.echo("No sales found.")
        return

    click.echo(f"{'Date':16s} | {'Brand':15s} | {'Model':20s} | {'Price (Rs)':>14s}")
    click.echo("-" * 74)
    for sale in sales:
        click.echo(
            f"{sale.timestamp.strftime(DISPLAY_TIMESTAMP):16s} | {sale.brand:15s} | "
            f"{sale.model:20s} | {format_price(sale.sale_price):>14s}"
        )
    click.echo(f"\nTotal transactions recorded: {len(sales)}")


def register_commands(cli):
    """Register sales command with main CLI."""
    cli.add_command(list_sales)

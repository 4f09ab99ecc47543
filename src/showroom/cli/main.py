"""Main CLI entry point."""

import logging
import sys

import click
import structlog

from showroom.storage.factories import create_inventory_service

# Import and register all commands at module level
from showroom.cli.commands import catalog, view, sell, sales, report


def configure_logging(verbose: bool) -> None:
    """Send structured logs to stderr; warnings only unless verbose."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    help="Directory holding inventory.csv, sales_log.csv and images/ (overrides SHOWROOM_DATA_DIR)",
    envvar="SHOWROOM_DATA_DIR",
)
@click.option("--verbose", "-v", is_flag=True, help="Show informational log messages")
@click.pass_context
def cli(ctx, data_dir: str | None, verbose: bool):
    """Showroom - Vehicle catalog and sales tracking.

    Keep track of the models on offer with their price, stock and picture,
    record sales and see how the business is doing.
    """
    ctx.ensure_object(dict)

    # Load data only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        configure_logging(verbose)
        ctx.obj["service"] = create_inventory_service(data_dir=data_dir)


# Register all commands
catalog.register_commands(cli)
view.register_commands(cli)
sell.register_commands(cli)
sales.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

"""Main CLI entry point."""

import logging

import click
from laundryops.database.factories import DB_PATH_ENVVAR, create_sqlite_database
from laundryops.domain.access import Role

# Import and register all commands at module level
from laundryops.cli.commands import (
    seed,
    category,
    item,
    log_book,
    invoice,
    order,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENVVAR} environment variable)",
    envvar=DB_PATH_ENVVAR,
)
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    default=Role.ADMIN.value,
    show_default=True,
    envvar="LAUNDRYOPS_ROLE",
    help="Role of the acting user; controls which commands are allowed",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LAUNDRYOPS_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, role: str, log_level: str):
    """Laundryops - hotel laundry back office.

    Manage item categories, the linen log book, invoices derived from it,
    and guest laundry orders.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["role"] = Role(role.lower())

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
seed.register_commands(cli)
category.register_commands(cli)
item.register_commands(cli)
log_book.register_commands(cli)
invoice.register_commands(cli)
order.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

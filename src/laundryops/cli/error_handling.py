"""CLI error handling helpers."""

import click

from laundryops.domain.access import require_access
from laundryops.domain.errors import AccessDeniedError


def handle_domain_error(ctx: click.Context, error: Exception) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def check_access(ctx: click.Context, area: str) -> None:
    """Exit with failure unless the acting role may use ``area``."""
    try:
        require_access(ctx.obj["role"], area)
    except AccessDeniedError as e:
        handle_domain_error(ctx, e)

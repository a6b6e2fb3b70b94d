"""CLI error handling helpers."""

import click

from agencybooks.domain.errors import DomainError
from agencybooks.domain.store import SnapshotStore


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def warn_if_unsaved(store: SnapshotStore) -> None:
    """Tell the operator when the last change was kept only in memory."""
    if store.last_save_error is not None:
        click.echo(f"Warning: change was not saved: {store.last_save_error}", err=True)


def format_money(amount) -> str:
    """Render an amount with thousands separators and two places."""
    return f"{amount:,.2f}"

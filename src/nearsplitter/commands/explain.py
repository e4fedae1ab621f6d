"""
Commands Explain - Translate a raw contract or node error.

Useful when a wallet or explorer shows an opaque panic message.
"""

from __future__ import annotations

import sys

import click

from ..errors import decode_near_error, is_not_found_error


@click.command()
@click.argument("message", required=False)
def explain(message: str | None) -> None:
    """Show the user-facing text for MESSAGE (reads stdin when omitted)."""
    if message is None:
        message = sys.stdin.read().strip() or None

    click.echo(decode_near_error(message))
    if message is not None and is_not_found_error(message):
        click.secho("  (stale reference: the item no longer exists)", dim=True)

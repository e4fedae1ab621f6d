"""
Commands Circle - Show a circle and where its members stand.

Reads from the splitter contract:
- circle metadata and members
- net balances per member
- suggested settlement transfers
- confirmation progress while a settlement is running
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass, field
from typing import Optional

import click

from ..contract import SplitterContract
from ..errors import is_not_found_error
from ..models import BalanceView, Circle, SettlementSuggestion
from ..rpc.errors import NearRpcError
from ..utils import format_near_amount, shorten_account_id
from . import connection_options, fail, resolve_config


@dataclass
class CircleReport:
    circle: Circle
    balances: list[BalanceView] = field(default_factory=list)
    suggestions: list[SettlementSuggestion] = field(default_factory=list)
    confirmations: list[str] = field(default_factory=list)


async def load_report(contract: SplitterContract, circle_id: str, with_balances: bool) -> CircleReport:
    report = CircleReport(circle=await contract.get_circle(circle_id))
    if with_balances:
        report.balances = await contract.compute_balances(circle_id)
        report.suggestions = await contract.suggest_settlements(circle_id)
    if report.circle.state != "open":
        report.confirmations = await contract.get_confirmations(circle_id)
    return report


def _print_report(report: CircleReport) -> None:
    circle = report.circle
    click.echo(f"  Circle {circle.id}")
    click.echo("  ─────────────────────────────")
    click.echo(f"  Name:        {circle.name}")
    click.echo(f"  Owner:       {circle.owner}")
    click.echo(f"  State:       {circle.state}")
    click.echo(f"  Membership:  {'open' if circle.membership_open else 'closed'}")
    click.echo(f"  Members ({len(circle.members)}):")
    for member in circle.members:
        click.echo(f"    - {member}")

    if report.confirmations:
        click.echo(f"  Confirmed:   {len(report.confirmations)}/{len(circle.members)}")

    if report.balances:
        click.echo("")
        click.echo("  Balances:")
        for balance in report.balances:
            color = "red" if balance.is_debtor else "green"
            amount = format_near_amount(balance.net)
            click.echo(f"    {shorten_account_id(balance.account_id, 12):<28}" + click.style(f"{amount} NEAR", fg=color))

    if report.suggestions:
        click.echo("")
        click.echo("  Suggested settlements:")
        for suggestion in report.suggestions:
            token = suggestion.token or "NEAR"
            click.echo(
                f"    {suggestion.from_account} -> {suggestion.to_account}: "
                f"{format_near_amount(suggestion.amount)} {token}"
            )


@click.command()
@click.argument("circle_id")
@click.option("--balances/--no-balances", default=True, help="Also show balances and settlements")
@connection_options
def circle(
    circle_id: str,
    balances: bool,
    network: str,
    contract_id: Optional[str],
    rpc_url: Optional[str],
    timeout: Optional[float],
) -> None:
    """Show circle CIRCLE_ID with balances and suggested settlements."""
    config = resolve_config(network, contract_id, rpc_url, timeout)

    async def _run() -> CircleReport:
        async with SplitterContract.from_config(config) as contract:
            return await load_report(contract, circle_id, balances)

    try:
        report = asyncio.run(_run())
    except NearRpcError as exc:
        if is_not_found_error(exc):
            click.secho(f"Circle {circle_id} no longer exists.", fg="yellow")
            sys.exit(1)
        fail(exc)
    except ValueError as exc:
        click.secho(f"ERROR: Unexpected contract response: {exc}", fg="red", err=True)
        sys.exit(1)

    _print_report(report)

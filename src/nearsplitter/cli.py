"""
nearsplitter CLI

Command-line interface for reading near splitter contract state over
NEAR JSON-RPC, with automatic failover between RPC nodes.

Commands:
  info     - Show network configuration and RPC endpoint order
  view     - Call any read-only contract method
  circle   - Show a circle, balances and suggested settlements
  explain  - Translate a raw contract/node error into plain language
"""

from __future__ import annotations

import sys
from typing import Optional

import click
from loguru import logger

from . import __version__
from .commands import connection_options, resolve_config


# ============ Banner ============


def _print_banner() -> None:
    border = click.style("  ◆ ═══════════════════════════════════════ ◆", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo()
    click.echo(
        click.style("        N E A R S P L I T T E R", fg="bright_white", bold=True)
        + click.style(f"    v{__version__}", dim=True)
    )
    click.secho("        ─── shared expenses, on chain ───", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo()


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format="<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> {message}")
        logger.enable("nearsplitter")
    else:
        logger.disable("nearsplitter")


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="nearsplitter")
@click.option("-v", "--verbose", is_flag=True, help="Log every RPC attempt to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """nearsplitter — read-only client for the near splitter contract."""
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.circle import circle
from .commands.explain import explain
from .commands.view import view

cli.add_command(view)
cli.add_command(circle)
cli.add_command(explain)


@cli.command()
@connection_options
def info(
    network: str,
    contract_id: Optional[str],
    rpc_url: Optional[str],
    timeout: Optional[float],
) -> None:
    """Show network configuration and RPC endpoint order."""
    config = resolve_config(network, contract_id, rpc_url, timeout)

    click.echo(f"nearsplitter v{__version__}")
    click.echo(f"  Network:   {config.network.network_id}")
    click.echo(f"  Contract:  {config.contract_id or click.style('(not set)', fg='yellow')}")
    click.echo(f"  Explorer:  {config.network.explorer_url}")
    click.echo(f"  Timeout:   {config.timeout if config.timeout is not None else 'client default'}")
    click.echo("  Endpoints:")
    for index, url in enumerate(config.endpoints):
        role = "primary" if index == 0 else "fallback"
        click.echo(f"    {index + 1}. {url} ({role})")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

"""
Commands - CLI subcommands for reading splitter contract state.

Each module exposes one click command; ``nearsplitter.cli`` registers them.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, NoReturn

import click

from ..config import AppConfig, load_config
from ..errors import decode_near_error
from ..rpc.errors import NearRpcError


def connection_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach --network/--contract-id/--rpc-url/--timeout to a command."""
    options = [
        click.option(
            "--network",
            envvar="NEAR_NETWORK",
            default="testnet",
            show_default=True,
            help="NEAR network (testnet or mainnet)",
        ),
        click.option("--contract-id", envvar="NEAR_CONTRACT_ID", default=None, help="Splitter contract account"),
        click.option("--rpc-url", envvar="NEAR_RPC_URL", default=None, help="Preferred RPC node URL"),
        click.option("--timeout", envvar="NEAR_RPC_TIMEOUT", type=float, default=None, help="Request timeout (s)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_config(network: str, contract_id: str | None, rpc_url: str | None, timeout: float | None) -> AppConfig:
    try:
        return load_config(network=network, contract_id=contract_id, rpc_url=rpc_url, timeout=timeout)
    except NearRpcError as exc:
        fail(exc)


def fail(exc: Exception) -> NoReturn:
    click.secho(f"ERROR: {decode_near_error(exc)}", fg="red", err=True)
    sys.exit(getattr(exc, "exit_code", 1))

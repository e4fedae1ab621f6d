"""
Commands View - Call any read-only contract method.

Prints the decoded JSON return value.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Optional

import click

from ..contract import SplitterContract
from ..rpc.errors import NearRpcError
from . import connection_options, fail, resolve_config


@click.command()
@click.argument("method_name")
@click.option("--args", "args_json", default="{}", help="Method args as a JSON object")
@connection_options
def view(
    method_name: str,
    args_json: str,
    network: str,
    contract_id: Optional[str],
    rpc_url: Optional[str],
    timeout: Optional[float],
) -> None:
    """Call METHOD_NAME on the splitter contract and print the result."""
    try:
        args = json.loads(args_json)
        if not isinstance(args, dict):
            raise ValueError("Args must be a JSON object")
    except (json.JSONDecodeError, ValueError) as exc:
        click.secho(f"ERROR: Invalid args: {exc}", fg="red", err=True)
        sys.exit(1)

    config = resolve_config(network, contract_id, rpc_url, timeout)

    async def _run() -> Any:
        async with SplitterContract.from_config(config) as contract:
            return await contract.view(method_name, args)

    try:
        result = asyncio.run(_run())
    except NearRpcError as exc:
        fail(exc)

    click.echo(json.dumps(result, indent=2, ensure_ascii=False))

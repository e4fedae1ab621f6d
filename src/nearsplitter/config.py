"""
Network configuration.

Static per-network settings plus the environment overrides the rest of
the package reads. Nothing here is cached: call ``load_config()`` when
you need the current values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .rpc.endpoints import resolve_endpoints
from .rpc.errors import ConfigurationError

DEFAULT_NETWORK = "testnet"


@dataclass(frozen=True)
class NetworkConfig:
    network_id: str
    node_url: str
    wallet_url: str
    helper_url: str
    explorer_url: str
    fallback_node_urls: tuple[str, ...] = field(default_factory=tuple)

    def endpoints(self, override: Optional[str] = None) -> tuple[str, ...]:
        return resolve_endpoints(self.node_url, self.fallback_node_urls, override)


NETWORKS: Mapping[str, NetworkConfig] = {
    "testnet": NetworkConfig(
        network_id="testnet",
        node_url="https://rpc.testnet.fastnear.com",
        wallet_url="https://app.mynearwallet.com",
        helper_url="https://helper.testnet.near.org",
        explorer_url="https://testnet.nearblocks.io",
        fallback_node_urls=(
            "https://test.rpc.fastnear.com",
            "https://rpc.testnet.pagoda.co",
            "https://rpc.testnet.near.org",
        ),
    ),
    "mainnet": NetworkConfig(
        network_id="mainnet",
        node_url="https://rpc.mainnet.near.org",
        wallet_url="https://app.mynearwallet.com",
        helper_url="https://helper.mainnet.near.org",
        explorer_url="https://nearblocks.io",
        fallback_node_urls=(
            "https://rpc.mainnet.pagoda.co",
            "https://near-mainnet.lava.build",
            "https://mainnet.rpc.fastnear.com",
        ),
    ),
}


@dataclass(frozen=True)
class AppConfig:
    network: NetworkConfig
    contract_id: Optional[str] = None
    rpc_url: Optional[str] = None
    timeout: Optional[float] = None

    @property
    def endpoints(self) -> tuple[str, ...]:
        return self.network.endpoints(self.rpc_url)

    def require_contract_id(self) -> str:
        if not self.contract_id:
            raise ConfigurationError(
                "Missing required env var NEAR_CONTRACT_ID (or pass --contract-id)"
            )
        return self.contract_id


def get_network(name: Optional[str] = None) -> NetworkConfig:
    key = (name or DEFAULT_NETWORK).strip().lower()
    try:
        return NETWORKS[key]
    except KeyError:
        allowed = ", ".join(NETWORKS)
        raise ConfigurationError(
            f'Unsupported NEAR network "{key}". Expected one of: {allowed}'
        ) from None


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"NEAR_RPC_TIMEOUT must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError("NEAR_RPC_TIMEOUT must be positive")
    return value


def load_config(
    env: Optional[Mapping[str, str]] = None,
    *,
    network: Optional[str] = None,
    contract_id: Optional[str] = None,
    rpc_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> AppConfig:
    """
    Read configuration from the environment.

    Explicit keyword arguments win over environment variables.

    Env:
        NEAR_NETWORK: ``testnet`` (default) or ``mainnet``
        NEAR_CONTRACT_ID: Account id of the splitter contract
        NEAR_RPC_URL: Preferred RPC node (default node becomes a fallback)
        NEAR_RPC_TIMEOUT: Per-request timeout in seconds
    """
    env = os.environ if env is None else env
    return AppConfig(
        network=get_network(network or env.get("NEAR_NETWORK")),
        contract_id=contract_id or env.get("NEAR_CONTRACT_ID") or None,
        rpc_url=rpc_url or env.get("NEAR_RPC_URL") or None,
        timeout=timeout if timeout is not None else _parse_timeout(env.get("NEAR_RPC_TIMEOUT")),
    )

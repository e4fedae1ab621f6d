from __future__ import annotations

from typing import Iterable, Optional

from .errors import ConfigurationError


def resolve_endpoints(
    default_primary: str,
    fallbacks: Iterable[str],
    override: Optional[str] = None,
) -> tuple[str, ...]:
    """
    Build the ordered candidate list for one network.

    The primary is the override when one is set, otherwise the default.
    An overridden default is kept as the first fallback so the node
    operator does not lose redundancy by configuring a preferred URL.

    Raises:
        ConfigurationError: If no URL at all is configured.
    """
    override = (override or "").strip() or None
    primary = override or default_primary

    ordered = [primary]
    if override and default_primary:
        ordered.append(default_primary)
    ordered.extend(fallbacks)

    seen: set[str] = set()
    endpoints: list[str] = []
    for url in ordered:
        if not url or url in seen:
            continue
        seen.add(url)
        endpoints.append(url)

    if not endpoints:
        raise ConfigurationError("No RPC endpoints configured")
    return tuple(endpoints)

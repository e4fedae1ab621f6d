"""Decide whether a failed attempt is worth repeating on another node."""

from __future__ import annotations

from typing import Union

import httpx

from .errors import ClassifiedError, RpcProtocolError

# 403 is kept here on the assumption that it is an edge/CDN block.
# It can also be a permanent authorization failure.
RECOVERABLE_STATUSES = frozenset({403, 408, 425, 429})

# DNS, refused, reset, offline, timeouts.
RECOVERABLE_EXCEPTIONS = (httpx.TransportError, OSError)


def is_recoverable_status(status: int) -> bool:
    return status in RECOVERABLE_STATUSES or 500 <= status <= 599


def is_recoverable_exception(exc: BaseException) -> bool:
    return isinstance(exc, RECOVERABLE_EXCEPTIONS)


def classify(signal: Union[int, BaseException]) -> bool:
    """
    Map a failure signal to a recoverable / non-recoverable verdict.

    Args:
        signal: An HTTP status code, a transport exception, or an
            already-classified error.

    Returns:
        True if trying the next endpoint may help.
    """
    if isinstance(signal, bool):
        raise TypeError("classify() expects a status code or exception")
    if isinstance(signal, int):
        return is_recoverable_status(signal)
    if isinstance(signal, RpcProtocolError):
        return False
    if isinstance(signal, ClassifiedError):
        return signal.recoverable
    return is_recoverable_exception(signal)

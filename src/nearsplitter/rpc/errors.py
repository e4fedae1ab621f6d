"""
Error types for the RPC layer.

Every failure carries its classification as structured fields
(endpoint, recoverability, HTTP status) instead of attributes bolted
onto a generic exception after the fact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class NearRpcError(RuntimeError):
    exit_code: int = 1


class ConfigurationError(NearRpcError):
    exit_code = 2


class EncodingUnavailable(NearRpcError):
    exit_code = 3


class ClassifiedError(NearRpcError):
    """A failure observed against a single endpoint."""

    kind: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        endpoint: Optional[str] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.endpoint = endpoint
        self.recoverable = recoverable


class TransportFailure(ClassifiedError):
    kind = "transport"

    def __init__(
        self,
        message: str,
        *,
        endpoint: Optional[str] = None,
        transport_kind: str = "network",
    ) -> None:
        super().__init__(message, endpoint=endpoint, recoverable=True)
        self.transport_kind = transport_kind


class HttpStatusError(ClassifiedError):
    kind = "http"

    def __init__(
        self,
        status: int,
        body: str = "",
        *,
        endpoint: Optional[str] = None,
        recoverable: bool = False,
    ) -> None:
        message = f"RPC error: {status} {body}".rstrip()
        super().__init__(message, endpoint=endpoint, recoverable=recoverable)
        self.status = status
        self.body = body


class RpcProtocolError(ClassifiedError):
    """The node answered 2xx with an ``error`` payload. Never recoverable."""

    kind = "rpc"

    def __init__(self, message: str, *, endpoint: Optional[str] = None, data: object = None) -> None:
        super().__init__(message, endpoint=endpoint, recoverable=False)
        self.data = data


class MalformedResponse(ClassifiedError):
    kind = "malformed"

    def __init__(self, message: str, *, endpoint: Optional[str] = None) -> None:
        super().__init__(message, endpoint=endpoint, recoverable=True)


class DecodeError(ClassifiedError):
    """The result bytes were retrieved but are not valid JSON."""

    kind = "decode"
    exit_code = 5

    def __init__(self, message: str, *, endpoint: Optional[str] = None) -> None:
        super().__init__(message, endpoint=endpoint, recoverable=False)


@dataclass(frozen=True)
class AttemptError:
    endpoint: str
    message: str
    recoverable: bool
    kind: str
    http_status: Optional[int] = None
    transport_kind: Optional[str] = None

    @classmethod
    def from_error(cls, error: ClassifiedError) -> "AttemptError":
        return cls(
            endpoint=error.endpoint or "",
            message=error.message,
            recoverable=error.recoverable,
            kind=error.kind,
            http_status=getattr(error, "status", None),
            transport_kind=getattr(error, "transport_kind", None),
        )


class AggregatedFailure(NearRpcError):
    exit_code = 4

    def __init__(self, attempts: tuple[AttemptError, ...]) -> None:
        if not attempts:
            raise ValueError("AggregatedFailure requires at least one attempt")
        self.attempts = attempts
        self.last_error = attempts[-1]
        tried = ", ".join(attempt.endpoint for attempt in attempts)
        super().__init__(
            f"RPC call failed after {len(attempts)} endpoint(s) tried: {tried}. "
            f"Last error: {self.last_error.message}"
        )

    @property
    def endpoints_tried(self) -> list[str]:
        return [attempt.endpoint for attempt in self.attempts]

    @property
    def status(self) -> Optional[int]:
        return self.last_error.http_status


__all__ = [
    "AggregatedFailure",
    "AttemptError",
    "ClassifiedError",
    "ConfigurationError",
    "DecodeError",
    "EncodingUnavailable",
    "HttpStatusError",
    "MalformedResponse",
    "NearRpcError",
    "RpcProtocolError",
    "TransportFailure",
]

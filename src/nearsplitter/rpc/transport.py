"""
JSON-RPC transport with sequential endpoint failover.

One logical call walks the endpoint list in order, starting from the
primary every time. Recoverable failures (network errors, rate limits,
5xx) move on to the next node; anything that says the request itself is
wrong stops the walk immediately.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Iterable, Mapping, Optional

import httpx
from loguru import logger

from .classify import RECOVERABLE_EXCEPTIONS, is_recoverable_status
from .codec import decode_result, encode_args
from .errors import (
    AggregatedFailure,
    AttemptError,
    ClassifiedError,
    ConfigurationError,
    HttpStatusError,
    MalformedResponse,
    RpcProtocolError,
    TransportFailure,
)

JSONRPC_VERSION = "2.0"
REQUEST_ID = "dontcare"
DEFAULT_FINALITY = "optimistic"

AttemptHook = Callable[[AttemptError], None]


@dataclass(frozen=True)
class RpcRequest:
    method: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def to_envelope(self) -> dict[str, Any]:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": REQUEST_ID,
            "method": self.method,
            "params": dict(self.params),
        }


def _transport_kind(exc: BaseException) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return "timeout"
    if isinstance(exc, httpx.ConnectError):
        return "connect"
    if isinstance(exc, httpx.RemoteProtocolError):
        return "protocol"
    return "network"


def _rpc_error_message(error: Any) -> str:
    """Flatten a JSON-RPC ``error`` object into one line of text."""
    if isinstance(error, str):
        return error
    if not isinstance(error, dict):
        return str(error)

    message = str(error.get("message") or "RPC error")
    data = error.get("data")
    cause = error.get("cause")
    if isinstance(data, str) and data and data not in message:
        message = f"{message}: {data}"
    elif isinstance(cause, dict):
        info = cause.get("info") or {}
        detail = info.get("error_message") if isinstance(info, dict) else None
        detail = detail or cause.get("name")
        if detail and str(detail) not in message:
            message = f"{message}: {detail}"
    return message


class FailoverTransport:
    """
    Execute JSON-RPC calls against an ordered list of NEAR nodes.

    Args:
        endpoints: Candidate URLs, primary first. Not mutated.
        client: Optional shared ``httpx.AsyncClient``; the caller closes
            it. When omitted each call opens its own client and closes it
            before returning.
        timeout: Per-request timeout in seconds. None keeps the httpx
            default.
        attempt_hook: Called with every AttemptError as it is recorded.
        http_transport: httpx transport for the owned client (tests mount
            ``httpx.MockTransport`` here).
    """

    def __init__(
        self,
        endpoints: Iterable[str],
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        attempt_hook: Optional[AttemptHook] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoints = tuple(endpoints)
        if not self.endpoints:
            raise ConfigurationError("FailoverTransport needs at least one endpoint")
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json", **dict(headers or {})}
        self.attempt_hook = attempt_hook
        self.http_transport = http_transport
        self._client = client

    async def __aenter__(self) -> "FailoverTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    @asynccontextmanager
    async def _open_client(self) -> AsyncIterator[httpx.AsyncClient]:
        # An owned client is scoped to a single call.
        if self._client is not None:
            yield self._client
            return
        kwargs: dict[str, Any] = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.http_transport is not None:
            kwargs["transport"] = self.http_transport
        async with httpx.AsyncClient(**kwargs) as client:
            yield client

    async def _attempt(self, client: httpx.AsyncClient, endpoint: str, request: RpcRequest) -> Any:
        try:
            response = await client.post(
                endpoint,
                json=request.to_envelope(),
                headers=self.headers,
            )
        except RECOVERABLE_EXCEPTIONS as exc:
            raise TransportFailure(
                f"Network request failed: {exc}",
                endpoint=endpoint,
                transport_kind=_transport_kind(exc),
            ) from exc

        status = response.status_code
        if not response.is_success:
            raise HttpStatusError(
                status,
                response.text,
                endpoint=endpoint,
                recoverable=is_recoverable_status(status),
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponse(
                "Malformed RPC response: body is not JSON", endpoint=endpoint
            ) from exc
        if not isinstance(payload, dict):
            raise MalformedResponse("Malformed RPC response: not an object", endpoint=endpoint)

        if payload.get("error") is not None:
            raise RpcProtocolError(
                _rpc_error_message(payload["error"]),
                endpoint=endpoint,
                data=payload["error"],
            )

        result = payload.get("result")
        if result is None:
            raise MalformedResponse("Malformed RPC response: missing result", endpoint=endpoint)

        # Older nodes report contract panics inside a successful query result.
        if isinstance(result, dict) and isinstance(result.get("error"), str) and "result" not in result:
            raise RpcProtocolError(result["error"], endpoint=endpoint, data=result)

        return result

    def _record(self, attempts: list[AttemptError], error: ClassifiedError) -> None:
        attempt = AttemptError.from_error(error)
        attempts.append(attempt)
        if self.attempt_hook is not None:
            self.attempt_hook(attempt)

    async def _call(self, method: str, params: Optional[Mapping[str, Any]]) -> tuple[str, Any]:
        request = RpcRequest(method, params or {})
        attempts: list[AttemptError] = []
        total = len(self.endpoints)

        async with self._open_client() as client:
            for index, endpoint in enumerate(self.endpoints, start=1):
                logger.debug(f"RPC {method} -> {endpoint} (attempt {index}/{total})")
                try:
                    return endpoint, await self._attempt(client, endpoint, request)
                except ClassifiedError as error:
                    self._record(attempts, error)
                    if not error.recoverable:
                        logger.error(f"RPC {method} failed on {endpoint}, not retrying: {error.message}")
                        raise AggregatedFailure(tuple(attempts)) from error
                    logger.warning(f"RPC {method} failed on {endpoint}, trying next endpoint: {error.message}")

        failure = AggregatedFailure(tuple(attempts))
        logger.error(str(failure))
        raise failure

    async def call(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Run one JSON-RPC call, failing over between endpoints.

        Returns:
            The ``result`` member of the first successful response.

        Raises:
            AggregatedFailure: When every endpoint failed, or a
                non-recoverable failure stopped the walk early.
        """
        _, result = await self._call(method, params)
        return result

    async def view(
        self,
        contract_id: str,
        method_name: str,
        args: Optional[Mapping[str, Any]] = None,
        finality: str = DEFAULT_FINALITY,
    ) -> Any:
        """
        Call a read-only contract method and decode its JSON return value.

        Raises:
            AggregatedFailure: See ``call``.
            DecodeError: The node answered but the bytes are not JSON.
        """
        endpoint, result = await self._call(
            "query",
            {
                "request_type": "call_function",
                "account_id": contract_id,
                "method_name": method_name,
                "args_base64": encode_args(dict(args or {})),
                "finality": finality,
            },
        )
        return decode_result(result, endpoint=endpoint)

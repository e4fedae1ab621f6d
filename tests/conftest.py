"""Shared fixtures: fake NEAR RPC nodes served through httpx.MockTransport."""

from __future__ import annotations

import contextlib
import json
from typing import Any, AsyncIterator, Callable, Union

import httpx
import pytest

from nearsplitter.rpc.transport import FailoverTransport

Route = Callable[[httpx.Request], httpx.Response]


def result_bytes(value: Any) -> list[int]:
    return list(json.dumps(value).encode("utf-8"))


class FakeNodes:
    """
    Answers JSON-RPC POSTs by host name.

    Each host holds a queue of routes; the last route repeats once the
    queue is drained. ``hits`` records every host contacted, in order.
    """

    def __init__(self) -> None:
        self.routes: dict[str, list[Route]] = {}
        self.hits: list[str] = []
        self.bodies: list[dict[str, Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.hits.append(host)
        self.bodies.append(json.loads(request.content))
        queue = self.routes.get(host)
        if not queue:
            raise httpx.ConnectError(f"no route to {host}", request=request)
        route = queue.pop(0) if len(queue) > 1 else queue[0]
        return route(request)

    def add(self, host: str, route: Route) -> "FakeNodes":
        self.routes.setdefault(host, []).append(route)
        return self

    def ok(self, host: str, value: Any = None, *, raw: Union[list[int], None] = None) -> "FakeNodes":
        data = raw if raw is not None else result_bytes(value)
        body = {
            "jsonrpc": "2.0",
            "id": "dontcare",
            "result": {"result": data, "logs": [], "block_height": 1, "block_hash": "h"},
        }
        return self.add(host, lambda request: httpx.Response(200, json=body))

    def status(self, host: str, code: int, text: str = "") -> "FakeNodes":
        return self.add(host, lambda request: httpx.Response(code, text=text))

    def rpc_error(self, host: str, message: str, **extra: Any) -> "FakeNodes":
        body = {"jsonrpc": "2.0", "id": "dontcare", "error": {"message": message, **extra}}
        return self.add(host, lambda request: httpx.Response(200, json=body))

    def payload(self, host: str, body: Any) -> "FakeNodes":
        return self.add(host, lambda request: httpx.Response(200, json=body))

    def down(self, host: str) -> "FakeNodes":
        def _raise(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        return self.add(host, _raise)

    def count(self, host: str) -> int:
        return self.hits.count(host)


@pytest.fixture()
def nodes() -> FakeNodes:
    return FakeNodes()


@pytest.fixture()
def fake_transport(nodes: FakeNodes) -> Callable[..., Any]:
    """Build a FailoverTransport whose HTTP traffic goes to ``nodes``."""

    @contextlib.asynccontextmanager
    async def _factory(endpoints: list[str], **kwargs: Any) -> AsyncIterator[FailoverTransport]:
        async with FailoverTransport(
            endpoints, http_transport=httpx.MockTransport(nodes), **kwargs
        ) as transport:
            yield transport

    return _factory

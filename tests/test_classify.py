"""Tests for recoverable / non-recoverable failure classification."""

from __future__ import annotations

import httpx
import pytest

from nearsplitter.rpc.classify import classify, is_recoverable_exception, is_recoverable_status
from nearsplitter.rpc.errors import DecodeError, HttpStatusError, RpcProtocolError, TransportFailure


class TestStatusCodes:
    @pytest.mark.parametrize("status", [403, 408, 425, 429, 500, 502, 503, 504, 599])
    def test_recoverable(self, status: int) -> None:
        assert is_recoverable_status(status) is True
        assert classify(status) is True

    @pytest.mark.parametrize("status", [400, 401, 404, 405, 409, 410, 422, 451])
    def test_non_recoverable(self, status: int) -> None:
        assert is_recoverable_status(status) is False
        assert classify(status) is False


class TestExceptions:
    def test_network_errors_are_recoverable(self) -> None:
        request = httpx.Request("POST", "https://rpc.test")
        assert is_recoverable_exception(httpx.ConnectError("refused", request=request))
        assert is_recoverable_exception(httpx.ReadTimeout("slow", request=request))
        assert is_recoverable_exception(ConnectionResetError())

    def test_other_exceptions_are_not(self) -> None:
        assert classify(ValueError("bad")) is False

    def test_rpc_protocol_error_never_recoverable(self) -> None:
        assert classify(RpcProtocolError("Server error: 429 Too Many Requests")) is False

    def test_classified_errors_keep_their_verdict(self) -> None:
        assert classify(TransportFailure("offline")) is True
        assert classify(HttpStatusError(503, recoverable=True)) is True
        assert classify(DecodeError("bad json")) is False

    def test_bool_rejected(self) -> None:
        with pytest.raises(TypeError):
            classify(True)

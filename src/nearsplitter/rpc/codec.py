"""
Wire codec for contract view calls.

Arguments travel as base64 of the UTF-8 JSON text; results come back as
a list of byte values holding UTF-8 JSON text (or nothing at all).
"""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence, Union

from ..utils import base64_decode, base64_encode
from .errors import DecodeError, EncodingUnavailable

ResultBytes = Union[bytes, bytearray, Sequence[int]]


def encode_args(args: Any) -> str:
    """
    Serialize view-call arguments for ``args_base64``.

    Raises:
        EncodingUnavailable: If ``args`` is not JSON-serializable.
    """
    try:
        text = json.dumps(args, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise EncodingUnavailable(f"Cannot encode view arguments: {exc}") from exc
    return base64_encode(text.encode("utf-8"))


def decode_args(payload: str) -> Any:
    return json.loads(base64_decode(payload).decode("utf-8"))


def _result_bytes(result: Any) -> Optional[bytes]:
    if result is None:
        return None
    if isinstance(result, dict):
        return _result_bytes(result.get("result"))
    if isinstance(result, (bytes, bytearray)):
        return bytes(result)
    if isinstance(result, (list, tuple)):
        try:
            return bytes(result)
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"Result is not a byte sequence: {exc}") from exc
    raise DecodeError(f"Unexpected result payload type: {type(result).__name__}")


def decode_result(result: Any, *, endpoint: Optional[str] = None) -> Any:
    """
    Decode a view-call result.

    Args:
        result: The RPC ``result`` object (``{"result": [...]}``) or the
            byte sequence itself.
        endpoint: Node that produced the payload, for error context.

    Returns:
        The parsed JSON value, or None when the contract returned nothing
        or a literal ``null``.

    Raises:
        DecodeError: If non-empty text is not valid UTF-8 JSON.
    """
    raw = _result_bytes(result)
    if not raw:
        return None

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Result is not valid UTF-8: {exc}", endpoint=endpoint) from exc

    if text == "" or text == "null":
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Result is not valid JSON: {exc}", endpoint=endpoint) from exc

"""
RPC layer for the near splitter contract.

Endpoint resolution, the view-call wire codec, failure classification
and the failover transport. Uses httpx directly instead of
near-api-js style wrappers.
"""

from .classify import classify, is_recoverable_exception, is_recoverable_status
from .codec import decode_args, decode_result, encode_args
from .endpoints import resolve_endpoints
from .errors import (
    AggregatedFailure,
    AttemptError,
    ClassifiedError,
    ConfigurationError,
    DecodeError,
    EncodingUnavailable,
    HttpStatusError,
    MalformedResponse,
    NearRpcError,
    RpcProtocolError,
    TransportFailure,
)
from .transport import DEFAULT_FINALITY, FailoverTransport, RpcRequest

__all__ = [
    "AggregatedFailure",
    "AttemptError",
    "ClassifiedError",
    "ConfigurationError",
    "DEFAULT_FINALITY",
    "DecodeError",
    "EncodingUnavailable",
    "FailoverTransport",
    "HttpStatusError",
    "MalformedResponse",
    "NearRpcError",
    "RpcProtocolError",
    "RpcRequest",
    "TransportFailure",
    "classify",
    "decode_args",
    "decode_result",
    "encode_args",
    "is_recoverable_exception",
    "is_recoverable_status",
    "resolve_endpoints",
]

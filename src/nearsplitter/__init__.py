__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Config
    "AppConfig",
    "NetworkConfig",
    "NETWORKS",
    "load_config",
    # RPC
    "FailoverTransport",
    "RpcRequest",
    "resolve_endpoints",
    "encode_args",
    "decode_result",
    "classify",
    # RPC errors
    "NearRpcError",
    "ConfigurationError",
    "EncodingUnavailable",
    "ClassifiedError",
    "TransportFailure",
    "HttpStatusError",
    "RpcProtocolError",
    "MalformedResponse",
    "DecodeError",
    "AttemptError",
    "AggregatedFailure",
    # User-facing errors
    "ERROR_PATTERNS",
    "ErrorPattern",
    "decode_near_error",
    "is_not_found_error",
    # Contract
    "SplitterContract",
    "view_function",
]

from loguru import logger

from .config import NETWORKS, AppConfig, NetworkConfig, load_config
from .contract import SplitterContract, view_function
from .errors import ERROR_PATTERNS, ErrorPattern, decode_near_error, is_not_found_error
from .rpc import (
    AggregatedFailure,
    AttemptError,
    ClassifiedError,
    ConfigurationError,
    DecodeError,
    EncodingUnavailable,
    FailoverTransport,
    HttpStatusError,
    MalformedResponse,
    NearRpcError,
    RpcProtocolError,
    RpcRequest,
    TransportFailure,
    classify,
    decode_result,
    encode_args,
    resolve_endpoints,
)

logger.disable("nearsplitter")

"""Dynamic fee resolution for cross-chain bridge transfers."""

from __future__ import annotations

from .domain import (
    BasicFeeParams,
    BasicFeeResult,
    DynamicFeeParams,
    DynamicFeeResult,
    FeeHandler,
    FeeHandlerType,
    FeeOracleQuote,
    FeeOracleRequest,
)
from .errors import (
    BridgeFeeError,
    EmptyOracleResponse,
    EncodingError,
    IncompleteOracleResponse,
    MismatchedOracleResponse,
    OracleReportedError,
    OracleUnavailable,
    UnsupportedFeeHandler,
)
from .fee import (
    calculate_basic_fee,
    calculate_dynamic_fee,
    calculate_fee,
    create_oracle_fee_data,
    encode_oracle_fee_data,
    get_fee_handler,
)
from .oracle import request_fee_from_fee_oracle

__all__ = [
    "BasicFeeParams",
    "BasicFeeResult",
    "BridgeFeeError",
    "DynamicFeeParams",
    "DynamicFeeResult",
    "EmptyOracleResponse",
    "EncodingError",
    "FeeHandler",
    "FeeHandlerType",
    "FeeOracleQuote",
    "FeeOracleRequest",
    "IncompleteOracleResponse",
    "MismatchedOracleResponse",
    "OracleReportedError",
    "OracleUnavailable",
    "UnsupportedFeeHandler",
    "calculate_basic_fee",
    "calculate_dynamic_fee",
    "calculate_fee",
    "create_oracle_fee_data",
    "encode_oracle_fee_data",
    "get_fee_handler",
    "request_fee_from_fee_oracle",
]

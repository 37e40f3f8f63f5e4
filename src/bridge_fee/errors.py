"""Errors raised while resolving a bridge transfer fee."""

from __future__ import annotations

from typing import Iterable

import requests
from web3.exceptions import Web3Exception

from .constants import EMPTY_ORACLE_RESPONSE_MESSAGE, ORACLE_UNAVAILABLE_MESSAGE


class BridgeFeeError(Exception):
    """Base class for fee resolution failures."""

    pass


class OracleUnavailable(BridgeFeeError):
    """Raised when the fee oracle cannot be reached or answers with a non-2xx status."""

    def __init__(self, message: str = ORACLE_UNAVAILABLE_MESSAGE):
        super().__init__(message)


class OracleReportedError(BridgeFeeError):
    """Raised when the fee oracle answers with an explicit ``error`` field."""

    pass


class EmptyOracleResponse(BridgeFeeError):
    """Raised when the fee oracle returns no quote."""

    def __init__(self, message: str = EMPTY_ORACLE_RESPONSE_MESSAGE):
        super().__init__(message)


class IncompleteOracleResponse(EmptyOracleResponse):
    """Raised when the fee oracle quote is missing one or more fields."""

    def __init__(self, missing_fields: Iterable[str]):
        self.missing_fields = tuple(missing_fields)
        super().__init__(
            f"Incomplete response data from fee oracle service, "
            f"missing: {', '.join(self.missing_fields)}"
        )


class MismatchedOracleResponse(BridgeFeeError):
    """Raised when the oracle quote is for another domain pair or resource."""

    def __init__(self, mismatched_fields: Iterable[str]):
        self.mismatched_fields = tuple(mismatched_fields)
        super().__init__(
            f"Fee oracle quote does not match the request: "
            f"{', '.join(self.mismatched_fields)}"
        )


class EncodingError(BridgeFeeError, ValueError):
    """Raised when a quote field cannot be converted for the fee data payload."""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Cannot encode {field}={value!r}: {reason}")


class UnsupportedFeeHandler(BridgeFeeError):
    """Raised when the fee handler reports a type this library cannot calculate."""

    pass


# Failures of the fee handler contract call. These are re-raised untouched.
ON_CHAIN_CALL_ERRORS: tuple[type[Exception], ...] = (
    Web3Exception,
    requests.exceptions.RequestException,
    ConnectionError,
)

"""Dynamic fee resolution: oracle quote, fee data encoding, on-chain confirmation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from eth_typing import HexStr
from eth_utils import is_hexstr
from web3 import Web3

from ..abi import get_contract, load_dynamic_fee_handler_abi
from ..constants import QUOTE_FIELDS
from ..domain import (
    DynamicFeeParams,
    DynamicFeeResult,
    FeeOracleQuote,
    FeeOracleRequest,
)
from ..errors import (
    EmptyOracleResponse,
    IncompleteOracleResponse,
    MismatchedOracleResponse,
)
from ..logger import get_logger
from ..oracle import request_fee_from_fee_oracle
from ..units import parse_uint
from .encoder import create_oracle_fee_data
from .handler import call_calculate_fee

logger = get_logger(__name__)


def _hex_to_bytes(value: Any) -> bytes | None:
    if not isinstance(value, str) or not is_hexstr(value):
        return None
    try:
        return Web3.to_bytes(hexstr=HexStr(value))
    except ValueError:
        return None


def _mismatched_fields(quote: Mapping[str, Any], request: FeeOracleRequest) -> list[str]:
    mismatched = []
    for name, expected in (
        ("fromDomainID", request.from_domain_id),
        ("toDomainID", request.to_domain_id),
    ):
        try:
            if parse_uint(quote[name]) != expected:
                mismatched.append(name)
        except ValueError:
            mismatched.append(name)

    resource_id = _hex_to_bytes(quote["resourceID"])
    if resource_id is None or resource_id != _hex_to_bytes(request.resource_id):
        mismatched.append("resourceID")
    return mismatched


def validate_oracle_quote(
    quote: Any,
    request: FeeOracleRequest | None = None,
) -> FeeOracleQuote:
    """Ensure the oracle returned a complete quote for the requested route.

    Args:
        quote: The ``response`` object returned by the oracle client.
        request: When given, the quote's domain pair and resource id must
            match it. Resource ids are compared as bytes.

    Raises:
        EmptyOracleResponse: If the quote is missing, empty or not an object.
        IncompleteOracleResponse: If any quote field is missing or empty.
        MismatchedOracleResponse: If the quote is for another route.
    """
    if not isinstance(quote, Mapping) or not quote:
        raise EmptyOracleResponse()

    missing = [
        name for name in QUOTE_FIELDS if quote.get(name) is None or quote.get(name) == ""
    ]
    if missing:
        raise IncompleteOracleResponse(missing)

    if request is not None:
        mismatched = _mismatched_fields(quote, request)
        if mismatched:
            raise MismatchedOracleResponse(mismatched)

    return quote  # type: ignore[return-value]


async def calculate_dynamic_fee(
    params: DynamicFeeParams,
    *,
    oracle_timeout: float | None = None,
) -> DynamicFeeResult:
    """Resolve the fee of a transfer through the fee oracle and the dynamic fee handler.

    Args:
        params: Transfer details, connection handle and endpoints.
        oracle_timeout: Optional timeout for the oracle request.

    Returns:
        The fee and fee token reported by the fee handler, with the encoded
        oracle fee data that was passed to it.

    Raises:
        OracleUnavailable, OracleReportedError: From the oracle request.
        EmptyOracleResponse: If the oracle returned no (or a partial) quote.
        MismatchedOracleResponse: If the quote is for another route.
        EncodingError: If the quote cannot be packed.

    Errors of the ``calculateFee`` call are propagated unchanged. The quote
    expiration is not checked here; the fee handler enforces it.
    """
    quote = await request_fee_from_fee_oracle(
        params.oracle_request, timeout=oracle_timeout
    )
    quote = validate_oracle_quote(quote, params.oracle_request)

    fee_data = create_oracle_fee_data(quote, params.token_amount)

    contract = get_contract(
        params.w3, params.fee_handler_address, load_dynamic_fee_handler_abi()
    )
    fee, token_address = await call_calculate_fee(
        contract,
        sender=params.sender,
        from_domain_id=params.from_domain_id,
        to_domain_id=params.to_domain_id,
        resource_id=params.resource_id,
        deposit_data=params.deposit_data,
        fee_data=fee_data,
    )

    return DynamicFeeResult(fee=fee, token_address=token_address, fee_data=fee_data)

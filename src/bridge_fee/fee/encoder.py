"""Fee data encoder for the dynamic fee handler."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from eth_abi.packed import encode_packed
from eth_typing import HexStr
from eth_utils import is_hexstr
from web3 import Web3

from ..constants import (
    DOMAIN_ID_MAX,
    FEE_DATA_LAYOUT,
    FEE_DECIMALS,
    UINT256_MAX,
    WORD_SIZE,
)
from ..errors import EncodingError
from ..logger import get_logger
from ..units import parse_uint, to_fixed_point

logger = get_logger(__name__)


def _check_uint256(field: str, raw: Any, value: int) -> int:
    if value > UINT256_MAX:
        raise EncodingError(field, raw, "does not fit in 32 bytes")
    return value


def _rate(quote: Mapping[str, Any], field: str) -> int:
    raw = quote.get(field)
    try:
        value = to_fixed_point(raw, FEE_DECIMALS)  # type: ignore[arg-type]
    except ValueError as e:
        raise EncodingError(field, raw, str(e)) from e
    return _check_uint256(field, raw, value)


def _uint(field: str, raw: Any) -> int:
    try:
        value = parse_uint(raw)
    except ValueError as e:
        raise EncodingError(field, raw, str(e)) from e
    return _check_uint256(field, raw, value)


def _domain_id(quote: Mapping[str, Any], field: str) -> int:
    value = _uint(field, quote.get(field))
    if value > DOMAIN_ID_MAX:
        raise EncodingError(field, quote.get(field), "domain id out of range 0-255")
    return value


def _hex_bytes(field: str, raw: Any) -> bytes:
    if not isinstance(raw, str) or not raw.removeprefix("0x") or not is_hexstr(raw):
        raise EncodingError(field, raw, "not a hex string")
    if len(raw.removeprefix("0x")) % 2:
        raise EncodingError(field, raw, "odd-length hex string")
    return Web3.to_bytes(hexstr=HexStr(raw))


def _resource_id(quote: Mapping[str, Any]) -> bytes:
    raw = quote.get("resourceID")
    value = _hex_bytes("resourceID", raw)
    if len(value) != WORD_SIZE:
        raise EncodingError("resourceID", raw, f"expected {WORD_SIZE} bytes, got {len(value)}")
    return value


def encode_oracle_fee_data(quote: Mapping[str, Any], token_amount: str | int) -> bytes:
    """Pack an oracle quote and the transferred amount for the dynamic fee handler.

    Args:
        quote: Fee oracle quote (see ``FeeOracleQuote``)
        token_amount: Transferred amount in the token's smallest unit

    Returns:
        The packed fee data

    Raises:
        EncodingError: If a field cannot be represented in its slot

    The fee handler decodes, in order:
        uint256 baseEffectiveRate (D18), uint256 tokenEffectiveRate (D18),
        uint256 dstGasPrice, uint256 expirationTimestamp,
        uint256 fromDomainID, uint256 toDomainID, bytes32 resourceID,
        uint256 msgGasLimit, bytes signature, uint256 tokenAmount
    """
    values: dict[str, Any] = {
        "baseEffectiveRate": _rate(quote, "baseEffectiveRate"),
        "tokenEffectiveRate": _rate(quote, "tokenEffectiveRate"),
        "dstGasPrice": _uint("dstGasPrice", quote.get("dstGasPrice")),
        "expirationTimestamp": _uint(
            "expirationTimestamp", quote.get("expirationTimestamp")
        ),
        "fromDomainID": _domain_id(quote, "fromDomainID"),
        "toDomainID": _domain_id(quote, "toDomainID"),
        "resourceID": _resource_id(quote),
        "msgGasLimit": _uint("msgGasLimit", quote.get("msgGasLimit")),
        "signature": _hex_bytes("signature", quote.get("signature")),
        "tokenAmount": _uint("tokenAmount", token_amount),
    }

    types = [abi_type for _, abi_type in FEE_DATA_LAYOUT]
    args = [values[name] for name, _ in FEE_DATA_LAYOUT]
    return encode_packed(types, args)


def create_oracle_fee_data(quote: Mapping[str, Any], token_amount: str | int) -> HexStr:
    """Hex (``0x``-prefixed) form of ``encode_oracle_fee_data``."""
    fee_data = encode_oracle_fee_data(quote, token_amount)
    logger.debug("Encoded %d bytes of oracle fee data", len(fee_data))
    return HexStr("0x" + fee_data.hex())

"""Read-only calls into fee handler contracts."""

from __future__ import annotations

import asyncio

from eth_typing import ChecksumAddress, HexStr
from web3 import Web3
from web3.contract import Contract

from ..logger import get_logger

logger = get_logger(__name__)


def to_bytes(value: str | bytes, name: str) -> bytes:
    """Normalize a hex string or raw bytes argument for a contract call."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if value in ("", "0x"):
        return b""
    try:
        return Web3.to_bytes(hexstr=HexStr(value))
    except ValueError as e:
        raise ValueError(f"{name} must be hex encoded: {value!r}") from e


async def call_calculate_fee(
    contract: Contract,
    *,
    sender: str,
    from_domain_id: int,
    to_domain_id: int,
    resource_id: str | bytes,
    deposit_data: str | bytes,
    fee_data: str | bytes,
) -> tuple[int, ChecksumAddress]:
    """Call ``calculateFee`` on a fee handler.

    Any error raised by web3 or the provider (revert, connection failure, ...)
    is propagated as-is.

    Returns:
        Tuple of (fee, token_address) exactly as reported by the contract
    """
    call = contract.functions.calculateFee(
        Web3.to_checksum_address(sender),
        from_domain_id,
        to_domain_id,
        to_bytes(resource_id, "resource_id"),
        to_bytes(deposit_data, "deposit_data"),
        to_bytes(fee_data, "fee_data"),
    )
    logger.debug(
        "Calling calculateFee on %s for %d -> %d",
        contract.address,
        from_domain_id,
        to_domain_id,
    )
    fee, token_address = await asyncio.to_thread(call.call)
    return int(fee), token_address

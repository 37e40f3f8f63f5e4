"""Fee handler discovery through the fee handler router."""

from __future__ import annotations

import asyncio

from web3 import Web3

from ..abi import (
    get_contract,
    load_basic_fee_handler_abi,
    load_fee_handler_router_abi,
)
from ..domain import (
    BasicFeeParams,
    BasicFeeResult,
    DynamicFeeParams,
    DynamicFeeResult,
    FeeHandler,
    FeeHandlerType,
)
from ..errors import UnsupportedFeeHandler
from ..logger import get_logger
from .basic import calculate_basic_fee
from .dynamic import calculate_dynamic_fee
from .handler import to_bytes

logger = get_logger(__name__)


async def get_fee_handler(
    w3: Web3,
    router_address: str,
    domain_id: int,
    resource_id: str,
) -> FeeHandler:
    """Look up the fee handler registered for a destination domain and resource.

    Args:
        w3: Connection to the source chain
        router_address: FeeHandlerRouter contract address
        domain_id: Destination domain id
        resource_id: Resource id (32-byte hex)

    Returns:
        The handler address and its reported type

    Raises:
        UnsupportedFeeHandler: If the handler reports an unknown type
    """
    router = get_contract(w3, router_address, load_fee_handler_router_abi())
    handler_address = await asyncio.to_thread(
        router.functions._domainResourceIDToFeeHandlerAddress(
            domain_id, to_bytes(resource_id, "resource_id")
        ).call
    )

    # feeHandlerType() has the same signature on every handler
    handler = get_contract(w3, handler_address, load_basic_fee_handler_abi())
    raw_type = await asyncio.to_thread(handler.functions.feeHandlerType().call)

    try:
        handler_type = FeeHandlerType(str(raw_type).lower())
    except ValueError as e:
        raise UnsupportedFeeHandler(
            f"Fee handler {handler_address} has unsupported type: {raw_type!r}"
        ) from e

    logger.debug(
        "Fee handler for domain %d: %s (%s)",
        domain_id,
        handler_address,
        handler_type.value,
    )
    return FeeHandler(
        address=Web3.to_checksum_address(handler_address), type=handler_type
    )


async def calculate_fee(
    w3: Web3,
    *,
    router_address: str,
    sender: str,
    from_domain_id: int,
    to_domain_id: int,
    resource_id: str,
    token_amount: str,
    deposit_data: str | bytes,
    fee_oracle_base_url: str | None = None,
    oracle_timeout: float | None = None,
) -> BasicFeeResult | DynamicFeeResult:
    """Resolve the fee of a transfer with whichever handler the router assigns.

    Raises:
        ValueError: If the route uses the oracle handler and no fee oracle URL is given
        UnsupportedFeeHandler: If the handler type is unknown
    """
    handler = await get_fee_handler(w3, router_address, to_domain_id, resource_id)

    if handler.type is FeeHandlerType.BASIC:
        return await calculate_basic_fee(
            BasicFeeParams(
                w3=w3,
                sender=sender,
                from_domain_id=from_domain_id,
                to_domain_id=to_domain_id,
                resource_id=resource_id,
                fee_handler_address=handler.address,
                deposit_data=deposit_data,
            )
        )

    if not fee_oracle_base_url:
        raise ValueError("fee_oracle_base_url is required for oracle fee handlers")

    return await calculate_dynamic_fee(
        DynamicFeeParams(
            w3=w3,
            sender=sender,
            from_domain_id=from_domain_id,
            to_domain_id=to_domain_id,
            resource_id=resource_id,
            token_amount=token_amount,
            fee_oracle_base_url=fee_oracle_base_url,
            fee_handler_address=handler.address,
            deposit_data=deposit_data,
        ),
        oracle_timeout=oracle_timeout,
    )

"""Flat fee resolution through the basic fee handler."""

from __future__ import annotations

from eth_typing import HexStr
from web3 import Web3

from ..abi import get_contract, load_basic_fee_handler_abi
from ..constants import BASIC_FEE_DATA
from ..domain import BasicFeeParams, BasicFeeResult
from .handler import call_calculate_fee


async def calculate_basic_fee(params: BasicFeeParams) -> BasicFeeResult:
    """Read the flat fee charged by a basic fee handler.

    The basic handler needs no oracle quote; it is passed a single zero byte
    as fee data. ``fee_data`` of the result is the fee amount in hex.
    """
    contract = get_contract(
        params.w3, params.fee_handler_address, load_basic_fee_handler_abi()
    )
    fee, token_address = await call_calculate_fee(
        contract,
        sender=params.sender,
        from_domain_id=params.from_domain_id,
        to_domain_id=params.to_domain_id,
        resource_id=params.resource_id,
        deposit_data=params.deposit_data,
        fee_data=BASIC_FEE_DATA,
    )
    return BasicFeeResult(
        fee=fee,
        token_address=token_address,
        fee_data=HexStr(Web3.to_hex(fee)),
    )

"""Domain models for bridge fee resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypedDict

from eth_typing import ChecksumAddress, HexStr
from web3 import Web3


class FeeOracleQuote(TypedDict, total=False):
    """Signed fee quote as returned by the fee oracle (wire casing)."""

    baseEffectiveRate: str
    tokenEffectiveRate: str
    dstGasPrice: str
    signature: str
    fromDomainID: int
    toDomainID: int
    resourceID: str
    msgGasLimit: str
    dataTimestamp: int
    signatureTimestamp: int
    expirationTimestamp: int


class FeeOracleResponse(TypedDict, total=False):
    """Complete fee oracle response body."""

    response: FeeOracleQuote
    error: str


@dataclass(frozen=True)
class FeeOracleRequest:
    """Identifies the quote to request from the fee oracle."""

    from_domain_id: int
    to_domain_id: int
    resource_id: str
    fee_oracle_base_url: str


@dataclass(frozen=True)
class BasicFeeParams:
    """Inputs of a basic fee handler calculation."""

    w3: Web3
    sender: str
    from_domain_id: int
    to_domain_id: int
    resource_id: str
    fee_handler_address: str
    deposit_data: str | bytes


@dataclass(frozen=True)
class DynamicFeeParams:
    """Inputs of a dynamic (oracle based) fee handler calculation."""

    w3: Web3
    sender: str
    from_domain_id: int
    to_domain_id: int
    resource_id: str
    token_amount: str
    fee_oracle_base_url: str
    fee_handler_address: str
    deposit_data: str | bytes

    @property
    def oracle_request(self) -> FeeOracleRequest:
        return FeeOracleRequest(
            from_domain_id=self.from_domain_id,
            to_domain_id=self.to_domain_id,
            resource_id=self.resource_id,
            fee_oracle_base_url=self.fee_oracle_base_url,
        )


@dataclass(frozen=True)
class DynamicFeeResult:
    """Fee confirmed by the dynamic fee handler, plus the oracle payload it consumed."""

    fee: int
    token_address: ChecksumAddress
    fee_data: HexStr


@dataclass(frozen=True)
class BasicFeeResult:
    """Fee confirmed by the basic fee handler."""

    fee: int
    token_address: ChecksumAddress
    fee_data: HexStr


class FeeHandlerType(str, Enum):
    BASIC = "basic"
    ORACLE = "oracle"


@dataclass(frozen=True)
class FeeHandler:
    """A fee handler registered in the fee handler router."""

    address: ChecksumAddress
    type: FeeHandlerType

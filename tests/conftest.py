from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from helpers import FEE_HANDLER_ADDRESS, RESOURCE_ID, SIGNATURE, TOKEN_ADDRESS


@pytest.fixture
def oracle_quote() -> dict[str, Any]:
    return {
        "baseEffectiveRate": "0.000445",
        "tokenEffectiveRate": "15.948864",
        "dstGasPrice": "2000000000",
        "signature": SIGNATURE,
        "fromDomainID": 1,
        "toDomainID": 2,
        "resourceID": RESOURCE_ID,
        "msgGasLimit": "0",
        "dataTimestamp": 1673296900,
        "signatureTimestamp": 1673296900,
        "expirationTimestamp": 1773300500,
    }


@pytest.fixture
def oracle_response(oracle_quote) -> dict[str, Any]:
    return {"response": oracle_quote}


@pytest.fixture
def fee_handler_w3() -> MagicMock:
    """Web3 stand-in whose contracts answer calculateFee with (10, TOKEN_ADDRESS)."""
    w3 = MagicMock()
    contract = w3.eth.contract.return_value
    contract.address = FEE_HANDLER_ADDRESS
    contract.functions.calculateFee.return_value.call.return_value = (
        10,
        TOKEN_ADDRESS,
    )
    return w3

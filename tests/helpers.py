"""Shared test data and builders."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import requests

SIGNATURE = (
    "ffdd02c9aaf691e70dcbb69f9e6ec558c3e078c1ec75a5beec0ec46d452c505d"
    "3a616a5d6dc738da57ce1ffb6c16fb7f51cfbea6017fa029cd95005a8eaefef31b"
)
RESOURCE_ID = "0x0000000000000000000000000000000000000000000000000000000000000001"
SENDER = "0x0000000000000000000000000000000000000000"
FEE_HANDLER_ADDRESS = "0xa9ddD97e1762920679f3C20ec779D79a81903c0B"
TOKEN_ADDRESS = "0x141F8690A87A7E57C2E270ee77Be94935970c035"
ORACLE_URL = "http://localhost:8091"

QUOTE_WORDS = (
    "000000000000000000000000000000000000000000000000000194b9a2ecd000"
    "000000000000000000000000000000000000000000000000dd55bf4eab040000"
    "0000000000000000000000000000000000000000000000000000000077359400"
    "0000000000000000000000000000000000000000000000000000000069b26b14"
    "0000000000000000000000000000000000000000000000000000000000000001"
    "0000000000000000000000000000000000000000000000000000000000000002"
    "0000000000000000000000000000000000000000000000000000000000000001"
    "0000000000000000000000000000000000000000000000000000000000000000"
)

# Fee data for the sample quote with a token amount of 10
FEE_DATA_AMOUNT_10 = (
    "0x"
    + QUOTE_WORDS
    + SIGNATURE
    + "000000000000000000000000000000000000000000000000000000000000000a"
)

# Fee data for the sample quote with a token amount of 100
FEE_DATA_AMOUNT_100 = (
    "0x"
    + QUOTE_WORDS
    + SIGNATURE
    + "0000000000000000000000000000000000000000000000000000000000000064"
)


def make_response(status: int, body: Any) -> requests.Response:
    """Build a requests.Response carrying ``body`` as JSON (or raw text)."""
    response = requests.Response()
    response.status_code = status
    payload = body if isinstance(body, str) else json.dumps(body)
    response._content = payload.encode()
    response.headers["Content-Type"] = "application/json"
    return response


def calculate_fee_mock(w3: MagicMock) -> MagicMock:
    """The calculateFee function mock of a ``fee_handler_w3`` stand-in."""
    return w3.eth.contract.return_value.functions.calculateFee

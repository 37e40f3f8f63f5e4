from __future__ import annotations

import json
from pathlib import Path

from web3 import Web3
from web3.contract import Contract

ABIS_DIR = Path(__file__).parent / "abis"

BASIC_FEE_HANDLER_ABI_PATH = ABIS_DIR / "BasicFeeHandler.json"
DYNAMIC_FEE_HANDLER_ABI_PATH = ABIS_DIR / "DynamicERC20FeeHandlerEVM.json"
FEE_HANDLER_ROUTER_ABI_PATH = ABIS_DIR / "FeeHandlerRouter.json"


def load_abi(path: str | Path) -> list[dict]:
    """Load an ABI from a JSON file and return its "abi" field.

    Args:
        path: Path to the JSON file containing an "abi" field.

    Returns:
        ABI as a list of dictionaries.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        KeyError: If the JSON does not contain an "abi" field.
    """
    p = Path(path)
    with p.open() as f:
        data = json.load(f)
    return data["abi"]


def load_basic_fee_handler_abi() -> list[dict]:
    """Load the BasicFeeHandler ABI."""
    return load_abi(BASIC_FEE_HANDLER_ABI_PATH)


def load_dynamic_fee_handler_abi() -> list[dict]:
    """Load the DynamicERC20FeeHandlerEVM ABI."""
    return load_abi(DYNAMIC_FEE_HANDLER_ABI_PATH)


def load_fee_handler_router_abi() -> list[dict]:
    """Load the FeeHandlerRouter ABI."""
    return load_abi(FEE_HANDLER_ROUTER_ABI_PATH)


def get_contract(w3: Web3, address: str, abi: list[dict]) -> Contract:
    """Bind ``abi`` to ``address`` on the given connection."""
    return w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

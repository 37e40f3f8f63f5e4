from __future__ import annotations

from .basic import calculate_basic_fee
from .dynamic import calculate_dynamic_fee, validate_oracle_quote
from .encoder import create_oracle_fee_data, encode_oracle_fee_data
from .router import calculate_fee, get_fee_handler

__all__ = [
    "calculate_basic_fee",
    "calculate_dynamic_fee",
    "calculate_fee",
    "create_oracle_fee_data",
    "encode_oracle_fee_data",
    "get_fee_handler",
    "validate_oracle_quote",
]

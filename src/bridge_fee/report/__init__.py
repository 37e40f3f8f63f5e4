from __future__ import annotations

from .formatter import fee_result_to_dict, format_fee_table

__all__ = ["fee_result_to_dict", "format_fee_table"]

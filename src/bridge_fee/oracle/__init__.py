from __future__ import annotations

from .client import build_oracle_query, request_fee_from_fee_oracle

__all__ = ["build_oracle_query", "request_fee_from_fee_oracle"]

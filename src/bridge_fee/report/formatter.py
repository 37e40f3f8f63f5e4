"""Rich console formatter for fee results."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..constants import SIGNATURE_LENGTH, WORD_SIZE
from ..domain import BasicFeeResult, DynamicFeeResult


def _truncate_hex(value: str, keep: int = 10) -> str:
    """Truncate long hex strings for display."""
    if len(value) <= 2 * keep + 3:
        return value
    return f"{value[:keep]}...{value[-keep:]}"


def fee_result_to_dict(result: BasicFeeResult | DynamicFeeResult) -> dict[str, Any]:
    """Serializable view of a fee result (fee as a decimal string)."""
    return {
        "type": "oracle" if isinstance(result, DynamicFeeResult) else "basic",
        "fee": str(result.fee),
        "tokenAddress": result.token_address,
        "feeData": result.fee_data,
    }


def format_fee_table(
    result: BasicFeeResult | DynamicFeeResult,
    console: Console | None = None,
) -> None:
    """Print a fee result as a rich panel.

    Args:
        result: The fee returned by the fee handler
        console: Console to print to; stdout when omitted
    """
    console = console or Console()

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="cyan")

    table.add_row("Fee", f"{result.fee:,}")
    table.add_row("Token", result.token_address)

    if isinstance(result, DynamicFeeResult):
        payload_len = (len(result.fee_data) - 2) // 2
        table.add_row("Handler", "oracle")
        table.add_row("Fee data", _truncate_hex(result.fee_data))
        table.add_row("Fee data size", f"{payload_len} bytes")
        signature_start = 2 + 2 * 8 * WORD_SIZE
        table.add_row(
            "Signature",
            _truncate_hex(
                "0x"
                + result.fee_data[signature_start : signature_start + 2 * SIGNATURE_LENGTH]
            ),
        )
    else:
        table.add_row("Handler", "basic")
        table.add_row("Fee data", result.fee_data)

    console.print(Panel(table, title="[bold]Bridge Fee[/]", border_style="green"))

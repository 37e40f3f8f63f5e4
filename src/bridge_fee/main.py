"""CLI entrypoint for bridge-fee."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Annotated

import typer
from eth_typing import URI
from web3 import Web3

from .domain import BasicFeeParams, DynamicFeeParams, FeeHandlerType
from .errors import BridgeFeeError, ON_CHAIN_CALL_ERRORS
from .fee import calculate_basic_fee, calculate_dynamic_fee, calculate_fee
from .logger import get_logger, setup_logging
from .report import fee_result_to_dict, format_fee_table
from .settings import CONFIG_ENV_VAR, FeeSettings

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Resolve the fee of a cross-chain bridge transfer.",
)

logger = get_logger("bridge_fee")


async def _resolve_fee(
    settings: FeeSettings,
    w3: Web3,
    *,
    sender: str,
    from_domain: int,
    to_domain: int,
    resource_id: str,
    amount: str,
    deposit_data: str,
    handler_type: FeeHandlerType,
):
    if settings.fee_handler_address is None:
        if settings.fee_handler_router_address is None:
            raise typer.BadParameter(
                "fee_handler_address or fee_handler_router_address must be configured",
                param_hint=["--fee-handler", "--fee-handler-router"],
            )
        return await calculate_fee(
            w3,
            router_address=settings.fee_handler_router_address,
            sender=sender,
            from_domain_id=from_domain,
            to_domain_id=to_domain,
            resource_id=resource_id,
            token_amount=amount,
            deposit_data=deposit_data,
            fee_oracle_base_url=settings.fee_oracle_base_url,
            oracle_timeout=settings.oracle_request_timeout,
        )

    if handler_type is FeeHandlerType.BASIC:
        return await calculate_basic_fee(
            BasicFeeParams(
                w3=w3,
                sender=sender,
                from_domain_id=from_domain,
                to_domain_id=to_domain,
                resource_id=resource_id,
                fee_handler_address=settings.fee_handler_address_required,
                deposit_data=deposit_data,
            )
        )

    if settings.fee_oracle_base_url is None:
        raise typer.BadParameter(
            "fee_oracle_base_url must be configured for oracle fee handlers",
            param_hint=["--fee-oracle-url", "BRIDGE_FEE_FEE_ORACLE_BASE_URL"],
        )
    return await calculate_dynamic_fee(
        DynamicFeeParams(
            w3=w3,
            sender=sender,
            from_domain_id=from_domain,
            to_domain_id=to_domain,
            resource_id=resource_id,
            token_amount=amount,
            fee_oracle_base_url=settings.fee_oracle_base_url_required,
            fee_handler_address=settings.fee_handler_address_required,
            deposit_data=deposit_data,
        ),
        oracle_timeout=settings.oracle_request_timeout,
    )


@app.callback(invoke_without_command=True)
def quote(
    sender: Annotated[
        str | None, typer.Option("--sender", help="Address initiating the transfer.")
    ] = None,
    from_domain: Annotated[
        int | None, typer.Option("--from-domain", help="Source domain id.")
    ] = None,
    to_domain: Annotated[
        int | None, typer.Option("--to-domain", help="Destination domain id.")
    ] = None,
    resource_id: Annotated[
        str | None,
        typer.Option("--resource-id", help="Resource id (32-byte hex)."),
    ] = None,
    amount: Annotated[
        str,
        typer.Option("--amount", help="Token amount in the token's smallest unit."),
    ] = "0",
    deposit_data: Annotated[
        str,
        typer.Option("--deposit-data", help="Hex encoded deposit data."),
    ] = "0x",
    handler_type: Annotated[
        FeeHandlerType,
        typer.Option(
            "--handler-type",
            help="Type of the handler given with --fee-handler.",
        ),
    ] = FeeHandlerType.ORACLE,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [bridge_fee] table).",
        ),
    ] = None,
    rpc_url: Annotated[
        str | None,
        typer.Option("--rpc-url", help="RPC endpoint of the source chain."),
    ] = None,
    fee_oracle_url: Annotated[
        str | None,
        typer.Option("--fee-oracle-url", help="Base URL of the fee oracle."),
    ] = None,
    fee_handler: Annotated[
        str | None,
        typer.Option("--fee-handler", help="Fee handler contract address."),
    ] = None,
    fee_handler_router: Annotated[
        str | None,
        typer.Option(
            "--fee-handler-router",
            help="FeeHandlerRouter address, used when no --fee-handler is given.",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON."),
    ] = False,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config (with secrets redacted) and exit.",
        ),
    ] = False,
):
    """Calculate the fee of a bridge transfer.

    The fee handler is either given explicitly or looked up through the
    fee handler router for the destination domain and resource.
    """
    if config_path:
        os.environ[CONFIG_ENV_VAR] = str(config_path)

    init_kwargs: dict[str, str] = {}
    if rpc_url is not None:
        init_kwargs["rpc_url"] = rpc_url
    if fee_oracle_url is not None:
        init_kwargs["fee_oracle_base_url"] = fee_oracle_url
    if fee_handler is not None:
        init_kwargs["fee_handler_address"] = fee_handler
    if fee_handler_router is not None:
        init_kwargs["fee_handler_router_address"] = fee_handler_router
    if log_level is not None:
        init_kwargs["log_level"] = log_level

    settings = FeeSettings(**init_kwargs)
    setup_logging(settings.log_level)

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    if sender is None:
        raise typer.BadParameter("sender is required", param_hint="--sender")
    if from_domain is None or to_domain is None:
        raise typer.BadParameter(
            "source and destination domains are required",
            param_hint=["--from-domain", "--to-domain"],
        )
    if resource_id is None:
        raise typer.BadParameter("resource id is required", param_hint="--resource-id")
    if settings.rpc_url is None:
        raise typer.BadParameter(
            "rpc_url must be configured",
            param_hint=["--rpc-url", "BRIDGE_FEE_RPC_URL"],
        )

    w3 = Web3(Web3.HTTPProvider(URI(settings.rpc_url_required)))

    try:
        result = asyncio.run(
            _resolve_fee(
                settings,
                w3,
                sender=sender,
                from_domain=from_domain,
                to_domain=to_domain,
                resource_id=resource_id,
                amount=amount,
                deposit_data=deposit_data,
                handler_type=handler_type,
            )
        )
    except BridgeFeeError as e:
        logger.error("Fee resolution failed: %s", e)
        raise typer.Exit(code=1)
    except ON_CHAIN_CALL_ERRORS as e:
        logger.error("Fee handler call failed: %s", e)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(fee_result_to_dict(result), indent=2))
    else:
        format_fee_table(result)


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()

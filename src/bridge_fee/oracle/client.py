"""HTTP client for the fee oracle service."""

from __future__ import annotations

import asyncio
from typing import Any

import requests

from ..domain import FeeOracleQuote, FeeOracleRequest
from ..errors import OracleReportedError, OracleUnavailable
from ..logger import get_logger

logger = get_logger(__name__)


def build_oracle_query(request: FeeOracleRequest) -> dict[str, Any]:
    """Query parameters identifying the requested quote."""
    return {
        "from": request.from_domain_id,
        "to": request.to_domain_id,
        "resourceID": request.resource_id,
    }


def _get(url: str, params: dict[str, Any], timeout: float | None) -> requests.Response:
    if timeout is None:
        return requests.get(url, params=params)
    return requests.get(url, params=params, timeout=timeout)


async def request_fee_from_fee_oracle(
    request: FeeOracleRequest,
    *,
    timeout: float | None = None,
) -> FeeOracleQuote | None:
    """Fetch a signed fee quote from the fee oracle.

    Issues exactly one GET request. Nothing is retried.

    Args:
        request: Domain pair, resource id and oracle base URL.
        timeout: Optional request timeout in seconds. The transport default
            applies when omitted.

    Returns:
        The ``response`` object of the oracle body, unvalidated. May be None
        or empty when the oracle has no quote.

    Raises:
        OracleUnavailable: On transport errors, non-2xx statuses or a body
            that is not a JSON object. The message is always the fixed
            "Error fetching fee from fee oracle".
        OracleReportedError: If the body carries a non-null ``error`` field;
            its value is the exception message.
    """
    url = request.fee_oracle_base_url
    params = build_oracle_query(request)
    logger.debug("Requesting fee quote from %s with %s", url, params)

    try:
        response = await asyncio.to_thread(_get, url, params, timeout)
    except requests.exceptions.RequestException as e:
        raise OracleUnavailable() from e

    if not 200 <= response.status_code < 300:
        logger.debug("Fee oracle answered with status %d", response.status_code)
        raise OracleUnavailable()

    try:
        body = response.json()
    except requests.exceptions.JSONDecodeError as e:
        raise OracleUnavailable() from e

    if not isinstance(body, dict):
        raise OracleUnavailable()

    if body.get("error") is not None:
        raise OracleReportedError(str(body["error"]))

    return body.get("response")

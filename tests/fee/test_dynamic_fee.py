from unittest.mock import AsyncMock, patch

import pytest
import requests
from web3 import Web3
from web3.exceptions import ContractLogicError

from bridge_fee.domain import DynamicFeeParams, DynamicFeeResult, FeeOracleRequest
from bridge_fee.errors import (
    EmptyOracleResponse,
    EncodingError,
    IncompleteOracleResponse,
    MismatchedOracleResponse,
    OracleReportedError,
    OracleUnavailable,
)
from bridge_fee.fee.dynamic import calculate_dynamic_fee, validate_oracle_quote
from helpers import (
    FEE_DATA_AMOUNT_100,
    FEE_HANDLER_ADDRESS,
    ORACLE_URL,
    RESOURCE_ID,
    SENDER,
    SIGNATURE,
    TOKEN_ADDRESS,
    calculate_fee_mock,
    make_response,
)

CLIENT_GET = "bridge_fee.oracle.client.requests.get"


@pytest.fixture
def params(fee_handler_w3) -> DynamicFeeParams:
    return DynamicFeeParams(
        w3=fee_handler_w3,
        sender=SENDER,
        from_domain_id=1,
        to_domain_id=2,
        resource_id=RESOURCE_ID,
        token_amount="100",
        fee_oracle_base_url=ORACLE_URL,
        fee_handler_address=FEE_HANDLER_ADDRESS,
        deposit_data="0x",
    )


@pytest.mark.asyncio
async def test_calculates_fee_data(params, oracle_response):
    with patch(CLIENT_GET, return_value=make_response(200, oracle_response)):
        result = await calculate_dynamic_fee(params)

    assert result == DynamicFeeResult(
        fee=10,
        token_address=TOKEN_ADDRESS,
        fee_data=FEE_DATA_AMOUNT_100,
    )
    assert SIGNATURE in result.fee_data


@pytest.mark.asyncio
async def test_passes_fee_data_to_fee_handler(params, oracle_response, fee_handler_w3):
    with patch(CLIENT_GET, return_value=make_response(200, oracle_response)):
        await calculate_dynamic_fee(params)

    contract_kwargs = fee_handler_w3.eth.contract.call_args.kwargs
    assert contract_kwargs["address"] == Web3.to_checksum_address(FEE_HANDLER_ADDRESS)
    assert any(item.get("name") == "calculateFee" for item in contract_kwargs["abi"])

    calculate_fee_mock(fee_handler_w3).assert_called_once_with(
        Web3.to_checksum_address(SENDER),
        1,
        2,
        bytes.fromhex(RESOURCE_ID[2:]),
        b"",
        bytes.fromhex(FEE_DATA_AMOUNT_100[2:]),
    )


@pytest.mark.asyncio
async def test_server_error_raises_oracle_unavailable(params, oracle_response, fee_handler_w3):
    with patch(CLIENT_GET, return_value=make_response(500, oracle_response)):
        with pytest.raises(OracleUnavailable, match="^Error fetching fee from fee oracle$"):
            await calculate_dynamic_fee(params)

    calculate_fee_mock(fee_handler_w3).assert_not_called()


@pytest.mark.asyncio
async def test_oracle_error_propagates(params):
    with patch(CLIENT_GET, return_value=make_response(200, {"error": "sick"})):
        with pytest.raises(OracleReportedError, match="^sick$"):
            await calculate_dynamic_fee(params)


@pytest.mark.asyncio
async def test_fails_in_case_of_empty_response(params, fee_handler_w3):
    with patch(CLIENT_GET, return_value=make_response(200, {})):
        with pytest.raises(EmptyOracleResponse) as excinfo:
            await calculate_dynamic_fee(params)

    assert str(excinfo.value) == "Empty response data from fee oracle service"
    calculate_fee_mock(fee_handler_w3).assert_not_called()


@pytest.mark.asyncio
async def test_fails_in_case_of_empty_quote_object(params):
    with patch(CLIENT_GET, return_value=make_response(200, {"response": {}})):
        with pytest.raises(
            EmptyOracleResponse, match="^Empty response data from fee oracle service$"
        ):
            await calculate_dynamic_fee(params)


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", ["garbage", [1, 2], 7, True])
async def test_fails_in_case_of_non_object_quote(params, fee_handler_w3, payload):
    with patch(CLIENT_GET, return_value=make_response(200, {"response": payload})):
        with pytest.raises(
            EmptyOracleResponse, match="^Empty response data from fee oracle service$"
        ):
            await calculate_dynamic_fee(params)

    calculate_fee_mock(fee_handler_w3).assert_not_called()


@pytest.mark.asyncio
async def test_fails_in_case_of_partial_quote(params, oracle_quote, fee_handler_w3):
    del oracle_quote["signature"]
    oracle_quote["dstGasPrice"] = ""
    body = {"response": oracle_quote}

    with patch(CLIENT_GET, return_value=make_response(200, body)):
        with pytest.raises(IncompleteOracleResponse) as excinfo:
            await calculate_dynamic_fee(params)

    assert set(excinfo.value.missing_fields) == {"signature", "dstGasPrice"}
    calculate_fee_mock(fee_handler_w3).assert_not_called()


@pytest.mark.asyncio
async def test_invalid_quote_raises_encoding_error(params, oracle_quote, fee_handler_w3):
    oracle_quote["tokenEffectiveRate"] = "not-a-number"
    body = {"response": oracle_quote}

    with patch(CLIENT_GET, return_value=make_response(200, body)):
        with pytest.raises(EncodingError):
            await calculate_dynamic_fee(params)

    calculate_fee_mock(fee_handler_w3).assert_not_called()


@pytest.mark.asyncio
async def test_oracle_transport_error_surfaces_as_oracle_unavailable(params):
    with patch(CLIENT_GET, side_effect=requests.exceptions.ConnectionError("Err")):
        with pytest.raises(OracleUnavailable):
            await calculate_dynamic_fee(params)


@pytest.mark.asyncio
async def test_throws_error_if_call_fails(params, oracle_response, fee_handler_w3):
    failure = ContractLogicError("execution reverted: invalid signature")
    calculate_fee_mock(fee_handler_w3).return_value.call.side_effect = failure

    with patch(CLIENT_GET, return_value=make_response(200, oracle_response)):
        with pytest.raises(ContractLogicError) as excinfo:
            await calculate_dynamic_fee(params)

    assert excinfo.value is failure


@pytest.mark.asyncio
async def test_provider_error_is_not_reclassified(params, oracle_response, fee_handler_w3):
    failure = requests.exceptions.ConnectionError("rpc down")
    calculate_fee_mock(fee_handler_w3).return_value.call.side_effect = failure

    with patch(CLIENT_GET, return_value=make_response(200, oracle_response)):
        with pytest.raises(requests.exceptions.ConnectionError) as excinfo:
            await calculate_dynamic_fee(params)

    assert excinfo.value is failure


@pytest.mark.asyncio
async def test_expired_quote_is_forwarded(params, oracle_quote):
    oracle_quote["expirationTimestamp"] = 1
    body = {"response": oracle_quote}

    with patch(CLIENT_GET, return_value=make_response(200, body)):
        result = await calculate_dynamic_fee(params)

    assert result.fee == 10


@pytest.mark.asyncio
async def test_oracle_timeout_is_forwarded(params, oracle_response):
    with patch(
        "bridge_fee.fee.dynamic.request_fee_from_fee_oracle",
        new_callable=AsyncMock,
        return_value=oracle_response["response"],
    ) as request_fee:
        await calculate_dynamic_fee(params, oracle_timeout=2.0)

    request_fee.assert_awaited_once_with(params.oracle_request, timeout=2.0)


def test_validate_oracle_quote_returns_complete_quote(oracle_quote):
    assert validate_oracle_quote(oracle_quote) is oracle_quote


@pytest.mark.parametrize("quote", [None, {}])
def test_validate_oracle_quote_rejects_empty(quote):
    with pytest.raises(EmptyOracleResponse) as excinfo:
        validate_oracle_quote(quote)

    assert not isinstance(excinfo.value, IncompleteOracleResponse)


def test_validate_oracle_quote_accepts_zero_values(oracle_quote):
    oracle_quote["msgGasLimit"] = "0"
    oracle_quote["fromDomainID"] = 0

    assert validate_oracle_quote(oracle_quote) is oracle_quote


@pytest.mark.asyncio
async def test_fails_if_quote_is_for_another_route(params, oracle_quote, fee_handler_w3):
    oracle_quote["fromDomainID"] = 7
    oracle_quote["toDomainID"] = 9
    oracle_quote["resourceID"] = "0x" + "00" * 31 + "05"
    body = {"response": oracle_quote}

    with patch(CLIENT_GET, return_value=make_response(200, body)):
        with pytest.raises(MismatchedOracleResponse) as excinfo:
            await calculate_dynamic_fee(params)

    assert excinfo.value.mismatched_fields == ("fromDomainID", "toDomainID", "resourceID")
    calculate_fee_mock(fee_handler_w3).assert_not_called()


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("fromDomainID", "2"),
        ("toDomainID", 1),
        ("toDomainID", "not-a-domain"),
        ("resourceID", "0x" + "00" * 31 + "02"),
        ("resourceID", "0x01"),
        ("resourceID", "zz"),
    ],
)
def test_validate_oracle_quote_rejects_other_route(params, oracle_quote, field, value):
    oracle_quote[field] = value

    with pytest.raises(MismatchedOracleResponse) as excinfo:
        validate_oracle_quote(oracle_quote, params.oracle_request)

    assert excinfo.value.mismatched_fields == (field,)


def test_validate_oracle_quote_compares_route_by_value(oracle_quote):
    request = FeeOracleRequest(
        from_domain_id=1,
        to_domain_id=2,
        resource_id="0x" + "00" * 31 + "ab",
        fee_oracle_base_url=ORACLE_URL,
    )
    oracle_quote["fromDomainID"] = "1"
    oracle_quote["toDomainID"] = "2"
    oracle_quote["resourceID"] = "0x" + "00" * 31 + "AB"

    assert validate_oracle_quote(oracle_quote, request) is oracle_quote

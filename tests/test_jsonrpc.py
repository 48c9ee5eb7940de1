"""
Tests for JsonRpcClient — canned JSON-RPC responses, no network.

Uses a FakeTransport that returns pre-built response dicts,
exercising the parsing logic in jsonrpc_client.py.

Test plan:
- account_info: Sequence as int or string, actNotFound, missing or
  empty Sequence → None
- Submit: success parses engine_result_code + echoed tx_json fields,
  tef/tem/ter codes parsed, code as string accepted, missing
  engine_result_code → TransportError(INVALID_JSON),
  non-ASCII digit codes rejected, non-string echo fields dropped
- Tx: not found → found=False, found not validated, found validated
  with ledger_index and engine_result, server error handled
- Transport: errors propagate to caller
"""

from typing import Any

import pytest

from jingtum_rpc.client import LedgerClient
from jingtum_rpc.errors import ErrorCode, TransportError
from jingtum_rpc.jsonrpc_client import JsonRpcClient, build_request

URL = "http://node1:5050"
ACCOUNT = "jHb9CJAWyB4jr91VRWn96DkukG4bwdtyTh"

# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


class FakeTransport:
    """Returns canned JSON-RPC responses for testing."""

    def __init__(self, response: dict[str, Any]) -> None:
        self._response = response
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((url, payload))
        return self._response


class ErrorTransport:
    """Raises an exception on post_json to simulate transport failures."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        raise self._exc


# ---------------------------------------------------------------------------
# Canned responses
# ---------------------------------------------------------------------------

ACCOUNT_INFO_OK = {
    "result": {
        "status": "success",
        "account_data": {
            "Account": ACCOUNT,
            "Balance": "99999990",
            "Flags": 0,
            "Sequence": 5,
        },
        "ledger_current_index": 4321,
        "validated": False,
    },
}

ACCOUNT_NOT_FOUND = {
    "result": {
        "status": "error",
        "error": "actNotFound",
        "error_message": "Account not found.",
        "request": {"account": ACCOUNT, "command": "account_info"},
    },
}

SUBMIT_SUCCESS = {
    "result": {
        "status": "success",
        "engine_result": "tesSUCCESS",
        "engine_result_code": 0,
        "engine_result_message": "The transaction was applied.",
        "tx_blob": "1200002200000000",
        "tx_json": {
            "Account": ACCOUNT,
            "Amount": "1000000",
            "Destination": "jf1BiGeXwwQoi8Z2ueFYTEXSwuJYfV2Jpn",
            "Fee": "10",
            "Flags": 0,
            "Sequence": 5,
            "TransactionType": "Payment",
            "hash": "a" * 64,
        },
    },
}

SUBMIT_TEF_PAST_SEQ = {
    "result": {
        "status": "success",
        "engine_result": "tefPAST_SEQ",
        "engine_result_code": -190,
        "engine_result_message": "This sequence number has already past.",
        "tx_json": {"Account": ACCOUNT, "Sequence": 3, "hash": "c" * 64},
    },
}

SUBMIT_TEM_MALFORMED = {
    "result": {
        "status": "success",
        "engine_result": "temMALFORMED",
        "engine_result_code": -299,
        "engine_result_message": "Malformed transaction.",
    },
}

SUBMIT_TER_RETRY = {
    "result": {
        "status": "success",
        "engine_result": "terRETRY",
        "engine_result_code": "-99",
        "tx_json": {"Account": ACCOUNT, "Sequence": "5"},
    },
}

SUBMIT_INVALID_PARAMS = {
    "result": {
        "status": "error",
        "error": "invalidTransaction",
        "error_exception": "Invalid signature.",
        "request": {"command": "submit", "tx_blob": "00"},
    },
}

TX_NOT_FOUND = {
    "result": {
        "status": "error",
        "error": "txnNotFound",
        "error_code": 29,
        "error_message": "Transaction not found.",
    },
}

TX_NOT_VALIDATED = {
    "result": {
        "status": "success",
        "Account": ACCOUNT,
        "hash": "a" * 64,
        "meta": {"TransactionResult": "tesSUCCESS"},
        "validated": False,
    },
}

TX_VALIDATED = {
    "result": {
        "status": "success",
        "Account": ACCOUNT,
        "Sequence": 5,
        "hash": "a" * 64,
        "ledger_index": 12345,
        "meta": {"TransactionResult": "tesSUCCESS", "TransactionIndex": 0},
        "validated": True,
    },
}


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------


class TestBuildRequest:
    def test_shape(self) -> None:
        assert build_request("submit", {"tx_blob": "00"}) == {
            "method": "submit",
            "params": [{"tx_blob": "00"}],
        }

    def test_client_satisfies_protocol(self) -> None:
        assert isinstance(JsonRpcClient(FakeTransport({})), LedgerClient)


# ---------------------------------------------------------------------------
# account_info
# ---------------------------------------------------------------------------


class TestAccountInfo:
    @pytest.mark.asyncio
    async def test_success(self) -> None:
        transport = FakeTransport(ACCOUNT_INFO_OK)
        info = await JsonRpcClient(transport).account_info(URL, ACCOUNT)

        assert info.url == URL
        assert info.status == "success"
        assert info.sequence == 5
        assert info.error is None
        assert transport.calls == [
            (URL, {"method": "account_info", "params": [{"account": ACCOUNT}]})
        ]

    @pytest.mark.asyncio
    async def test_sequence_as_string(self) -> None:
        response = {"result": {"status": "success", "account_data": {"Sequence": "5"}}}
        info = await JsonRpcClient(FakeTransport(response)).account_info(URL, ACCOUNT)
        assert info.sequence == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["", None, "abc", 1.5, True, "\u00b9"])
    async def test_unusable_sequence(self, value: Any) -> None:
        response = {"result": {"status": "success", "account_data": {"Sequence": value}}}
        info = await JsonRpcClient(FakeTransport(response)).account_info(URL, ACCOUNT)
        assert info.status == "success"
        assert info.sequence is None

    @pytest.mark.asyncio
    async def test_missing_account_data(self) -> None:
        response = {"result": {"status": "success"}}
        info = await JsonRpcClient(FakeTransport(response)).account_info(URL, ACCOUNT)
        assert info.sequence is None

    @pytest.mark.asyncio
    async def test_account_not_found(self) -> None:
        info = await JsonRpcClient(FakeTransport(ACCOUNT_NOT_FOUND)).account_info(URL, ACCOUNT)

        assert info.status == "error"
        assert info.sequence is None
        assert info.error == "Account not found."

    @pytest.mark.asyncio
    async def test_no_result_key(self) -> None:
        info = await JsonRpcClient(FakeTransport({"error": "boom"})).account_info(URL, ACCOUNT)
        assert info.status is None
        assert info.sequence is None


# ---------------------------------------------------------------------------
# submit
# ---------------------------------------------------------------------------


class TestSubmit:
    @pytest.mark.asyncio
    async def test_success(self) -> None:
        transport = FakeTransport(SUBMIT_SUCCESS)
        result = await JsonRpcClient(transport).submit(URL, "1200002200000000")

        assert result.engine_result_code == 0
        assert result.engine_result == "tesSUCCESS"
        assert result.account == ACCOUNT
        assert result.sequence == 5
        assert result.tx_hash == "a" * 64
        assert result.confirmation is None
        assert transport.calls[0][1] == {
            "method": "submit",
            "params": [{"tx_blob": "1200002200000000"}],
        }

    @pytest.mark.asyncio
    async def test_past_seq(self) -> None:
        result = await JsonRpcClient(FakeTransport(SUBMIT_TEF_PAST_SEQ)).submit(URL, "00")

        assert result.engine_result_code == -190
        assert result.account == ACCOUNT
        assert result.sequence == 3

    @pytest.mark.asyncio
    async def test_malformed_without_tx_json(self) -> None:
        result = await JsonRpcClient(FakeTransport(SUBMIT_TEM_MALFORMED)).submit(URL, "00")

        assert result.engine_result_code == -299
        assert result.engine_result_message == "Malformed transaction."
        assert result.account is None
        assert result.sequence is None

    @pytest.mark.asyncio
    async def test_string_code_and_sequence(self) -> None:
        result = await JsonRpcClient(FakeTransport(SUBMIT_TER_RETRY)).submit(URL, "00")

        assert result.engine_result_code == -99
        assert result.sequence == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["\u00b2", "\u0663", "--5", "-", "1.5"])
    async def test_unparseable_code_is_invalid_json(self, code: str) -> None:
        response = {"result": {"status": "success", "engine_result_code": code}}

        with pytest.raises(TransportError) as exc_info:
            await JsonRpcClient(FakeTransport(response)).submit(URL, "00")

        assert exc_info.value.error_code == ErrorCode.INVALID_JSON

    @pytest.mark.asyncio
    async def test_non_string_echo_fields_dropped(self) -> None:
        response = {
            "result": {
                "engine_result": ["tefPAST_SEQ"],
                "engine_result_code": -190,
                "tx_json": {"Account": {"nested": ACCOUNT}, "Sequence": 3, "hash": 42},
            },
        }
        result = await JsonRpcClient(FakeTransport(response)).submit(URL, "00")

        assert result.engine_result_code == -190
        assert result.engine_result is None
        assert result.account is None
        assert result.sequence == 3
        assert result.tx_hash is None

    @pytest.mark.asyncio
    async def test_missing_engine_result_code(self) -> None:
        with pytest.raises(TransportError) as exc_info:
            await JsonRpcClient(FakeTransport(SUBMIT_INVALID_PARAMS)).submit(URL, "00")

        assert exc_info.value.error_code == ErrorCode.INVALID_JSON
        assert exc_info.value.url == URL
        assert exc_info.value.details["status"] == "error"


# ---------------------------------------------------------------------------
# tx
# ---------------------------------------------------------------------------


class TestGetTx:
    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        record = await JsonRpcClient(FakeTransport(TX_NOT_FOUND)).get_tx(URL, "a" * 64)

        assert record.found is False
        assert record.validated is False
        assert record.confirmed is False
        assert record.error == "txnNotFound"

    @pytest.mark.asyncio
    async def test_found_not_validated(self) -> None:
        record = await JsonRpcClient(FakeTransport(TX_NOT_VALIDATED)).get_tx(URL, "a" * 64)

        assert record.found is True
        assert record.validated is False
        assert record.confirmed is False
        assert record.ledger_index is None
        assert record.engine_result == "tesSUCCESS"

    @pytest.mark.asyncio
    async def test_validated(self) -> None:
        transport = FakeTransport(TX_VALIDATED)
        record = await JsonRpcClient(transport).get_tx(URL, "a" * 64)

        assert record.confirmed is True
        assert record.ledger_index == 12345
        assert record.engine_result == "tesSUCCESS"
        assert record.tx_json["Account"] == ACCOUNT
        assert transport.calls[0][1] == {
            "method": "tx",
            "params": [{"transaction": "a" * 64, "binary": False}],
        }


# ---------------------------------------------------------------------------
# Transport failures
# ---------------------------------------------------------------------------


class TestTransportErrors:
    @pytest.mark.asyncio
    async def test_errors_propagate(self) -> None:
        client = JsonRpcClient(ErrorTransport(TransportError("timed out", error_code=ErrorCode.TIMEOUT)))

        with pytest.raises(TransportError):
            await client.account_info(URL, ACCOUNT)
        with pytest.raises(TransportError):
            await client.submit(URL, "00")
        with pytest.raises(TransportError):
            await client.get_tx(URL, "a" * 64)

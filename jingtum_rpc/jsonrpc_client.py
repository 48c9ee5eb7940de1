"""
JSON-RPC client — real network implementation of LedgerClient.

Translates ``account_info`` / ``submit`` / ``tx`` responses into
AccountInfoResult / SubmitResult / TxStatusResult. Uses an injectable
transport (JsonRpcTransport) so the HTTP layer can be swapped for test
fakes without changing parsing logic.

No retry loops. No secrets. No node selection.

Request shape:
    {"method": <name>, "params": [<object>]}

Response parsing targets the ledger's JSON-RPC conventions:
    - Successful responses: {"result": {"status": "success", ...}}
    - Error responses: {"result": {"status": "error", "error": "...", ...}}
    - account_info carries account_data.Sequence
    - submit carries engine_result_code and the echoed tx_json
    - tx carries validated, ledger_index, meta
"""

from __future__ import annotations

from typing import Any

from jingtum_rpc.client import AccountInfoResult, SubmitResult, TxStatusResult
from jingtum_rpc.errors import ErrorCode, TransportError
from jingtum_rpc.transport import HttpxTransport, JsonRpcTransport


def build_request(method: str, params: dict[str, Any]) -> dict[str, Any]:
    """Build a JSON-RPC request body with a single params object."""
    return {"method": method, "params": [params]}


class JsonRpcClient:
    """JSON-RPC client implementing the LedgerClient protocol.

    Args:
        transport: Injectable transport for HTTP POST. Defaults to
            HttpxTransport. Pass a FakeTransport for testing.
    """

    def __init__(self, transport: JsonRpcTransport | None = None) -> None:
        self._transport = transport or HttpxTransport()

    @property
    def transport(self) -> JsonRpcTransport:
        return self._transport

    async def account_info(self, url: str, address: str) -> AccountInfoResult:
        """Query account state via ``account_info``.

        Transport exceptions propagate to the caller.
        """
        payload = build_request("account_info", {"account": address})
        response = await self._transport.post_json(url, payload)
        return _parse_account_info_response(response, url)

    async def submit(self, url: str, tx_blob: str) -> SubmitResult:
        """Submit a signed transaction blob via ``submit``.

        Transport exceptions propagate to the caller, and so does a
        TransportError for responses without an engine result code.
        """
        payload = build_request("submit", {"tx_blob": tx_blob})
        response = await self._transport.post_json(url, payload)
        return _parse_submit_response(response, url)

    async def get_tx(self, url: str, tx_hash: str) -> TxStatusResult:
        """Query transaction status via ``tx`` with ``binary`` off.

        Transport exceptions propagate to the caller.
        """
        payload = build_request("tx", {"transaction": tx_hash, "binary": False})
        response = await self._transport.post_json(url, payload)
        return _parse_tx_response(response, url)


# =====================================================================
# Response parsing (pure functions, no I/O)
# =====================================================================


def _result_of(response: dict[str, Any]) -> dict[str, Any]:
    result = response.get("result")
    return result if isinstance(result, dict) else {}


def _as_int(value: Any) -> int | None:
    """Coerce an int or ASCII decimal string to int; None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        digits = value.strip()
        if digits.isascii() and digits.removeprefix("-").isdigit():
            return int(digits)
    return None


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _parse_account_info_response(response: dict[str, Any], url: str) -> AccountInfoResult:
    """Parse an ``account_info`` response into AccountInfoResult.

    Handles:
        - Sequence as int or decimal string
        - Server-level errors (actNotFound, etc.)
        - Missing or empty Sequence (sequence=None)
    """
    result = _result_of(response)
    status = result.get("status")

    if status != "success":
        return AccountInfoResult(
            url=url,
            status=status,
            error=result.get("error_message") or result.get("error"),
            raw=response,
        )

    sequence = None
    account_data = result.get("account_data")
    if isinstance(account_data, dict):
        sequence = _as_int(account_data.get("Sequence"))

    return AccountInfoResult(url=url, status=status, sequence=sequence, raw=response)


def _parse_submit_response(response: dict[str, Any], url: str) -> SubmitResult:
    """Parse a ``submit`` response into SubmitResult.

    Raises:
        TransportError: INVALID_JSON when the response has no integer
            ``engine_result_code`` (server errors such as invalidParams
            included), since it cannot be classified.
    """
    result = _result_of(response)
    code = _as_int(result.get("engine_result_code"))
    if code is None:
        raise TransportError(
            "submit response has no engine_result_code",
            error_code=ErrorCode.INVALID_JSON,
            details={
                "url": url,
                "status": result.get("status"),
                "error": result.get("error_message") or result.get("error"),
            },
        )

    account = None
    sequence = None
    tx_hash = None
    tx_json = result.get("tx_json")
    if isinstance(tx_json, dict):
        account = _as_str(tx_json.get("Account"))
        sequence = _as_int(tx_json.get("Sequence"))
        tx_hash = _as_str(tx_json.get("hash"))

    return SubmitResult(
        url=url,
        engine_result_code=code,
        engine_result=_as_str(result.get("engine_result")),
        engine_result_message=_as_str(result.get("engine_result_message")),
        account=account,
        sequence=sequence,
        tx_hash=tx_hash,
        raw=response,
    )


def _parse_tx_response(response: dict[str, Any], url: str) -> TxStatusResult:
    """Parse a ``tx`` response into TxStatusResult.

    Handles:
        - Transaction found and validated
        - Transaction found but not yet validated
        - Transaction not found (txnNotFound error)
        - Other server-level errors
    """
    result = _result_of(response)
    status = result.get("status")

    if status != "success":
        return TxStatusResult(
            url=url,
            found=False,
            status=status,
            error=result.get("error"),
            raw=response,
        )

    # Only a literal JSON true counts.
    validated = result.get("validated") is True

    engine_result = None
    meta = result.get("meta")
    if isinstance(meta, dict):
        engine_result = _as_str(meta.get("TransactionResult"))

    return TxStatusResult(
        url=url,
        found=True,
        validated=validated,
        status=status,
        ledger_index=_as_int(result.get("ledger_index")) if validated else None,
        engine_result=engine_result,
        raw=response,
    )

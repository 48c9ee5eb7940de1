"""
Ledger client protocol — the network boundary.

Defines the interface that the sequence resolver, the submission
orchestrator and the confirmation poller depend on, not a concrete
implementation. Every method takes the endpoint URL explicitly because
node selection belongs to the callers (random for writes, ordered for
reads), not to the client.

Concrete implementations:
    - JsonRpcClient (real, over a JsonRpcTransport)
    - FakeClient (tests)

The protocol has exactly three methods:
    - account_info(url, address) → AccountInfoResult
    - submit(url, tx_blob) → SubmitResult
    - get_tx(url, tx_hash) → TxStatusResult

All return frozen dataclasses. Ledger-level failures ("status": "error")
are captured in the result objects; transport failures raise
TransportError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

# =========================================================================
# Result types
# =========================================================================


@dataclass(frozen=True)
class AccountInfoResult:
    """Result of an ``account_info`` request.

    Attributes:
        url: Endpoint that answered.
        status: ``result.status`` as reported ("success", "error", ...).
        sequence: ``account_data.Sequence`` as an int. None when the node
            reported an error or the field was missing, empty, or not an
            integer.
        error: Server error token (e.g. "actNotFound"), if any.
        raw: The full parsed response.
    """

    url: str
    status: str | None
    sequence: int | None = None
    error: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class SubmitResult:
    """Result of submitting a signed transaction blob.

    Only built from responses that carry an engine result code; anything
    else is a transport-level failure.

    Attributes:
        url: Endpoint that answered.
        engine_result_code: Numeric engine result.
        engine_result: Token form (e.g. "tesSUCCESS"), when echoed.
        engine_result_message: Human-readable explanation, when echoed.
        account: ``tx_json.Account`` (the sender), when echoed.
        sequence: ``tx_json.Sequence``, when echoed.
        tx_hash: ``tx_json.hash``, when echoed.
        raw: The full parsed response.
        confirmation: Validated tx record, set by with-check submissions.
    """

    url: str
    engine_result_code: int
    engine_result: str | None = None
    engine_result_message: str | None = None
    account: str | None = None
    sequence: int | None = None
    tx_hash: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    confirmation: TxStatusResult | None = field(default=None, compare=False)


@dataclass(frozen=True)
class TxStatusResult:
    """Result of querying a transaction by hash.

    Attributes:
        url: Endpoint that answered.
        found: Whether the node knows the transaction at all.
        validated: Whether it is in a validated ledger. Only meaningful
            when found is True.
        status: ``result.status`` as reported.
        ledger_index: Ledger the tx was included in. None unless validated.
        engine_result: Final ``meta.TransactionResult``. None if not found.
        error: Server error token (e.g. "txnNotFound"), if any.
        raw: The full parsed response.
    """

    url: str
    found: bool
    validated: bool = False
    status: str | None = None
    ledger_index: int | None = None
    engine_result: str | None = None
    error: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def confirmed(self) -> bool:
        return self.status == "success" and self.validated

    @property
    def tx_json(self) -> dict[str, Any]:
        """The transaction fields of the response (``result`` minus meta)."""
        result = self.raw.get("result", {})
        return {k: v for k, v in result.items() if k not in ("meta", "status", "validated")}


# =========================================================================
# Protocol
# =========================================================================


@runtime_checkable
class LedgerClient(Protocol):
    """Interface for ledger RPC operations against one endpoint per call."""

    async def account_info(self, url: str, address: str) -> AccountInfoResult:
        """Fetch account state (sequence) from one endpoint."""
        ...

    async def submit(self, url: str, tx_blob: str) -> SubmitResult:
        """Submit a signed transaction blob to one endpoint.

        Raises:
            TransportError: On transport failure, or when the response
                carries no engine result code.
        """
        ...

    async def get_tx(self, url: str, tx_hash: str) -> TxStatusResult:
        """Look up a transaction by hash on one endpoint."""
        ...

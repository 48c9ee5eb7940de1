"""
Error taxonomy for the Jingtum RPC client.

Every public operation either returns a well-formed result or raises one
of the exceptions below. All of them carry a machine-readable
``error_code`` and a ``details`` dict for diagnostics.

Hierarchy:
    JingtumError
    ├── ValidationError         malformed input, raised before any I/O
    ├── TransportError          timeout, connection, HTTP status, bad JSON
    ├── SequenceUnavailable     no node returned a usable account sequence
    ├── TransactionNotFound     no node reported the tx as validated
    └── SubmissionError         outcome of a submit() call
        ├── StaleSequenceError
        ├── FatalEngineError
        ├── SubmissionExhausted
        ├── SubmissionUnconfirmed
        └── SubmissionCancelled

Transport errors raised *during* a submit retry iteration are absorbed by
the orchestrator; everything else propagates to the caller.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jingtum_rpc.client import SubmitResult


class ErrorCode(StrEnum):
    """Machine-readable error categories."""

    VALIDATION = "VALIDATION"
    TIMEOUT = "TIMEOUT"
    CONNECTION_FAILED = "CONNECTION_FAILED"
    HTTP_ERROR = "HTTP_ERROR"
    INVALID_JSON = "INVALID_JSON"
    SEQUENCE_UNAVAILABLE = "SEQUENCE_UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"
    STALE_SEQUENCE = "STALE_SEQUENCE"
    ENGINE_REJECTED = "ENGINE_REJECTED"
    EXHAUSTED = "EXHAUSTED"
    UNCONFIRMED = "UNCONFIRMED"
    CANCELLED = "CANCELLED"


class JingtumError(Exception):
    """Base class for all client errors.

    Attributes:
        message: Human-readable message.
        error_code: Category for programmatic handling.
        details: Extra context (urls, engine results, addresses).
    """

    default_code = ErrorCode.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        error_code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(error_code={self.error_code!s}, message={self.message!r})"


class ValidationError(JingtumError, ValueError):
    """Malformed address, secret, amount, token, or sequence."""

    default_code = ErrorCode.VALIDATION


class TransportError(JingtumError):
    """The request never produced a usable JSON-RPC response."""

    default_code = ErrorCode.CONNECTION_FAILED

    @property
    def url(self) -> str | None:
        return self.details.get("url")


class SequenceUnavailable(JingtumError):
    """Every node was asked for the account sequence and none answered."""

    default_code = ErrorCode.SEQUENCE_UNAVAILABLE


class TransactionNotFound(JingtumError):
    """No node reported the transaction as present and validated."""

    default_code = ErrorCode.NOT_FOUND


class SubmissionError(JingtumError):
    """Final outcome of a submission that did not succeed.

    Attributes:
        response: The last parsed submit response, or None when no node
            ever returned one.
    """

    default_code = ErrorCode.EXHAUSTED

    def __init__(
        self,
        message: str,
        *,
        response: SubmitResult | None = None,
        error_code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code=error_code, details=details)
        self.response = response


class StaleSequenceError(SubmissionError):
    """The blob's sequence is behind the ledger; rebuild with a fresh one."""

    default_code = ErrorCode.STALE_SEQUENCE


class FatalEngineError(SubmissionError):
    """The ledger rejected the transaction for a non-transient reason."""

    default_code = ErrorCode.ENGINE_REJECTED


class SubmissionExhausted(SubmissionError):
    """Retry budget consumed without a single success classification."""

    default_code = ErrorCode.EXHAUSTED


class SubmissionUnconfirmed(SubmissionError):
    """Locally accepted, but never observed in a validated ledger."""

    default_code = ErrorCode.UNCONFIRMED


class SubmissionCancelled(SubmissionError):
    """The caller set the cancellation event mid-loop."""

    default_code = ErrorCode.CANCELLED

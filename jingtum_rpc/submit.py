"""
Submission orchestrator — the bounded submit/retry loop.

Drives one signed transaction blob to the network through randomly
chosen nodes, classifies each echoed engine result, keeps the sequence
cache in step with what the network reports, and, in "with-check" mode,
confirms ledger inclusion afterwards.

Each attempt ends in exactly one of five outcomes:

    TRANSPORT       no classifiable response   short + long backoff, next
    RETRYABLE       transient engine result    short + long backoff, next
    SUCCESS         applied, or already held   advance cache; no-check: stop,
                                               with-check: long backoff, next
    STALE_SEQUENCE  sequence already used      invalidate cache, stop
    FATAL           anything else              stop

The with-check loop keeps resubmitting the identical blob after a local
success until the budget runs out. Acceptance into the open ledger is
not a durable commit; only the confirmation pass decides.

Timing: an attempt costs at most one request timeout plus
``short_backoff + long_backoff``, so a whole call is bounded by
``try_times * (timeout + short_backoff + long_backoff)`` plus one
confirmation pass.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from dataclasses import dataclass

from jingtum_rpc.client import LedgerClient, SubmitResult, TxStatusResult
from jingtum_rpc.confirm import ConfirmationPoller
from jingtum_rpc.engine_result import EngineResult, ResultClass, classify_engine_result, engine_result_name
from jingtum_rpc.errors import (
    FatalEngineError,
    StaleSequenceError,
    SubmissionCancelled,
    SubmissionError,
    SubmissionExhausted,
    SubmissionUnconfirmed,
    TransactionNotFound,
    TransportError,
    ValidationError,
)
from jingtum_rpc.node_pool import NodePool
from jingtum_rpc.sequence import SequenceCache

log = logging.getLogger(__name__)

DEFAULT_SHORT_BACKOFF = 0.5
DEFAULT_LONG_BACKOFF = 2.0
MIN_TRY_TIMES = 5


@dataclass(frozen=True)
class AttemptOutcome:
    """What one submit attempt produced.

    Attributes:
        url: Node the attempt went to.
        result_class: Classification of the engine result. None when the
            attempt failed at the transport level.
        response: Parsed submit response, None on transport failure.
        error: The transport failure, None otherwise.
    """

    url: str
    result_class: ResultClass | None
    response: SubmitResult | None = None
    error: TransportError | None = None

    @property
    def transport_failed(self) -> bool:
        return self.result_class is None


class SubmissionOrchestrator:
    """Submits a signed blob with retries, failover and sequence upkeep.

    Args:
        pool: Nodes to submit to (one picked at random per attempt).
        client: Ledger client used for submit and tx lookups.
        cache: Sequence cache updated from echoed tx_json fields.
        try_times: Attempt budget per call. None means
            ``max(5, len(pool))``.
        short_backoff: Seconds slept after a retryable or transport failure.
        long_backoff: Seconds slept at the end of every continuing iteration.
        poller: Confirmation poller for with-check submissions. Defaults
            to one over the same pool and client.
    """

    def __init__(
        self,
        pool: NodePool,
        client: LedgerClient,
        cache: SequenceCache,
        *,
        try_times: int | None = None,
        short_backoff: float = DEFAULT_SHORT_BACKOFF,
        long_backoff: float = DEFAULT_LONG_BACKOFF,
        poller: ConfirmationPoller | None = None,
    ) -> None:
        if try_times is not None and try_times < 1:
            raise ValueError(f"try_times must be >= 1, got: {try_times}")
        if short_backoff < 0 or long_backoff < 0:
            raise ValueError("backoff intervals must be >= 0")
        self._pool = pool
        self._client = client
        self._cache = cache
        self._try_times = try_times if try_times is not None else max(MIN_TRY_TIMES, len(pool))
        self._short_backoff = short_backoff
        self._long_backoff = long_backoff
        self._poller = poller or ConfirmationPoller(pool, client)

    @property
    def try_times(self) -> int:
        return self._try_times

    @try_times.setter
    def try_times(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"try_times must be >= 1, got: {value}")
        self._try_times = value

    @property
    def cache(self) -> SequenceCache:
        return self._cache

    # -----------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------

    async def submit(
        self,
        tx_blob: str,
        expected_hash: str | None = None,
        *,
        confirm: bool = False,
        cancel: asyncio.Event | None = None,
    ) -> SubmitResult:
        """Submit ``tx_blob`` until accepted, rejected, or out of budget.

        Args:
            tx_blob: Signed, encoded transaction (opaque).
            expected_hash: Hash of the signed transaction. Required when
                ``confirm`` is True.
            confirm: With-check mode. Keep resubmitting after a local
                success, then require ledger validation of ``expected_hash``.
            cancel: Optional event; when set, the loop stops at the next
                loop top or backoff with SubmissionCancelled.

        Returns:
            The provisional success response. In with-check mode its
            ``confirmation`` field holds the validated tx record.

        Raises:
            ValidationError: Empty blob, or confirm without expected_hash.
            StaleSequenceError: tefPAST_SEQ; the cache entry is gone and
                the transaction must be rebuilt.
            FatalEngineError: Non-transient rejection.
            TransportError: Every attempt failed at the transport level.
            SubmissionExhausted: Budget spent without a success.
            SubmissionUnconfirmed: Success seen, validation not.
            SubmissionCancelled: ``cancel`` was set.

        A sequence advanced in the cache by a local success stays advanced
        even when the call ultimately raises.
        """
        if not tx_blob:
            raise ValidationError("tx_blob must be non-empty")
        if confirm and not expected_hash:
            raise ValidationError("expected_hash is required when confirm=True")

        budget = self._try_times
        success: SubmitResult | None = None
        last: AttemptOutcome | None = None
        last_response: SubmitResult | None = None

        while True:
            self._raise_if_cancelled(cancel, last_response)
            if budget <= 0:
                break
            budget -= 1

            outcome = await self._attempt(tx_blob)
            last = outcome
            if outcome.response is not None:
                last_response = outcome.response

            if outcome.result_class is ResultClass.STALE_SEQUENCE:
                self._on_stale(outcome)
                break
            if outcome.result_class is ResultClass.FATAL:
                break
            if outcome.result_class is ResultClass.SUCCESS:
                success = outcome.response
                self._on_success(outcome)
                if not confirm:
                    break
            else:
                await self._pause(self._short_backoff, cancel, last_response)
            await self._pause(self._long_backoff, cancel, last_response)

        if confirm:
            assert expected_hash is not None
            return await self._confirm(expected_hash, success, last, last_response)

        if success is not None:
            return success
        raise self._failure(last, last_response)

    # -----------------------------------------------------------------
    # One attempt
    # -----------------------------------------------------------------

    async def _attempt(self, tx_blob: str) -> AttemptOutcome:
        url = self._pool.random_url()
        try:
            response = await self._client.submit(url, tx_blob)
        except TransportError as e:
            log.warning("submit to %s failed: %s", url, e)
            return AttemptOutcome(url=url, result_class=None, error=e)

        result_class = classify_engine_result(response.engine_result_code)
        log.info(
            "submit to %s: %s (%d) -> %s",
            url,
            response.engine_result or engine_result_name(response.engine_result_code),
            response.engine_result_code,
            result_class,
        )
        return AttemptOutcome(url=url, result_class=result_class, response=response)

    def _on_success(self, outcome: AttemptOutcome) -> None:
        response = outcome.response
        assert response is not None
        if response.account is None or response.sequence is None:
            log.warning("success from %s did not echo Account/Sequence; cache not advanced", outcome.url)
            return
        try:
            next_sequence = self._cache.advance(response.account, response.sequence)
        except ValidationError as e:
            log.warning("cannot advance sequence for %r: %s", response.account, e)
            return
        log.debug("sequence for %s advanced to %d", response.account, next_sequence)

    def _on_stale(self, outcome: AttemptOutcome) -> None:
        response = outcome.response
        assert response is not None
        if response.account is None:
            log.warning("stale sequence from %s did not echo Account; nothing invalidated", outcome.url)
            return
        self._cache.invalidate(response.account)
        log.warning(
            "stale sequence %s for %s; cache entry dropped",
            response.sequence,
            response.account,
        )

    # -----------------------------------------------------------------
    # After the loop
    # -----------------------------------------------------------------

    async def _confirm(
        self,
        expected_hash: str,
        success: SubmitResult | None,
        last: AttemptOutcome | None,
        last_response: SubmitResult | None,
    ) -> SubmitResult:
        try:
            record = await self._poller.confirm(expected_hash)
        except TransactionNotFound as e:
            if success is not None:
                raise SubmissionUnconfirmed(
                    f"tx {expected_hash} accepted but not validated",
                    response=last_response,
                    details={"tx_hash": expected_hash},
                ) from e
            raise self._failure(last, last_response) from e

        base = success or last_response or _from_record(record, expected_hash)
        return dataclasses.replace(base, confirmation=record)

    def _failure(
        self,
        last: AttemptOutcome | None,
        last_response: SubmitResult | None,
    ) -> SubmissionError | TransportError:
        if last is not None and last.result_class is ResultClass.STALE_SEQUENCE:
            return StaleSequenceError(
                f"sequence {_seq(last)} already used by {_account(last)}; rebuild the transaction",
                response=last.response,
                details={"account": _account(last), "sequence": _seq(last)},
            )
        if last is not None and last.result_class is ResultClass.FATAL:
            assert last.response is not None
            name = last.response.engine_result or engine_result_name(last.response.engine_result_code)
            return FatalEngineError(
                f"rejected by {last.url}: {name} ({last.response.engine_result_code})",
                response=last.response,
                details={
                    "engine_result": name,
                    "engine_result_code": last.response.engine_result_code,
                    "message": last.response.engine_result_message,
                },
            )
        if last is not None and last.error is not None and last_response is None:
            return last.error
        return SubmissionExhausted(
            f"no success after {self._try_times} attempts",
            response=last_response,
            details={"try_times": self._try_times},
        )

    # -----------------------------------------------------------------
    # Waiting and cancellation
    # -----------------------------------------------------------------

    def _raise_if_cancelled(
        self, cancel: asyncio.Event | None, last_response: SubmitResult | None
    ) -> None:
        if cancel is not None and cancel.is_set():
            raise SubmissionCancelled("submission cancelled", response=last_response)

    async def _pause(
        self,
        seconds: float,
        cancel: asyncio.Event | None,
        last_response: SubmitResult | None,
    ) -> None:
        if cancel is None:
            await asyncio.sleep(seconds)
            return
        self._raise_if_cancelled(cancel, last_response)
        try:
            await asyncio.wait_for(cancel.wait(), timeout=seconds)
        except TimeoutError:
            return
        self._raise_if_cancelled(cancel, last_response)


def _account(outcome: AttemptOutcome) -> str | None:
    return outcome.response.account if outcome.response is not None else None


def _seq(outcome: AttemptOutcome) -> int | None:
    return outcome.response.sequence if outcome.response is not None else None


def _from_record(record: TxStatusResult, tx_hash: str) -> SubmitResult:
    """SubmitResult stand-in for a tx validated without any submit response."""
    tx_json = record.tx_json
    code = EngineResult.__members__.get(record.engine_result or "", EngineResult.tesSUCCESS)
    account = tx_json.get("Account")
    sequence = tx_json.get("Sequence")
    echoed_hash = tx_json.get("hash")
    return SubmitResult(
        url=record.url,
        engine_result_code=int(code),
        engine_result=record.engine_result,
        account=account if isinstance(account, str) else None,
        sequence=sequence if isinstance(sequence, int) and not isinstance(sequence, bool) else None,
        tx_hash=echoed_hash if isinstance(echoed_hash, str) else tx_hash,
        raw=record.raw,
    )

"""
Jingtum — high-level client facade.

Wires the pieces together for the common flows:

    secret → Signer → sequence (cache or nodes) → tx recipe → sign
           → SubmissionOrchestrator → (with-check) ConfirmationPoller

Usage:
    client = Jingtum(
        ["https://node1.example:5050", "https://node2.example:5050"],
        signer_factory=my_wallet_factory,
    )
    result = await client.payment(secret, receiver, "SWT", "1.5", memo="rent")

``check=True`` (with-check) resubmits until the budget runs out and then
requires ledger validation; ``check=False`` returns on the first local
success. Cancelling an offer always uses no-check.

The facade never stores secrets. Each call turns the secret into a
Signer through ``signer_factory`` and drops it afterwards.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from jingtum_rpc.client import SubmitResult, TxStatusResult
from jingtum_rpc.config import Config
from jingtum_rpc.confirm import ConfirmationPoller
from jingtum_rpc.errors import ValidationError
from jingtum_rpc.jsonrpc_client import JsonRpcClient
from jingtum_rpc.memo import decode_memo_hex
from jingtum_rpc.node_pool import NodePool
from jingtum_rpc.sequence import SequenceCache, SequenceResolver
from jingtum_rpc.signer import Signer, SignerFactory
from jingtum_rpc.submit import SubmissionOrchestrator
from jingtum_rpc.transport import HttpxTransport, JsonRpcTransport
from jingtum_rpc.tx import Amount, build_amount, plan_offer_cancel, plan_offer_create, plan_payment
from jingtum_rpc.wallet import AddressValidator, is_valid_secret

log = logging.getLogger(__name__)


class Jingtum:
    """Client for one Jingtum network.

    Args:
        nodes: JSON-RPC endpoint URLs.
        config: Runtime settings. Defaults to ``Config()``.
        signer_factory: Turns a wallet secret into a Signer. Required
            for payment / create_order / cancel_order.
        transport: JSON-RPC transport. Defaults to HttpxTransport with
            ``config.timeout``.
    """

    def __init__(
        self,
        nodes: Iterable[str],
        config: Config | None = None,
        *,
        signer_factory: SignerFactory | None = None,
        transport: JsonRpcTransport | None = None,
    ) -> None:
        self._config = config or Config()
        self._signer_factory = signer_factory
        self._validator = AddressValidator(self._config.alphabet)

        self._pool = NodePool(nodes)
        self._client = JsonRpcClient(transport or HttpxTransport(timeout=self._config.timeout))
        self._cache = SequenceCache(self._validator)
        self._resolver = SequenceResolver(self._pool, self._client, self._cache)
        self._poller = ConfirmationPoller(self._pool, self._client)
        self._orchestrator = SubmissionOrchestrator(
            self._pool,
            self._client,
            self._cache,
            try_times=self._config.attempts_for(len(self._pool)),
            short_backoff=self._config.short_backoff,
            long_backoff=self._config.long_backoff,
            poller=self._poller,
        )

    def __repr__(self) -> str:
        return f"Jingtum(nodes={len(self._pool)}, fee={self.fee}, currency={self.currency!r})"

    # -----------------------------------------------------------------
    # Settings
    # -----------------------------------------------------------------

    @property
    def config(self) -> Config:
        return self._config

    @property
    def currency(self) -> str:
        return self._config.currency

    @property
    def fee(self) -> int:
        return self._config.fee

    @fee.setter
    def fee(self, value: int) -> None:
        self._config = self._config.replace(fee=value)

    @property
    def platform(self) -> str | None:
        return self._config.platform

    @platform.setter
    def platform(self, value: str | None) -> None:
        self._config = self._config.replace(platform=value)

    @property
    def issuer(self) -> str | None:
        return self._config.issuer

    @issuer.setter
    def issuer(self, value: str | None) -> None:
        self._config = self._config.replace(issuer=value)

    @property
    def try_times(self) -> int:
        return self._orchestrator.try_times

    @try_times.setter
    def try_times(self, value: int) -> None:
        self._config = self._config.replace(try_times=value)
        self._orchestrator.try_times = value

    @property
    def nodes(self) -> tuple[str, ...]:
        return self._pool.all_urls()

    # -----------------------------------------------------------------
    # Validation helpers
    # -----------------------------------------------------------------

    def is_valid_address(self, address: str) -> bool:
        return self._validator(address)

    def is_valid_secret(self, secret: str) -> bool:
        return is_valid_secret(secret, self._config.alphabet)

    def get_address(self, secret: str) -> str:
        """Address controlled by ``secret``."""
        return self._signer(secret).account

    # -----------------------------------------------------------------
    # Building blocks
    # -----------------------------------------------------------------

    async def get_sequence(self, address: str) -> int:
        """Next sequence for ``address``, from cache or the first answering node."""
        return await self._resolver.resolve(address)

    def set_sequence(self, address: str, sequence: int) -> None:
        """Overwrite the cached sequence for ``address``."""
        self._cache.set(address, sequence)

    async def request_tx(self, tx_hash: str) -> TxStatusResult:
        """Validated record of ``tx_hash`` from the first node that has one.

        Raises:
            TransactionNotFound: No node reports it validated.
        """
        return await self._poller.confirm(tx_hash)

    @staticmethod
    def get_memo_data(memo_data_hex: str) -> str:
        return decode_memo_hex(memo_data_hex)

    async def submit_with_check(
        self, tx_blob: str, tx_hash: str, *, cancel: asyncio.Event | None = None
    ) -> SubmitResult:
        return await self._orchestrator.submit(tx_blob, tx_hash, confirm=True, cancel=cancel)

    async def submit_no_check(
        self, tx_blob: str, *, cancel: asyncio.Event | None = None
    ) -> SubmitResult:
        return await self._orchestrator.submit(tx_blob, confirm=False, cancel=cancel)

    # -----------------------------------------------------------------
    # Transactions
    # -----------------------------------------------------------------

    async def payment(
        self,
        secret: str,
        receiver: str,
        token: str,
        amount: str,
        issuer: str | None = None,
        memo: str = "",
        check: bool = True,
    ) -> SubmitResult:
        """Pay ``amount`` of ``token`` to ``receiver``.

        ``issuer`` defaults to the configured issuer and is only needed
        for non-native tokens.

        Raises:
            ValidationError: Bad secret, receiver, issuer, token or amount.
            SequenceUnavailable: No node reported the sender's sequence.
            SubmissionError / TransportError: See SubmissionOrchestrator.submit.
        """
        signer = self._signer(secret)
        self._require_address("receiver", receiver)
        tx_amount = self._amount(amount, token, issuer)

        sequence = await self.get_sequence(signer.account)
        tx = plan_payment(
            signer.account,
            receiver,
            tx_amount,
            fee=self.fee,
            sequence=sequence,
            memo=memo,
        )
        return await self._sign_and_submit(signer, tx, check)

    async def create_order(
        self,
        secret: str,
        pay_token: str,
        pay_amount: str,
        get_token: str,
        get_amount: str,
        pay_issuer: str | None = None,
        get_issuer: str | None = None,
        memo: str = "",
        check: bool = True,
    ) -> SubmitResult:
        """Place an offer paying ``pay_amount`` of ``pay_token`` for
        ``get_amount`` of ``get_token``.

        The offer's sequence (``result.sequence``) is what cancel_order
        takes.
        """
        signer = self._signer(secret)
        taker_gets = self._amount(pay_amount, pay_token, pay_issuer)
        taker_pays = self._amount(get_amount, get_token, get_issuer)

        sequence = await self.get_sequence(signer.account)
        tx = plan_offer_create(
            signer.account,
            taker_pays,
            taker_gets,
            fee=self.fee,
            sequence=sequence,
            platform=self.platform,
            memo=memo,
        )
        return await self._sign_and_submit(signer, tx, check)

    async def cancel_order(self, secret: str, offer_sequence: int) -> SubmitResult:
        """Cancel the offer created at ``offer_sequence``. Always no-check."""
        signer = self._signer(secret)
        if offer_sequence < 1:
            raise ValidationError(f"offer_sequence must be >= 1, got: {offer_sequence}")

        sequence = await self.get_sequence(signer.account)
        tx = plan_offer_cancel(signer.account, offer_sequence, fee=self.fee, sequence=sequence)
        return await self._sign_and_submit(signer, tx, check=False)

    # -----------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------

    def _signer(self, secret: str) -> Signer:
        if not self.is_valid_secret(secret):
            raise ValidationError("secret is not a valid wallet secret")
        if self._signer_factory is None:
            raise ValidationError("no signer_factory configured")
        return self._signer_factory(secret)

    def _require_address(self, name: str, address: str | None) -> str:
        if not address or not self.is_valid_address(address):
            raise ValidationError(f"{name} is not a valid address: {address!r}")
        return address

    def _amount(self, value: str, token: str, issuer: str | None) -> Amount:
        code = (token or "").strip().upper()
        if code and code != self.currency.upper():
            issuer = self._require_address("issuer", issuer or self.issuer)
        return build_amount(value, token, native_currency=self.currency, issuer=issuer)

    async def _sign_and_submit(
        self, signer: Signer, tx: dict[str, object], check: bool
    ) -> SubmitResult:
        signed = signer.sign(tx)
        log.info(
            "%s from %s seq=%s hash=%s check=%s",
            tx["TransactionType"],
            signer.account,
            tx["Sequence"],
            signed.tx_hash,
            check,
        )
        if check:
            return await self.submit_with_check(signed.tx_blob, signed.tx_hash)
        return await self.submit_no_check(signed.tx_blob)

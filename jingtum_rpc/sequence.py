"""
Account sequence cache and resolution.

The cache maps an account address to the next unused sequence number.
Entries are created lazily from the network (``SequenceResolver``),
advanced to ``reported + 1`` when a submit is classified as success,
overwritten by explicit ``set``, and removed when the network reports
the sequence as already used (tefPAST_SEQ).

Locking: every cache operation holds one exclusive lock for its own
duration only. The lock is never held across a network round trip, so
submissions for unrelated accounts do not serialize on each other.
Callers that need read-modify-write across an await must coordinate
themselves.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from jingtum_rpc.client import LedgerClient
from jingtum_rpc.errors import SequenceUnavailable, TransportError, ValidationError
from jingtum_rpc.node_pool import NodePool
from jingtum_rpc.wallet import AddressValidator

log = logging.getLogger(__name__)

MAX_SEQUENCE = 0xFFFFFFFF


class SequenceCache:
    """Thread-safe address → next-sequence mapping.

    Args:
        address_validator: Format check applied by ``set``. Defaults to
            the Jingtum alphabet.
    """

    def __init__(self, address_validator: Callable[[str], bool] | None = None) -> None:
        self._is_valid_address = address_validator or AddressValidator()
        self._entries: dict[str, int] = {}
        self._lock = threading.Lock()

    def is_valid_address(self, address: str) -> bool:
        return self._is_valid_address(address)

    def get(self, address: str) -> int | None:
        """Cached next sequence for ``address``, or None if absent."""
        with self._lock:
            return self._entries.get(address)

    def set(self, address: str, sequence: int) -> None:
        """Overwrite the next sequence for ``address``.

        Raises:
            ValidationError: If ``address`` is malformed or ``sequence``
                is outside the unsigned 32-bit range.
        """
        if not self._is_valid_address(address):
            raise ValidationError(f"invalid address: {address!r}", details={"address": address})
        if isinstance(sequence, bool) or not isinstance(sequence, int):
            raise ValidationError(f"sequence must be an int, got: {sequence!r}")
        if sequence < 0:
            raise ValidationError(f"sequence must be >= 0, got: {sequence}")
        if sequence > MAX_SEQUENCE:
            raise ValidationError(f"sequence must fit in 32 bits, got: {sequence}")
        with self._lock:
            self._entries[address] = sequence

    def advance(self, address: str, reported_sequence: int) -> int:
        """Record that ``reported_sequence`` was consumed; store the next one."""
        next_sequence = reported_sequence + 1
        self.set(address, next_sequence)
        return next_sequence

    def invalidate(self, address: str) -> None:
        """Drop the entry for ``address`` so the next use refetches it."""
        with self._lock:
            self._entries.pop(address, None)

    def snapshot(self) -> dict[str, int]:
        """Copy of every cached entry."""
        with self._lock:
            return dict(self._entries)

    def __contains__(self, address: object) -> bool:
        with self._lock:
            return address in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class SequenceResolver:
    """Resolves an account's next sequence, cache first, then the network.

    On a cache miss every node is asked in pool order (not at random, so
    the first generally-available node answers) until one returns a
    usable ``account_data.Sequence``. A failing node is skipped, never
    retried.
    """

    def __init__(self, pool: NodePool, client: LedgerClient, cache: SequenceCache) -> None:
        self._pool = pool
        self._client = client
        self._cache = cache

    @property
    def cache(self) -> SequenceCache:
        return self._cache

    async def resolve(self, address: str) -> int:
        """Next sequence to use for ``address``.

        Raises:
            ValidationError: If ``address`` is malformed (no I/O happens).
            SequenceUnavailable: If no node returned a usable sequence.
        """
        if not self._cache.is_valid_address(address):
            raise ValidationError(f"invalid address: {address!r}", details={"address": address})

        cached = self._cache.get(address)
        if cached is not None:
            return cached

        errors: dict[str, str] = {}
        for url in self._pool.all_urls():
            try:
                info = await self._client.account_info(url, address)
            except TransportError as e:
                log.debug("account_info on %s failed: %s", url, e)
                errors[url] = str(e)
                continue
            if info.status != "success" or info.sequence is None:
                log.debug("account_info on %s unusable: status=%s error=%s", url, info.status, info.error)
                errors[url] = info.error or f"status={info.status}"
                continue
            if not 0 <= info.sequence <= MAX_SEQUENCE:
                log.warning("account_info on %s returned out-of-range sequence %d", url, info.sequence)
                errors[url] = f"sequence out of range: {info.sequence}"
                continue

            self._cache.set(address, info.sequence)
            log.debug("resolved sequence %d for %s from %s", info.sequence, address, url)
            return info.sequence

        raise SequenceUnavailable(
            f"no node returned a sequence for {address}",
            details={"address": address, "errors": errors},
        )

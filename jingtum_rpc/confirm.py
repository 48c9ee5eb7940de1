"""
Confirmation poller — is the transaction in a validated ledger?

One call is one pass over the pool: every node is asked for the
transaction by hash (``binary`` off) in pool order, and the first answer
with ``status == "success"`` and ``validated is True`` wins.

A transaction that is known but not yet validated counts as absent for
the pass, as does a node that fails at the transport level. There is no
sleep and no retry inside a pass; the caller owns the polling cadence.
"""

from __future__ import annotations

import logging

from jingtum_rpc.client import LedgerClient, TxStatusResult
from jingtum_rpc.errors import TransactionNotFound, TransportError, ValidationError
from jingtum_rpc.node_pool import NodePool

log = logging.getLogger(__name__)


class ConfirmationPoller:
    """Looks a transaction up across the whole pool, once."""

    def __init__(self, pool: NodePool, client: LedgerClient) -> None:
        self._pool = pool
        self._client = client

    async def confirm(self, tx_hash: str) -> TxStatusResult:
        """Return the first validated record of ``tx_hash``.

        Issues exactly one ``tx`` request per node unless an earlier node
        already confirmed it.

        Raises:
            ValidationError: If ``tx_hash`` is empty.
            TransactionNotFound: If no node reported the transaction as
                present and validated during this pass.
        """
        if not tx_hash:
            raise ValidationError("tx_hash must be non-empty")

        seen: dict[str, str] = {}
        for url in self._pool.all_urls():
            try:
                record = await self._client.get_tx(url, tx_hash)
            except TransportError as e:
                log.debug("tx %s on %s failed: %s", tx_hash, url, e)
                seen[url] = str(e)
                continue

            if record.confirmed:
                log.info("tx %s validated in ledger %s (per %s)", tx_hash, record.ledger_index, url)
                return record

            seen[url] = "pending" if record.found else (record.error or f"status={record.status}")

        raise TransactionNotFound(
            f"tx {tx_hash} not validated on any node",
            details={"tx_hash": tx_hash, "nodes": seen},
        )

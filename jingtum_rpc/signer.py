"""
Signer protocol — the secrets boundary.

Defines the interface used to sign transactions. This package never
sees private keys or binary encodings: it passes an unsigned transaction
dict and receives a signed blob plus the hash the network will know the
transaction by.

Concrete implementations live outside this package (chain SDK wallets,
HSM bridges). Tests use a FakeSigner.

A ``SignerFactory`` turns a wallet secret into a Signer; the facade
validates the secret's format before calling it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class SignResult:
    """Result of signing a transaction.

    Attributes:
        tx_blob: Hex-encoded signed transaction, ready for submit.
        tx_hash: Hash of the signed transaction (64 hex chars), used to
            confirm ledger inclusion.
    """

    tx_blob: str
    tx_hash: str


@runtime_checkable
class Signer(Protocol):
    """Interface for transaction signing.

    Properties:
        account: The address the signing key controls.
    """

    @property
    def account(self) -> str:
        """Address associated with this signer."""
        ...

    def sign(self, tx_dict: dict[str, object]) -> SignResult:
        """Sign an unsigned transaction dict.

        Args:
            tx_dict: Unsigned transaction with Sequence and Fee filled in.

        Returns:
            SignResult with the signed blob and its hash.

        Raises:
            ValueError: If the transaction dict cannot be encoded.
        """
        ...


SignerFactory = Callable[[str], Signer]

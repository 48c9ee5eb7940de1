"""
Address and secret format checks.

Only the *format* is checked: base58check decoding with the chain's
alphabet, the version prefix and the payload length. Key derivation
and signing live behind the Signer protocol.

Each consortium chain may use its own alphabet; the public Jingtum chain
uses JINGTUM_ALPHABET (XRPL's alphabet with ``r`` and ``j`` swapped, so
addresses start with ``j``).
"""

from __future__ import annotations

import base58

JINGTUM_ALPHABET = "jpshnaf39wBUDNEGHJKLM4PQRST7VWXYZ2bcdeCg65rkm8oFqi1tuvAxyz"

XRP_ALPHABET = base58.XRP_ALPHABET.decode("ascii")

# Version bytes and payload sizes.
_ACCOUNT_ID_PREFIX = 0x00
_ACCOUNT_ID_LENGTH = 20
_SEED_PREFIX = 0x21
_SEED_LENGTH = 16


def validate_alphabet(alphabet: str) -> str:
    """Return ``alphabet`` if it is 58 distinct ASCII characters.

    Raises:
        ValueError: Otherwise.
    """
    if len(alphabet) != 58 or len(set(alphabet)) != 58 or not alphabet.isascii():
        raise ValueError(f"alphabet must be 58 distinct ASCII characters, got: {alphabet!r}")
    return alphabet


def _decode(value: str, alphabet: str) -> bytes | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return base58.b58decode_check(value, alphabet=alphabet.encode("ascii"))
    except ValueError:
        return None


def is_valid_address(address: str, alphabet: str = JINGTUM_ALPHABET) -> bool:
    """Check that ``address`` is a well-formed account address."""
    decoded = _decode(address, alphabet)
    return (
        decoded is not None
        and len(decoded) == 1 + _ACCOUNT_ID_LENGTH
        and decoded[0] == _ACCOUNT_ID_PREFIX
    )


def is_valid_secret(secret: str, alphabet: str = JINGTUM_ALPHABET) -> bool:
    """Check that ``secret`` is a well-formed family seed."""
    decoded = _decode(secret, alphabet)
    return (
        decoded is not None
        and len(decoded) == 1 + _SEED_LENGTH
        and decoded[0] == _SEED_PREFIX
    )


class AddressValidator:
    """Callable address check bound to one alphabet.

    >>> check = AddressValidator(JINGTUM_ALPHABET)
    >>> check("jHb9CJAWyB4jr91VRWn96DkukG4bwdtyTh")
    True
    """

    def __init__(self, alphabet: str = JINGTUM_ALPHABET) -> None:
        self.alphabet = validate_alphabet(alphabet)

    def __call__(self, address: str) -> bool:
        return is_valid_address(address, self.alphabet)

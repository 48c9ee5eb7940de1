"""
Client configuration.

One frozen dataclass holds everything the client reads at runtime:
transaction defaults (fee, base currency, platform, issuer), the address
alphabet, and the retry/backoff/timeout knobs of the submission loop.

Loaders:
    - ``Config()`` — defaults
    - ``Config.from_env()`` — JINGTUM_* environment variables
    - ``Config.from_toml(path)`` — a TOML file with the same keys

Environment variables:
    JINGTUM_FEE, JINGTUM_CURRENCY, JINGTUM_ALPHABET, JINGTUM_PLATFORM,
    JINGTUM_ISSUER, JINGTUM_TRY_TIMES, JINGTUM_SHORT_BACKOFF,
    JINGTUM_LONG_BACKOFF, JINGTUM_TIMEOUT
"""

from __future__ import annotations

import dataclasses
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jingtum_rpc.errors import ValidationError
from jingtum_rpc.wallet import JINGTUM_ALPHABET, is_valid_address, validate_alphabet

log = logging.getLogger(__name__)

MIN_FEE = 10
MAX_FEE = 1_000_000_000

_ENV_PREFIX = "JINGTUM_"


def _get_env(key: str, default: str | None = None) -> str | None:
    value = os.getenv(_ENV_PREFIX + key)
    if value is None or value == "":
        return default
    return value


def _get_env_int(key: str, default: int | None) -> int | None:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        log.warning("Invalid int value for %s%s=%r, using default=%s", _ENV_PREFIX, key, value, default)
        return default


def _get_env_float(key: str, default: float) -> float:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        log.warning("Invalid float value for %s%s=%r, using default=%s", _ENV_PREFIX, key, value, default)
        return default


@dataclass(frozen=True)
class Config:
    """Runtime settings.

    Attributes:
        fee: Fee per transaction in drops (10 to 1e9). fee / 1e6 is the
            amount of base currency burned.
        currency: Base (native) currency code, also the fee currency.
        alphabet: Base58 alphabet used for addresses and secrets.
        platform: Platform account stamped on offers, or None.
        issuer: Default issuer for non-native tokens, or None.
        try_times: Submit attempts per transaction. None means
            ``max(5, number of nodes)``.
        short_backoff: Seconds slept after a retryable or failed attempt.
        long_backoff: Seconds slept at the end of every loop iteration.
        timeout: Per-request HTTP timeout in seconds.
    """

    fee: int = MIN_FEE
    currency: str = "SWT"
    alphabet: str = JINGTUM_ALPHABET
    platform: str | None = None
    issuer: str | None = None
    try_times: int | None = None
    short_backoff: float = 0.5
    long_backoff: float = 2.0
    timeout: float = 30.0

    def __post_init__(self) -> None:
        if not MIN_FEE <= self.fee <= MAX_FEE:
            raise ValidationError(f"fee must be between {MIN_FEE} and {MAX_FEE} drops, got: {self.fee}")
        if not self.currency:
            raise ValidationError("currency must be non-empty")
        try:
            validate_alphabet(self.alphabet)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        for name in ("platform", "issuer"):
            value = getattr(self, name)
            if value is not None and not is_valid_address(value, self.alphabet):
                raise ValidationError(f"{name} is not a valid address: {value!r}")
        if self.try_times is not None and self.try_times < 1:
            raise ValidationError(f"try_times must be >= 1, got: {self.try_times}")
        if self.short_backoff < 0 or self.long_backoff < 0:
            raise ValidationError("backoff intervals must be >= 0")
        if self.timeout <= 0:
            raise ValidationError(f"timeout must be > 0, got: {self.timeout}")

    def attempts_for(self, node_count: int) -> int:
        """Effective retry budget for a pool of ``node_count`` nodes."""
        if self.try_times is not None:
            return self.try_times
        return max(5, node_count)

    def replace(self, **changes: Any) -> Config:
        """Validated copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls) -> Config:
        """Build a Config from JINGTUM_* environment variables."""
        defaults = cls()
        return cls(
            fee=_get_env_int("FEE", defaults.fee),
            currency=(_get_env("CURRENCY", defaults.currency) or defaults.currency).upper(),
            alphabet=_get_env("ALPHABET", defaults.alphabet) or defaults.alphabet,
            platform=_get_env("PLATFORM"),
            issuer=_get_env("ISSUER"),
            try_times=_get_env_int("TRY_TIMES", None),
            short_backoff=_get_env_float("SHORT_BACKOFF", defaults.short_backoff),
            long_backoff=_get_env_float("LONG_BACKOFF", defaults.long_backoff),
            timeout=_get_env_float("TIMEOUT", defaults.timeout),
        )

    @classmethod
    def from_toml(cls, path: str | Path) -> Config:
        """Build a Config from a TOML file.

        Keys match the attribute names, either at top level or under a
        ``[jingtum]`` table. Unknown keys raise ValidationError.
        """
        data = tomllib.loads(Path(path).read_text())
        section = data.get("jingtum", data)
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(section) - known)
        if unknown:
            raise ValidationError(f"unknown config keys: {', '.join(unknown)}")
        return cls(**section)

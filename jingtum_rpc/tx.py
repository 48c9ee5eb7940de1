"""
Transaction recipes.

Builds unsigned transaction dicts for Payment, OfferCreate and
OfferCancel. These are pure "recipes": no network calls, no secrets,
no binary encoding. The caller supplies Sequence and Fee (network state
and configuration) and hands the dict to a Signer.

Amounts:
    - Native currency: a string of drops (1 unit = 1,000,000 drops).
    - Tokens: {"currency": TOKEN, "issuer": address, "value": "1.5"}.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from jingtum_rpc.errors import ValidationError
from jingtum_rpc.memo import build_memos

DROPS_PER_UNIT = Decimal(1_000_000)

Amount = str | dict[str, str]


def parse_positive_amount(value: str | Decimal) -> Decimal:
    """Parse an amount string, rejecting empty, non-numeric and <= 0.

    Raises:
        ValidationError: On any of the above.
    """
    if isinstance(value, str) and not value.strip():
        raise ValidationError("amount must be non-empty")
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValidationError(f"amount is not a number: {value!r}") from e
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"amount must be > 0, got: {value!r}")
    return amount


def build_amount(
    value: str | Decimal,
    token: str,
    *,
    native_currency: str,
    issuer: str | None = None,
) -> Amount:
    """Amount field for ``value`` of ``token``.

    Args:
        value: Positive decimal amount in whole units.
        token: Currency code; upper-cased.
        native_currency: Code of the chain's base currency.
        issuer: Issuer address, required for non-native tokens.

    Raises:
        ValidationError: Bad amount, empty token, missing issuer, or a
            native amount finer than one drop.
    """
    if not token or not token.strip():
        raise ValidationError("token must be non-empty")
    amount = parse_positive_amount(value)
    code = token.strip().upper()

    if code == native_currency.upper():
        drops = amount * DROPS_PER_UNIT
        if drops != drops.to_integral_value():
            raise ValidationError(f"native amount finer than one drop: {value!r}")
        return str(int(drops))

    if not issuer:
        raise ValidationError(f"issuer is required for token {code}")
    return {"currency": code, "issuer": issuer, "value": format(amount.normalize(), "f")}


def _base(tx_type: str, account: str, fee: int, sequence: int) -> dict[str, object]:
    if not account:
        raise ValidationError("account must be non-empty")
    if sequence < 0:
        raise ValidationError(f"sequence must be >= 0, got: {sequence}")
    return {
        "TransactionType": tx_type,
        "Account": account,
        "Fee": str(fee),
        "Sequence": sequence,
    }


def plan_payment(
    account: str,
    destination: str,
    amount: Amount,
    *,
    fee: int,
    sequence: int,
    memo: str = "",
) -> dict[str, object]:
    """Build an unsigned Payment.

    Raises:
        ValidationError: If account or destination is empty.
    """
    if not destination:
        raise ValidationError("destination must be non-empty")
    tx = _base("Payment", account, fee, sequence)
    tx["Destination"] = destination
    tx["Amount"] = amount
    tx["Flags"] = 0
    memos = build_memos(memo)
    if memos:
        tx["Memos"] = memos
    return tx


def plan_offer_create(
    account: str,
    taker_pays: Amount,
    taker_gets: Amount,
    *,
    fee: int,
    sequence: int,
    platform: str | None = None,
    memo: str = "",
) -> dict[str, object]:
    """Build an unsigned OfferCreate.

    ``taker_gets`` is what the offer owner pays; ``taker_pays`` is what
    the owner wants in return.
    """
    tx = _base("OfferCreate", account, fee, sequence)
    tx["TakerPays"] = taker_pays
    tx["TakerGets"] = taker_gets
    if platform:
        tx["Platform"] = platform
    memos = build_memos(memo)
    if memos:
        tx["Memos"] = memos
    return tx


def plan_offer_cancel(
    account: str,
    offer_sequence: int,
    *,
    fee: int,
    sequence: int,
) -> dict[str, object]:
    """Build an unsigned OfferCancel for the offer created at ``offer_sequence``.

    Raises:
        ValidationError: If offer_sequence < 1.
    """
    if offer_sequence < 1:
        raise ValidationError(f"offer_sequence must be >= 1, got: {offer_sequence}")
    tx = _base("OfferCancel", account, fee, sequence)
    tx["OfferSequence"] = offer_sequence
    return tx

"""
Free-text transaction memos.

A memo is attached verbatim: the UTF-8 bytes of the text, hex-encoded,
in the ``MemoData`` field of a single ``Memo`` entry. Reading a memo back
from a fetched transaction reverses exactly that step; no structured
decoding is attempted.

Format:
    "Memos": [
      {"Memo": {"MemoType": hex("string"), "MemoData": hex(utf8(text))}}
    ]
"""

from __future__ import annotations

from typing import Any

from jingtum_rpc.errors import ValidationError

# Memo type identifier.
MEMO_TYPE = "string"

# Hex-encoded memo type for the MemoType field.
MEMO_TYPE_HEX = MEMO_TYPE.encode("utf-8").hex().upper()

# Maximum memo payload size in bytes (decoded).
MAX_MEMO_BYTES = 1024


def encode_memo_hex(text: str) -> str:
    """Hex-encode memo text for the MemoData field.

    Raises:
        ValidationError: If the UTF-8 encoding exceeds MAX_MEMO_BYTES.
    """
    data = text.encode("utf-8")
    if not validate_memo_size(data):
        raise ValidationError(
            f"memo exceeds {MAX_MEMO_BYTES} bytes (got {len(data)} bytes)"
        )
    return data.hex().upper()


def decode_memo_hex(memo_data_hex: str) -> str:
    """Turn a hex MemoData value back into text.

    Raises:
        ValidationError: If the value is not hex or not valid UTF-8.
    """
    try:
        return bytes.fromhex(memo_data_hex).decode("utf-8")
    except (ValueError, TypeError) as e:
        raise ValidationError(f"memo data is not hex-encoded UTF-8: {memo_data_hex!r}") from e


def validate_memo_size(payload_bytes: bytes) -> bool:
    """True if the payload fits within MAX_MEMO_BYTES."""
    return len(payload_bytes) <= MAX_MEMO_BYTES


def build_memos(text: str) -> list[dict[str, dict[str, str]]]:
    """Memos field for ``text``; empty list when there is no memo."""
    if not text:
        return []
    return [
        {
            "Memo": {
                "MemoType": MEMO_TYPE_HEX,
                "MemoData": encode_memo_hex(text),
            }
        }
    ]


def memo_texts(tx_json: dict[str, Any]) -> list[str]:
    """Decoded MemoData of every memo in a fetched transaction.

    Entries without MemoData are skipped.
    """
    texts: list[str] = []
    for entry in tx_json.get("Memos") or []:
        memo = entry.get("Memo") if isinstance(entry, dict) else None
        if not isinstance(memo, dict) or not memo.get("MemoData"):
            continue
        texts.append(decode_memo_hex(memo["MemoData"]))
    return texts

"""
Engine result classification.

Maps the numeric ``engine_result_code`` echoed by ``submit`` to one of
four classes the submission loop acts on. The table is closed: any code
not listed under success, stale sequence or retryable is fatal.

Engine result ranges (shared with the XRPL family):
    - tel: -399..-300  local failure, not forwarded
    - tem: -299..-200  malformed, will never succeed
    - tef: -199..-100  failure, not applied (tefPAST_SEQ: sequence used;
                       tefALREADY: blob already held, treated as success)
    - ter: -99..-1     retry, may succeed later
    - tes: 0           applied to the open ledger
    - tec: 100..       claimed fee only
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class EngineResult(IntEnum):
    """Known engine result codes."""

    telLOCAL_ERROR = -399
    telBAD_DOMAIN = -398
    telBAD_PATH_COUNT = -397
    telBAD_PUBLIC_KEY = -396
    telFAILED_PROCESSING = -395
    telINSUF_FEE_P = -394
    telNO_DST_PARTIAL = -393
    telCAN_NOT_QUEUE = -392
    telCAN_NOT_QUEUE_BALANCE = -391
    telCAN_NOT_QUEUE_BLOCKS = -390
    telCAN_NOT_QUEUE_BLOCKED = -389
    telCAN_NOT_QUEUE_FEE = -388
    telCAN_NOT_QUEUE_FULL = -387

    temMALFORMED = -299
    temBAD_AMOUNT = -298
    temBAD_CURRENCY = -297
    temBAD_EXPIRATION = -296
    temBAD_FEE = -295
    temBAD_ISSUER = -294
    temBAD_LIMIT = -293
    temBAD_OFFER = -292
    temBAD_PATH = -291
    temBAD_PATH_LOOP = -290

    tefFAILURE = -199
    tefALREADY = -198
    tefBAD_ADD_AUTH = -197
    tefBAD_AUTH = -196
    tefBAD_LEDGER = -195
    tefCREATED = -194
    tefEXCEPTION = -193
    tefINTERNAL = -192
    tefNO_AUTH_REQUIRED = -191
    tefPAST_SEQ = -190
    tefWRONG_PRIOR = -189
    tefMASTER_DISABLED = -188
    tefMAX_LEDGER = -187

    terRETRY = -99
    terFUNDS_SPENT = -98
    terINSUF_FEE_B = -97
    terNO_ACCOUNT = -96
    terNO_AUTH = -95
    terNO_LINE = -94
    terOWNERS = -93
    terPRE_SEQ = -92
    terLAST = -91
    terNO_RIPPLE = -90
    terQUEUED = -89

    tesSUCCESS = 0

    tecCLAIM = 100
    tecPATH_PARTIAL = 101
    tecUNFUNDED_ADD = 102
    tecUNFUNDED_OFFER = 103
    tecUNFUNDED_PAYMENT = 104
    tecFAILED_PROCESSING = 105
    tecDIR_FULL = 121
    tecINSUF_RESERVE_LINE = 122
    tecINSUF_RESERVE_OFFER = 123
    tecNO_DST = 124
    tecNO_DST_INSUF_XRP = 125
    tecNO_LINE_INSUF_RESERVE = 126
    tecNO_LINE_REDUNDANT = 127
    tecPATH_DRY = 128
    tecUNFUNDED = 129


class ResultClass(StrEnum):
    """What the submission loop should do with a response."""

    SUCCESS = "SUCCESS"
    RETRYABLE = "RETRYABLE"
    STALE_SEQUENCE = "STALE_SEQUENCE"
    FATAL = "FATAL"


# tefALREADY: the node already holds this exact blob, typically from an
# earlier attempt whose response was lost.
_SUCCESS = frozenset({EngineResult.tesSUCCESS, EngineResult.tefALREADY})

_STALE_SEQUENCE = frozenset({EngineResult.tefPAST_SEQ})

# Transient load conditions: resubmitting the identical blob may succeed.
_RETRYABLE = frozenset({
    EngineResult.telINSUF_FEE_P,
    EngineResult.telCAN_NOT_QUEUE,
    EngineResult.telCAN_NOT_QUEUE_BALANCE,
    EngineResult.telCAN_NOT_QUEUE_BLOCKS,
    EngineResult.telCAN_NOT_QUEUE_BLOCKED,
    EngineResult.telCAN_NOT_QUEUE_FEE,
    EngineResult.telCAN_NOT_QUEUE_FULL,
    EngineResult.terRETRY,
    EngineResult.terINSUF_FEE_B,
    EngineResult.terPRE_SEQ,
    EngineResult.terQUEUED,
})


def classify_engine_result(code: int) -> ResultClass:
    """Map an engine result code to a ResultClass.

    Args:
        code: ``engine_result_code`` from a submit response.

    Returns:
        SUCCESS, STALE_SEQUENCE or RETRYABLE for codes in the table,
        FATAL for everything else (unknown codes included).
    """
    if code in _SUCCESS:
        return ResultClass.SUCCESS
    if code in _STALE_SEQUENCE:
        return ResultClass.STALE_SEQUENCE
    if code in _RETRYABLE:
        return ResultClass.RETRYABLE
    return ResultClass.FATAL


def engine_result_name(code: int) -> str | None:
    """Token name for a code (e.g. ``"tefPAST_SEQ"``), None if unknown."""
    try:
        return EngineResult(code).name
    except ValueError:
        return None

"""
Jingtum JSON-RPC client with failover, retries and sequence tracking.

Public API:

    Facade:
        - ``Jingtum`` — payment / create_order / cancel_order, sequence
          lookup, tx lookup, fee / platform / issuer settings.

    Submission (network I/O):
        - ``SubmissionOrchestrator`` — bounded submit/retry loop over a
          ``NodePool`` with no-check and with-check modes.
        - ``SequenceResolver`` — next sequence from cache or nodes.
        - ``ConfirmationPoller`` — one pass over all nodes for a validated tx.

    Pure layer (no I/O):
        - ``SequenceCache`` — per-address next sequence, thread-safe.
        - ``classify_engine_result()`` — engine code → ``ResultClass``.
        - Transaction recipes: ``plan_payment``, ``plan_offer_create``,
          ``plan_offer_cancel``, ``build_amount``.
        - Memo utilities: ``build_memos``, ``encode_memo_hex``,
          ``decode_memo_hex``, ``memo_texts``.
        - Format checks: ``is_valid_address``, ``is_valid_secret``.

    Protocols (for dependency injection):
        - ``LedgerClient`` — network boundary (account_info, submit, tx).
        - ``Signer`` — secrets boundary (sign unsigned tx dict).
        - ``JsonRpcTransport`` — raw JSON POST.

    Concrete implementations:
        - ``JsonRpcClient`` — JSON-RPC implementation of LedgerClient.
        - ``HttpxTransport`` — default httpx-based transport.

    Settings and errors:
        - ``Config`` — frozen settings with env / TOML loaders.
        - ``setup_logging()`` — dictConfig for applications.
        - ``JingtumError`` and subclasses, ``ErrorCode``.
"""

from jingtum_rpc.client import (
    AccountInfoResult,
    LedgerClient,
    SubmitResult,
    TxStatusResult,
)
from jingtum_rpc.config import Config
from jingtum_rpc.confirm import ConfirmationPoller
from jingtum_rpc.engine_result import (
    EngineResult,
    ResultClass,
    classify_engine_result,
    engine_result_name,
)
from jingtum_rpc.errors import (
    ErrorCode,
    FatalEngineError,
    JingtumError,
    SequenceUnavailable,
    StaleSequenceError,
    SubmissionCancelled,
    SubmissionError,
    SubmissionExhausted,
    SubmissionUnconfirmed,
    TransactionNotFound,
    TransportError,
    ValidationError,
)
from jingtum_rpc.jingtum import Jingtum
from jingtum_rpc.jsonrpc_client import JsonRpcClient
from jingtum_rpc.logging_config import setup_logging
from jingtum_rpc.memo import (
    MAX_MEMO_BYTES,
    MEMO_TYPE,
    MEMO_TYPE_HEX,
    build_memos,
    decode_memo_hex,
    encode_memo_hex,
    memo_texts,
)
from jingtum_rpc.node_pool import NodePool
from jingtum_rpc.sequence import SequenceCache, SequenceResolver
from jingtum_rpc.signer import SignerFactory, SignResult, Signer
from jingtum_rpc.submit import SubmissionOrchestrator
from jingtum_rpc.transport import HttpxTransport, JsonRpcTransport
from jingtum_rpc.tx import build_amount, plan_offer_cancel, plan_offer_create, plan_payment
from jingtum_rpc.wallet import JINGTUM_ALPHABET, is_valid_address, is_valid_secret

__all__ = [
    "AccountInfoResult",
    "Config",
    "ConfirmationPoller",
    "EngineResult",
    "ErrorCode",
    "FatalEngineError",
    "HttpxTransport",
    "JINGTUM_ALPHABET",
    "Jingtum",
    "JingtumError",
    "JsonRpcClient",
    "JsonRpcTransport",
    "LedgerClient",
    "MAX_MEMO_BYTES",
    "MEMO_TYPE",
    "MEMO_TYPE_HEX",
    "NodePool",
    "ResultClass",
    "SequenceCache",
    "SequenceResolver",
    "SequenceUnavailable",
    "SignResult",
    "Signer",
    "SignerFactory",
    "StaleSequenceError",
    "SubmissionCancelled",
    "SubmissionError",
    "SubmissionExhausted",
    "SubmissionOrchestrator",
    "SubmissionUnconfirmed",
    "SubmitResult",
    "TransactionNotFound",
    "TransportError",
    "TxStatusResult",
    "ValidationError",
    "build_amount",
    "build_memos",
    "classify_engine_result",
    "decode_memo_hex",
    "encode_memo_hex",
    "engine_result_name",
    "is_valid_address",
    "is_valid_secret",
    "memo_texts",
    "plan_offer_cancel",
    "plan_offer_create",
    "plan_payment",
    "setup_logging",
]

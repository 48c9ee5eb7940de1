"""
Tests for engine result classification.

Test plan:
- tesSUCCESS and tefALREADY → SUCCESS, tefPAST_SEQ → STALE_SEQUENCE
- transient load codes (tel queue/fee, ter retry/queued) → RETRYABLE
- every other known code and unknown codes → FATAL
- name lookup for known and unknown codes
"""

import pytest

from jingtum_rpc.engine_result import (
    EngineResult,
    ResultClass,
    classify_engine_result,
    engine_result_name,
)

RETRYABLE = [
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
]


class TestClassify:
    def test_success(self) -> None:
        assert classify_engine_result(0) is ResultClass.SUCCESS

    def test_already_held_blob_is_success(self) -> None:
        assert classify_engine_result(-198) is ResultClass.SUCCESS

    def test_past_seq_is_stale(self) -> None:
        assert classify_engine_result(-190) is ResultClass.STALE_SEQUENCE

    @pytest.mark.parametrize("code", RETRYABLE)
    def test_retryable(self, code: EngineResult) -> None:
        assert classify_engine_result(int(code)) is ResultClass.RETRYABLE

    @pytest.mark.parametrize(
        "code",
        [c for c in EngineResult if c not in RETRYABLE and c not in (EngineResult.tesSUCCESS, EngineResult.tefALREADY, EngineResult.tefPAST_SEQ)],
    )
    def test_everything_else_is_fatal(self, code: EngineResult) -> None:
        assert classify_engine_result(int(code)) is ResultClass.FATAL

    @pytest.mark.parametrize("code", [-1000, -1, 1, 99, 999, 12345])
    def test_unknown_codes_are_fatal(self, code: int) -> None:
        assert classify_engine_result(code) is ResultClass.FATAL

    def test_named_examples(self) -> None:
        assert classify_engine_result(EngineResult.tefBAD_AUTH) is ResultClass.FATAL
        assert classify_engine_result(EngineResult.tecUNFUNDED_PAYMENT) is ResultClass.FATAL
        assert classify_engine_result(EngineResult.terNO_ACCOUNT) is ResultClass.FATAL


class TestNames:
    def test_known(self) -> None:
        assert engine_result_name(-190) == "tefPAST_SEQ"
        assert engine_result_name(0) == "tesSUCCESS"
        assert engine_result_name(128) == "tecPATH_DRY"

    def test_unknown(self) -> None:
        assert engine_result_name(4242) is None

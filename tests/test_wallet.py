"""Tests for address and secret format checks."""

import pytest

from jingtum_rpc.wallet import (
    JINGTUM_ALPHABET,
    XRP_ALPHABET,
    AddressValidator,
    is_valid_address,
    is_valid_secret,
    validate_alphabet,
)

# The same account and seed in both alphabets.
JINGTUM_ADDRESS = "jHb9CJAWyB4jr91VRWn96DkukG4bwdtyTh"
XRP_ADDRESS = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"
JINGTUM_SECRET = "snoPBjXtMeMyMHUVTgbuqAfg1SUTb"
XRP_SECRET = "snoPBrXtMeMyMHUVTgbuqAfg1SUTb"


class TestAddress:
    def test_valid(self) -> None:
        assert is_valid_address(JINGTUM_ADDRESS)
        assert is_valid_address("jf1BiGeXwwQoi8Z2ueFYTEXSwuJYfV2Jpn")

    def test_other_alphabet(self) -> None:
        assert not is_valid_address(XRP_ADDRESS)
        assert is_valid_address(XRP_ADDRESS, XRP_ALPHABET)

    @pytest.mark.parametrize(
        "bad",
        [
            "",
            "jHb9CJAWyB4jr91VRWn96DkukG4bwdtyTi",  # checksum
            "jHb9CJAWyB4jr91VRWn96DkukG4bwdty",  # truncated
            "0Hb9CJAWyB4jr91VRWn96DkukG4bwdtyTh",  # not in alphabet
            "rAddr1",
        ],
    )
    def test_invalid(self, bad: str) -> None:
        assert not is_valid_address(bad)

    def test_secret_is_not_an_address(self) -> None:
        assert not is_valid_address(JINGTUM_SECRET)

    def test_non_string(self) -> None:
        assert not is_valid_address(None)  # type: ignore[arg-type]


class TestSecret:
    def test_valid(self) -> None:
        assert is_valid_secret(JINGTUM_SECRET)
        assert is_valid_secret(XRP_SECRET, XRP_ALPHABET)

    def test_address_is_not_a_secret(self) -> None:
        assert not is_valid_secret(JINGTUM_ADDRESS)

    def test_bad_checksum(self) -> None:
        assert not is_valid_secret("snoPBjXtMeMyMHUVTgbuqAfg1SUTc")


class TestAlphabet:
    def test_jingtum_alphabet_swaps_r_and_j(self) -> None:
        assert JINGTUM_ALPHABET == XRP_ALPHABET.replace("r", "_").replace("j", "r").replace("_", "j")

    @pytest.mark.parametrize("bad", ["abc", JINGTUM_ALPHABET[:-1] + "j"])
    def test_rejects_bad_alphabet(self, bad: str) -> None:
        with pytest.raises(ValueError):
            validate_alphabet(bad)

    def test_validator_callable(self) -> None:
        check = AddressValidator(XRP_ALPHABET)
        assert check(XRP_ADDRESS)
        assert not check(JINGTUM_ADDRESS)

import pytest

from app.decoder import (
    EMPTY_RESULT,
    KIND_ADDRESS,
    KIND_EMPTY,
    KIND_HEX,
    KIND_UINT,
    decode,
    decode_result,
)


class TestDecode:
    @pytest.mark.parametrize("raw", [None, "", "0x"])
    def test_empty(self, raw):
        assert decode(raw) == EMPTY_RESULT == "Empty result"

    def test_zero_padded_address(self):
        raw = "0x000000000000000000000000" + "aa" * 20
        assert decode(raw) == "0x" + "aa" * 20

    def test_integer(self):
        assert decode("0x" + "0" * 63 + "1") == "1"

    def test_large_integer(self):
        raw = "0x" + "f" * 64
        assert decode(raw) == str(2**256 - 1)

    def test_address_wins_over_integer(self):
        # 24 leading zero digits: read as an address even if it was a small number.
        raw = "0x" + "0" * 24 + "0" * 39 + "5"
        assert decode_result(raw).kind == KIND_ADDRESS

    @pytest.mark.parametrize(
        "raw",
        [
            "0x1234",
            "0x" + "00" * 33,
            "0x" + "00" * 64,
            "0xdeadbeef",
        ],
    )
    def test_other_lengths_are_opaque(self, raw):
        assert decode(raw) == raw
        assert decode_result(raw).kind == KIND_HEX

    def test_non_hex_word_falls_back_to_raw(self):
        raw = "0x" + "zz" * 32
        assert decode(raw) == raw


class TestDecodedValueLabel:
    def test_labels(self):
        assert decode_result("0x").label() == "Empty result"
        assert decode_result("0x" + "0" * 63 + "a").label().startswith("Address: 0x")
        assert decode_result("0x" + "1" + "0" * 63).label().startswith("Number: ")
        assert decode_result("0xabcd").label() == "Hex: 0xabcd"

    def test_kinds(self):
        assert decode_result(None).kind == KIND_EMPTY
        assert decode_result("0x" + "1" + "0" * 63).kind == KIND_UINT

    def test_non_hex_padded_word_is_not_an_address(self):
        raw = "0x" + "0" * 24 + "zz" * 20
        assert decode_result(raw).kind == KIND_HEX

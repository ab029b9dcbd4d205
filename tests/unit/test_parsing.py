"""Unit tests for balance parsing and address normalization."""

from __future__ import annotations

import pytest

from genalloc.errors import InvalidAddress, InvalidBalance
from genalloc.parsing import format_address, normalize_address, parse_balance

ONE = "0000000000000000000000000000000000000001"


class TestParseBalance:
    """Tests for parse_balance()."""

    def test_simple(self) -> None:
        assert parse_balance("100") == 100

    def test_zero(self) -> None:
        assert parse_balance("0") == 0

    def test_leading_zeros_allowed(self) -> None:
        assert parse_balance("007") == 7

    def test_arbitrary_precision(self) -> None:
        assert parse_balance(str(2**200)) == 2**200

    def test_max_uint256_accepted(self) -> None:
        assert parse_balance(str(2**256 - 1)) == 2**256 - 1

    def test_above_bound_rejected(self) -> None:
        with pytest.raises(InvalidBalance, match="exceeds 256 bits"):
            parse_balance(str(2**256))

    def test_huge_digit_string_rejected_before_conversion(self) -> None:
        with pytest.raises(InvalidBalance, match="exceeds"):
            parse_balance("9" * 10_000)

    def test_custom_bound(self) -> None:
        assert parse_balance("255", max_bits=8) == 255
        with pytest.raises(InvalidBalance):
            parse_balance("256", max_bits=8)

    def test_unbounded(self) -> None:
        assert parse_balance(str(2**1000), max_bits=None) == 2**1000

    def test_unbounded_accepts_more_than_4300_digits(self) -> None:
        # 5000 ones: past the interpreter int/str digit limit
        assert parse_balance("1" * 5000, max_bits=None) == (10**5000 - 1) // 9

    def test_wide_bound_accepts_more_than_4300_digits(self) -> None:
        assert parse_balance("0" * 3 + "1" + "0" * 4999, max_bits=20_000) == 10**4999

    def test_oversized_balance_message_is_abbreviated(self) -> None:
        with pytest.raises(InvalidBalance, match=r"\.\.\. \(5000 digits\)") as exc_info:
            parse_balance("9" * 5000, max_bits=20)
        assert "9" * 100 not in str(exc_info.value)

    @pytest.mark.parametrize(
        "text",
        ["", "-1", "+1", " 1", "1 ", "1.0", "1e18", "0x10", "1_000", "abc", "１２", "²"],
    )
    def test_non_decimal_rejected(self, text: str) -> None:
        with pytest.raises(InvalidBalance):
            parse_balance(text)

    def test_non_string_rejected(self) -> None:
        with pytest.raises(InvalidBalance, match="must be a string"):
            parse_balance(100)  # type: ignore[arg-type]


class TestNormalizeAddress:
    """Tests for normalize_address()."""

    def test_prefixed(self) -> None:
        assert normalize_address("0x" + ONE) == bytes(19) + b"\x01"

    def test_unprefixed(self) -> None:
        assert normalize_address(ONE) == bytes(19) + b"\x01"

    def test_uppercase_prefix(self) -> None:
        assert normalize_address("0X" + ONE) == bytes(19) + b"\x01"

    def test_case_insensitive(self) -> None:
        mixed = "0xDbDbdB2cBD23b783741e8d7fcF51e459b497e4a6"
        assert normalize_address(mixed) == normalize_address(mixed.lower())
        assert normalize_address(mixed) == bytes.fromhex(mixed[2:])

    def test_result_is_20_bytes(self) -> None:
        assert len(normalize_address("0x" + "ab" * 20)) == 20

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "0x",
            "0x01",  # short: rejected, not zero-padded
            "0x" + "0" * 39,
            "0x" + "0" * 41,
            "0x" + "0" * 64,
            "0x" + "g" * 40,
            " 0x" + ONE,
            "0x" + ONE + "\n",
            "00x" + ONE[1:],
        ],
    )
    def test_malformed_rejected(self, text: str) -> None:
        with pytest.raises(InvalidAddress):
            normalize_address(text)

    def test_non_string_rejected(self) -> None:
        with pytest.raises(InvalidAddress, match="must be a string"):
            normalize_address(1)  # type: ignore[arg-type]


class TestFormatAddress:
    """Tests for format_address()."""

    def test_lowercase_prefixed(self) -> None:
        key = normalize_address("0xDBDBDB2CBD23B783741E8D7FCF51E459B497E4A6")
        assert format_address(key) == "0xdbdbdb2cbd23b783741e8d7fcf51e459b497e4a6"

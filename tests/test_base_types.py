from decimal import Decimal

import pytest

from core.base_types import Address, TokenAmount, to_bool, to_int

WSOL = "So11111111111111111111111111111111111111112"


def test_address_accepts_known_mint():
    assert Address(WSOL).base58 == WSOL


def test_address_invalid_raises():
    with pytest.raises(ValueError, match="Invalid Solana address"):
        Address("invalid0")


def test_address_wrong_length_raises():
    with pytest.raises(ValueError, match="Invalid Solana address"):
        Address("abc")


def test_address_bytes_round_trip():
    raw = bytes(range(32))
    addr = Address.from_bytes(raw)
    assert addr.to_bytes() == raw
    assert Address(addr.base58) == addr
    assert hash(Address(addr.base58)) == hash(addr)


def test_address_short_form():
    assert Address(WSOL).short() == "So111...1112"


def test_token_amount_from_human_raw():
    amount = TokenAmount.from_human("1.5", 9)
    assert amount.raw == 1_500_000_000


def test_token_amount_excess_precision_rejected():
    with pytest.raises(ValueError, match="more precision"):
        TokenAmount.from_human("0.0000001", 6)


def test_token_amount_rejects_float_input():
    with pytest.raises(TypeError, match="not float"):
        TokenAmount.from_human(1.5, 9)


def test_token_amount_human():
    assert TokenAmount(raw=2_500_000, decimals=6, symbol="USDC").human == Decimal("2.5")


def test_to_int_parses_snapshot_values():
    assert to_int(5) == 5
    assert to_int("340282366920938463463374607431768211455") == 2**128 - 1
    assert to_int("0x10") == 16
    with pytest.raises(ValueError):
        to_int(True)


@pytest.mark.parametrize("text", ["abc", "1.2.3", "", "NaN", "Infinity"])
def test_token_amount_rejects_malformed_text(text):
    with pytest.raises(ValueError, match="invalid amount"):
        TokenAmount.from_human(text, 6)


def test_token_amount_str_includes_symbol():
    assert str(TokenAmount(raw=2_500_000, decimals=6, symbol="USDC")) == "2.5 USDC"
    assert str(TokenAmount(raw=7, decimals=0)) == "7"


def test_to_bool_parses_snapshot_flags():
    assert to_bool(True) is True
    assert to_bool("false") is False
    assert to_bool(" TRUE ") is True
    assert to_bool(0) is False
    with pytest.raises(ValueError):
        to_bool("maybe")
    with pytest.raises(ValueError):
        to_bool(2)

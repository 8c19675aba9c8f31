from decimal import Decimal

import pytest

from core.base_types import Address
from routing.errors import InvalidSlippageError
from routing.pool import CpPool, FeeConfig
from routing.route import quote_path_exact_in, quote_path_exact_out
from routing.selector import TradeMode
from routing.slippage import apply_slippage, bps_to_fraction, validate_slippage_bps

PROGRAM = Address.from_bytes(bytes([0xC9]) * 32)
X = Address.from_bytes(bytes([0x11]) * 32)
Y = Address.from_bytes(bytes([0x22]) * 32)
Z = Address.from_bytes(bytes([0x33]) * 32)


def _pool(seed: int, mint0: Address, mint1: Address, reserve0: int, reserve1: int) -> CpPool:
    return CpPool(
        program_id=PROGRAM,
        pool_address=Address.from_bytes(bytes([seed]) * 32),
        token0_mint=mint0,
        token1_mint=mint1,
        mint0_decimals=6,
        mint1_decimals=6,
        fee_config=FeeConfig(trade_fee_rate=0),
        reserve0=reserve0,
        reserve1=reserve1,
    )


PATH = [_pool(1, X, Y, 1_000_000, 2_000_000), _pool(2, Y, Z, 2_000_000, 500_000)]


def test_exact_in_sets_min_out_on_every_hop():
    quote = quote_path_exact_in(PATH, X, Z, 10_000)
    bounded = apply_slippage(quote, 50, TradeMode.EXACT_IN)

    assert [hop.min_out for hop in bounded.hops] == [19_701, 4_876]
    assert bounded.total_amount_out == 4_876
    assert bounded.total_amount_in == 10_000
    assert all(hop.max_in is None for hop in bounded.hops)


def test_exact_out_sets_max_in_on_every_hop():
    quote = quote_path_exact_out(PATH, X, Z, 4_901)
    bounded = apply_slippage(quote, 100, "ExactOut")

    assert [hop.max_in for hop in bounded.hops] == [
        9_997 * 10_100 // 10_000,
        19_798 * 10_100 // 10_000,
    ]
    assert bounded.total_amount_in == 10_096
    assert bounded.total_amount_out == 4_901
    assert all(hop.min_out is None for hop in bounded.hops)


@pytest.mark.parametrize("bps", [0, 1, 10, 50, 333, 5_000, 10_000])
def test_bounds_match_floor_formula(bps):
    quote = quote_path_exact_in(PATH, X, Z, 10_000)
    assert (
        apply_slippage(quote, bps, TradeMode.EXACT_IN).total_amount_out
        == quote.total_amount_out * (10_000 - bps) // 10_000
    )
    quote = quote_path_exact_out(PATH, X, Z, 4_901)
    assert (
        apply_slippage(quote, bps, TradeMode.EXACT_OUT).total_amount_in
        == quote.total_amount_in * (10_000 + bps) // 10_000
    )


def test_input_quote_is_not_modified():
    quote = quote_path_exact_in(PATH, X, Z, 10_000)
    bounded = apply_slippage(quote, 50, TradeMode.EXACT_IN)
    assert bounded is not quote
    assert quote.total_amount_out == 4_901
    assert all(hop.min_out is None for hop in quote.hops)


def test_validate_slippage_bps():
    assert validate_slippage_bps(0) == 0
    assert validate_slippage_bps(10_000) == 10_000
    with pytest.raises(InvalidSlippageError, match=r"\[0, 10000\]"):
        validate_slippage_bps(10_001)
    with pytest.raises(InvalidSlippageError, match=r"\[0, 10000\]"):
        validate_slippage_bps(-1)
    with pytest.raises(InvalidSlippageError, match="must be int"):
        validate_slippage_bps(0.5)


def test_bps_to_fraction():
    assert bps_to_fraction(50) == Decimal("0.005")

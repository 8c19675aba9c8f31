from decimal import Decimal

import pytest

from core.base_types import Address
from routing.errors import InvalidMintError
from routing.pool import CpPool, FeeConfig
from routing.route import quote_path_exact_in, quote_path_exact_out

PROGRAM = Address.from_bytes(bytes([0xC9]) * 32)
X = Address.from_bytes(bytes([0x11]) * 32)
Y = Address.from_bytes(bytes([0x22]) * 32)
Z = Address.from_bytes(bytes([0x33]) * 32)
W = Address.from_bytes(bytes([0x44]) * 32)


def _pool(seed: int, mint0: Address, mint1: Address, reserve0: int, reserve1: int,
          fee_ppm: int = 0) -> CpPool:
    return CpPool(
        program_id=PROGRAM,
        pool_address=Address.from_bytes(bytes([seed]) * 32),
        token0_mint=mint0,
        token1_mint=mint1,
        mint0_decimals=6,
        mint1_decimals=6,
        fee_config=FeeConfig(trade_fee_rate=fee_ppm),
        reserve0=reserve0,
        reserve1=reserve1,
    )


P1 = _pool(1, X, Y, 1_000_000, 2_000_000)
P2 = _pool(2, Y, Z, 2_000_000, 500_000)


def test_two_hop_exact_in_scenario():
    quote = quote_path_exact_in([P1, P2], X, Z, 10_000)

    assert quote is not None
    assert [hop.amount_out for hop in quote.hops] == [19_801, 4_901]
    assert quote.hops[1].amount_in == 19_801
    assert quote.total_amount_in == 10_000
    assert quote.total_amount_out == 4_901
    assert quote.path == [X, Y, Z]
    assert quote.num_hops == 2


def test_exact_in_follows_pool_orientation():
    # P2 stores the pair as (Y, Z); walking Z -> Y -> X reverses both pools.
    quote = quote_path_exact_in([P2, P1], Z, X, 1_000)
    assert quote is not None
    assert quote.hops[0].input_mint == Z
    assert quote.hops[0].output_mint == Y
    assert quote.output_mint == X


def test_two_hop_exact_out_walks_backward():
    quote = quote_path_exact_out([P1, P2], X, Z, 4_901)

    assert quote is not None
    assert [hop.input_mint for hop in quote.hops] == [X, Y]
    assert quote.hops[1].amount_out == 4_901
    assert quote.hops[1].amount_in == 19_798
    assert quote.hops[0].amount_out == 19_798
    assert quote.total_amount_in == 9_997
    assert quote.total_amount_out == 4_901


def test_exact_in_wrong_destination_is_absent():
    assert quote_path_exact_in([P1], X, Z, 10_000) is None


def test_exact_out_wrong_source_is_absent():
    assert quote_path_exact_out([P2], X, Z, 100) is None


def test_disconnected_hop_aborts_path():
    stray = _pool(3, Z, W, 10**6, 10**6)
    assert quote_path_exact_in([P1, stray], X, W, 10_000) is None
    assert quote_path_exact_out([P1, stray], X, W, 100) is None


def test_disconnected_hop_raises_in_strict_mode():
    stray = _pool(3, Z, W, 10**6, 10**6)
    with pytest.raises(InvalidMintError):
        quote_path_exact_in([P1, stray], X, W, 10_000, strict=True)
    with pytest.raises(InvalidMintError):
        quote_path_exact_out([stray, P2], X, Z, 100, strict=True)


def test_zero_output_hop_aborts_path():
    assert quote_path_exact_in([P1, P2], X, Z, 1) is None


def test_unreachable_hop_aborts_exact_out():
    assert quote_path_exact_out([P1, P2], X, Z, 500_000) is None
    # Final hop fine, but the first pool cannot supply the Y it needs.
    thin = _pool(4, X, Y, 1_000_000, 10)
    assert quote_path_exact_out([thin, P2], X, Z, 4_901) is None


def test_empty_path_is_absent():
    assert quote_path_exact_in([], X, Z, 10) is None
    assert quote_path_exact_out([], X, Z, 10) is None


def test_rates_are_scaled_by_1e9():
    quote = quote_path_exact_in([P1, P2], X, Z, 10_000)
    assert quote.amount_out_per_one_token_in == 4_901 * 10**9 // 10_000
    assert quote.amount_in_per_one_token_out == 10_000 * 10**9 // 4_901


def test_price_impact_against_chained_spot():
    quote = quote_path_exact_in([P1, P2], X, Z, 10_000)
    # Chained spot: 2 * 0.25 = 0.5 Z per X, so 5_000 expected.
    assert quote.price_impact() == (Decimal(5_000) - Decimal(4_901)) / Decimal(5_000)


def test_hop_instruction_params_default_bounds():
    quote = quote_path_exact_in([P1, P2], X, Z, 10_000)
    params = quote.hops[0].to_instruction_params()
    assert params["pool_address"] == P1.pool_address.base58
    assert params["input_mint"] == X.base58
    assert params["amount_in"] == "10000"
    assert params["min_out"] == "19801"
    assert params["max_in"] == "10000"


def test_fingerprint_is_deterministic():
    a = quote_path_exact_in([P1, P2], X, Z, 10_000)
    b = quote_path_exact_in([P1, P2], X, Z, 10_000)
    c = quote_path_exact_in([P1, P2], X, Z, 10_001)
    assert a.fingerprint() == b.fingerprint()
    assert a.fingerprint() != c.fingerprint()

"""
Single-hop constant-product quotes.

Must match the on-chain program exactly, including the order of the floor
divisions:

exact-in:
    amount_in_after_fee = amount_in * (1_000_000 - fee_ppm) // 1_000_000
    amount_out = amount_in_after_fee * reserve_out // (reserve_in + amount_in_after_fee)

exact-out:
    before_fee = amount_out * reserve_in // (reserve_out - amount_out)
    amount_in = before_fee * 1_000_000 // (1_000_000 - fee_ppm)

Exact-out is not a perfect inverse of exact-in; both directions round in
favour of the pool.
"""

from __future__ import annotations

from decimal import Decimal

from core.base_types import Address

from .constants import MAX_UINT128, ONE_M
from .errors import InvalidMintError
from .fees import apply_ppm_fee_on_input, effective_fee_ppm, input_is_token0
from .pool import CpPool

# Returned by quote_in_single when the requested output cannot be delivered.
UNREACHABLE = MAX_UINT128


def is_unreachable(amount: int) -> bool:
    return amount >= UNREACHABLE


def _reserves_for_input(pool: CpPool, input_mint: Address) -> tuple[int, int]:
    if input_is_token0(pool, input_mint):
        return pool.reserve0, pool.reserve1
    return pool.reserve1, pool.reserve0


def _reserves_for_output(pool: CpPool, output_mint: Address) -> tuple[int, int, Address]:
    """(reserve_in, reserve_out, input_mint) for a swap delivering `output_mint`."""
    if output_mint == pool.token1_mint:
        return pool.reserve0, pool.reserve1, pool.token0_mint
    if output_mint == pool.token0_mint:
        return pool.reserve1, pool.reserve0, pool.token1_mint
    raise InvalidMintError(output_mint, pool.pool_address)


def quote_out_single(pool: CpPool, input_mint: Address, amount_in: int) -> int:
    """Output for an exact input. Zero input or an empty reserve quotes zero."""
    if not isinstance(amount_in, int):
        raise TypeError("amount_in must be int")
    if amount_in == 0:
        return 0

    reserve_in, reserve_out = _reserves_for_input(pool, input_mint)
    if reserve_in == 0 or reserve_out == 0:
        return 0

    fee_ppm = effective_fee_ppm(pool, input_mint)
    amount_in_after_fee = apply_ppm_fee_on_input(amount_in, fee_ppm)
    return amount_in_after_fee * reserve_out // (reserve_in + amount_in_after_fee)


def quote_in_single(pool: CpPool, output_mint: Address, amount_out: int) -> int:
    """
    Input required for an exact output.

    Returns UNREACHABLE when the output would drain the pool, a reserve is
    empty, or the fee is 100%.
    """
    if not isinstance(amount_out, int):
        raise TypeError("amount_out must be int")
    if amount_out == 0:
        return 0

    reserve_in, reserve_out, input_mint = _reserves_for_output(pool, output_mint)
    if reserve_in == 0 or reserve_out == 0 or amount_out >= reserve_out:
        return UNREACHABLE

    before_fee = amount_out * reserve_in // (reserve_out - amount_out)
    denominator = ONE_M - effective_fee_ppm(pool, input_mint)
    if denominator == 0:
        return UNREACHABLE
    return before_fee * ONE_M // denominator


def spot_price(pool: CpPool, input_mint: Address, adjust_decimals: bool = True) -> Decimal:
    """
    Output tokens per input token at the current reserves, ignoring fees.

    For display only, never for amount calculations.
    """
    reserve_in, reserve_out = _reserves_for_input(pool, input_mint)
    if reserve_in == 0:
        raise ValueError("reserve_in is zero")
    price = Decimal(reserve_out) / Decimal(reserve_in)
    if not adjust_decimals:
        return price
    output_mint = pool.other_mint(input_mint)
    shift = pool.decimals_for(input_mint) - pool.decimals_for(output_mint)
    return price * (Decimal(10) ** shift)

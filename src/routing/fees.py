"""Effective fee rate (ppm) for a swap through a CPMM pool."""

from __future__ import annotations

from core.base_types import Address

from .constants import ONE_M
from .errors import InvalidMintError
from .pool import CpPool, CreatorFeeOn


def input_is_token0(pool: CpPool, input_mint: Address) -> bool:
    if input_mint == pool.token0_mint:
        return True
    if input_mint == pool.token1_mint:
        return False
    raise InvalidMintError(input_mint, pool.pool_address)


def creator_fee_applies(pool: CpPool, input_mint: Address) -> bool:
    if not pool.enable_creator_fee:
        return False
    is0 = input_is_token0(pool, input_mint)
    return (
        pool.creator_fee_on == CreatorFeeOn.BOTH_TOKEN
        or (pool.creator_fee_on == CreatorFeeOn.ONLY_TOKEN_0 and is0)
        or (pool.creator_fee_on == CreatorFeeOn.ONLY_TOKEN_1 and not is0)
    )


def effective_fee_ppm(pool: CpPool, input_mint: Address) -> int:
    """
    Trade fee plus creator fee when it applies to the input side.

    Clamped to 1_000_000 (100%).
    """
    fee = pool.fee_config.trade_fee_rate
    if creator_fee_applies(pool, input_mint):
        fee += pool.fee_config.creator_fee_rate
    return ONE_M if fee > ONE_M else fee


def apply_ppm_fee_on_input(amount: int, ppm: int) -> int:
    return amount * (ONE_M - ppm) // ONE_M

"""
Constant-product pool model.

Turns a decoded pool account plus live vault balances into a CpPool whose
reserves exclude fees that have accrued but not been swept. All amounts are
integers in smallest units.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Iterable, Optional

from core.base_types import Address, to_bool, to_int

from .constants import ONE_M, SWAP_DISABLED_BIT

logger = logging.getLogger(__name__)


class CreatorFeeOn(IntEnum):
    BOTH_TOKEN = 0
    ONLY_TOKEN_0 = 1
    ONLY_TOKEN_1 = 2


@dataclass(frozen=True)
class FeeConfig:
    """Fee rates from the pool's AMM config, in parts-per-million."""

    trade_fee_rate: int
    creator_fee_rate: int = 0

    def __post_init__(self) -> None:
        for name in ("trade_fee_rate", "creator_fee_rate"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be int")
            if value < 0:
                raise ValueError(f"{name} must be non-negative")

    @classmethod
    def from_dict(cls, data: dict) -> "FeeConfig":
        return cls(
            trade_fee_rate=to_int(data["trade_fee_rate"]),
            creator_fee_rate=to_int(data.get("creator_fee_rate", 0)),
        )

    @property
    def trade_fee_pct(self) -> str:
        """Display helper: 2500 ppm -> '0.25%'."""
        return f"{Decimal(self.trade_fee_rate) * 100 / ONE_M:g}%"


@dataclass(frozen=True)
class PoolState:
    """Raw CPMM pool account, as decoded by the fetch layer."""

    pool_address: Address
    amm_config: Address
    token0_mint: Address
    token1_mint: Address
    token0_vault: Address
    token1_vault: Address
    mint0_decimals: int
    mint1_decimals: int
    token0_program: Optional[Address] = None
    token1_program: Optional[Address] = None
    protocol_fees_token0: int = 0
    protocol_fees_token1: int = 0
    fund_fees_token0: int = 0
    fund_fees_token1: int = 0
    creator_fees_token0: int = 0
    creator_fees_token1: int = 0
    enable_creator_fee: bool = False
    creator_fee_on: CreatorFeeOn = CreatorFeeOn.BOTH_TOKEN
    status: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "PoolState":
        def _addr(key: str) -> Optional[Address]:
            value = data.get(key)
            return Address.from_string(value) if value else None

        return cls(
            pool_address=Address.from_string(data["pool_address"]),
            amm_config=Address.from_string(data["amm_config"]),
            token0_mint=Address.from_string(data["token0_mint"]),
            token1_mint=Address.from_string(data["token1_mint"]),
            token0_vault=Address.from_string(data["token0_vault"]),
            token1_vault=Address.from_string(data["token1_vault"]),
            mint0_decimals=int(data["mint0_decimals"]),
            mint1_decimals=int(data["mint1_decimals"]),
            token0_program=_addr("token0_program"),
            token1_program=_addr("token1_program"),
            protocol_fees_token0=to_int(data.get("protocol_fees_token0", 0)),
            protocol_fees_token1=to_int(data.get("protocol_fees_token1", 0)),
            fund_fees_token0=to_int(data.get("fund_fees_token0", 0)),
            fund_fees_token1=to_int(data.get("fund_fees_token1", 0)),
            creator_fees_token0=to_int(data.get("creator_fees_token0", 0)),
            creator_fees_token1=to_int(data.get("creator_fees_token1", 0)),
            enable_creator_fee=to_bool(data.get("enable_creator_fee", False)),
            creator_fee_on=CreatorFeeOn(int(data.get("creator_fee_on", 0))),
            status=int(data.get("status", 0)),
        )


@dataclass(frozen=True)
class CpPool:
    """A pool ready for quoting. Reserves are strictly positive."""

    program_id: Address
    pool_address: Address
    token0_mint: Address
    token1_mint: Address
    mint0_decimals: int
    mint1_decimals: int
    fee_config: FeeConfig
    reserve0: int
    reserve1: int
    enable_creator_fee: bool = False
    creator_fee_on: CreatorFeeOn = CreatorFeeOn.BOTH_TOKEN
    token0_program: Optional[Address] = None
    token1_program: Optional[Address] = None

    def __post_init__(self) -> None:
        if self.token0_mint == self.token1_mint:
            raise ValueError("token0 and token1 must be different")
        if not isinstance(self.reserve0, int) or not isinstance(self.reserve1, int):
            raise TypeError("reserves must be int")
        if self.reserve0 <= 0 or self.reserve1 <= 0:
            raise ValueError("reserves must be positive")

    def has_mint(self, mint: Address) -> bool:
        return mint == self.token0_mint or mint == self.token1_mint

    def other_mint(self, mint: Address) -> Optional[Address]:
        """The opposite side of `mint`, or None when the pool does not hold it."""
        if mint == self.token0_mint:
            return self.token1_mint
        if mint == self.token1_mint:
            return self.token0_mint
        return None

    def decimals_for(self, mint: Address) -> int:
        if mint == self.token0_mint:
            return self.mint0_decimals
        if mint == self.token1_mint:
            return self.mint1_decimals
        raise ValueError("mint not in pool")


def is_swap_disabled(status: int) -> bool:
    return (status & SWAP_DISABLED_BIT) != 0


def compute_reserve(
    vault: int,
    protocol_fees: int,
    fund_fees: int,
    creator_fees: int,
    enable_creator_fee: bool,
) -> int:
    """Vault balance minus fees owed to protocol, fund and (if enabled) creator."""
    return vault - protocol_fees - fund_fees - (creator_fees if enable_creator_fee else 0)


def build_cp_pool(
    program_id: Address,
    state: PoolState,
    fee_config: FeeConfig,
    vault0_balance: int,
    vault1_balance: int,
) -> Optional[CpPool]:
    """
    Build one pool ready for quoting.

    Returns None when the pool has swaps disabled or when either adjusted
    reserve is not positive; such pools must never enter the route graph.
    """
    if not isinstance(vault0_balance, int) or not isinstance(vault1_balance, int):
        raise TypeError("vault balances must be int")
    if vault0_balance < 0 or vault1_balance < 0:
        raise ValueError("vault balances must be non-negative")

    if is_swap_disabled(state.status):
        return None

    reserve0 = compute_reserve(
        vault0_balance,
        state.protocol_fees_token0,
        state.fund_fees_token0,
        state.creator_fees_token0,
        state.enable_creator_fee,
    )
    reserve1 = compute_reserve(
        vault1_balance,
        state.protocol_fees_token1,
        state.fund_fees_token1,
        state.creator_fees_token1,
        state.enable_creator_fee,
    )
    if reserve0 <= 0 or reserve1 <= 0:
        return None

    return CpPool(
        program_id=program_id,
        pool_address=state.pool_address,
        token0_mint=state.token0_mint,
        token1_mint=state.token1_mint,
        mint0_decimals=state.mint0_decimals,
        mint1_decimals=state.mint1_decimals,
        fee_config=fee_config,
        reserve0=reserve0,
        reserve1=reserve1,
        enable_creator_fee=state.enable_creator_fee,
        creator_fee_on=state.creator_fee_on,
        token0_program=state.token0_program,
        token1_program=state.token1_program,
    )


def build_cp_pools(
    program_id: Address,
    entries: Iterable[tuple[PoolState, FeeConfig, int, int]],
) -> list[CpPool]:
    """Build every quotable pool from (state, fee_config, vault0, vault1) tuples."""
    pools: list[CpPool] = []
    for state, fee_config, vault0, vault1 in entries:
        pool = build_cp_pool(program_id, state, fee_config, vault0, vault1)
        if pool is None:
            logger.debug(
                "Skipping pool %s (status=%s, vaults=%s/%s)",
                state.pool_address,
                state.status,
                vault0,
                vault1,
            )
            continue
        pools.append(pool)
    return pools

"""Priced routes and the multi-hop quoter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.base_types import Address
from core.serializer import CanonicalSerializer

from .constants import ONE_E9
from .errors import InvalidMintError
from .pool import CpPool
from .quoter import is_unreachable, quote_in_single, quote_out_single, spot_price

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteHop:
    """One leg of a route, direction resolved against the pool's pair."""

    pool: CpPool
    input_mint: Address
    output_mint: Address
    amount_in: int
    amount_out: int
    min_out: Optional[int] = None
    max_in: Optional[int] = None

    def to_instruction_params(self) -> dict:
        """Parameters an instruction builder needs for this hop (amounts as strings)."""
        min_out = self.amount_out if self.min_out is None else self.min_out
        max_in = self.amount_in if self.max_in is None else self.max_in
        return {
            "program_id": self.pool.program_id.base58,
            "pool_address": self.pool.pool_address.base58,
            "input_mint": self.input_mint.base58,
            "output_mint": self.output_mint.base58,
            "amount_in": str(self.amount_in),
            "amount_out": str(self.amount_out),
            "min_out": str(min_out),
            "max_in": str(max_in),
        }


@dataclass(frozen=True)
class RouteQuote:
    """A fully priced path. Slippage adjustment returns a new instance."""

    hops: tuple[RouteHop, ...]
    total_amount_in: int
    total_amount_out: int

    @property
    def num_hops(self) -> int:
        return len(self.hops)

    @property
    def input_mint(self) -> Address:
        return self.hops[0].input_mint

    @property
    def output_mint(self) -> Address:
        return self.hops[-1].output_mint

    @property
    def path(self) -> list[Address]:
        """Mint sequence: input -> intermediate... -> output."""
        return [self.hops[0].input_mint] + [hop.output_mint for hop in self.hops]

    @property
    def pools(self) -> list[CpPool]:
        return [hop.pool for hop in self.hops]

    @property
    def amount_out_per_one_token_in(self) -> int:
        """Output per unit of input, scaled by 1e9."""
        if self.total_amount_in == 0:
            return 0
        return self.total_amount_out * ONE_E9 // self.total_amount_in

    @property
    def amount_in_per_one_token_out(self) -> int:
        """Input per unit of output, scaled by 1e9."""
        if self.total_amount_out == 0:
            return 0
        return self.total_amount_in * ONE_E9 // self.total_amount_out

    def price_impact(self) -> Decimal:
        """
        Returns price impact as a decimal (0.01 = 1%), fees included.

        Compares execution against the chained spot price of every hop.
        For display only.
        """
        spot = Decimal(1)
        for hop in self.hops:
            spot *= spot_price(hop.pool, hop.input_mint, adjust_decimals=False)
        expected = Decimal(self.total_amount_in) * spot
        if expected == 0:
            return Decimal(0)
        return (expected - Decimal(self.total_amount_out)) / expected

    def to_dict(self) -> dict:
        return {
            "hops": [hop.to_instruction_params() for hop in self.hops],
            "total_amount_in": str(self.total_amount_in),
            "total_amount_out": str(self.total_amount_out),
        }

    def fingerprint(self) -> str:
        """Stable keccak key for this quote (same route and amounts, same key)."""
        return CanonicalSerializer.fingerprint(self.to_dict())


def _disconnected(pool: CpPool, mint: Address, strict: bool) -> None:
    if strict:
        raise InvalidMintError(mint, pool.pool_address)
    logger.debug("Pool %s does not hold %s, dropping path", pool.pool_address, mint)


def quote_path_exact_in(
    path: list[CpPool],
    input_mint: Address,
    output_mint: Address,
    amount_in: int,
    strict: bool = False,
) -> Optional[RouteQuote]:
    """
    Price `path` for an exact input, walking forward.

    Returns None when a pool does not connect, a hop quotes zero, or the path
    does not end at `output_mint`. With `strict` a disconnected pool raises
    InvalidMintError instead.
    """
    amount = amount_in
    current = input_mint
    hops: list[RouteHop] = []
    for pool in path:
        nxt = pool.other_mint(current)
        if nxt is None:
            _disconnected(pool, current, strict)
            return None
        out = quote_out_single(pool, current, amount)
        if out <= 0:
            return None
        hops.append(
            RouteHop(
                pool=pool,
                input_mint=current,
                output_mint=nxt,
                amount_in=amount,
                amount_out=out,
            )
        )
        amount = out
        current = nxt

    if not hops or current != output_mint:
        return None
    return RouteQuote(hops=tuple(hops), total_amount_in=amount_in, total_amount_out=amount)


def quote_path_exact_out(
    path: list[CpPool],
    input_mint: Address,
    output_mint: Address,
    amount_out: int,
    strict: bool = False,
) -> Optional[RouteQuote]:
    """
    Price `path` for an exact output, walking backward from the destination.

    A hop that cannot deliver its required output (UNREACHABLE) drops the
    whole path.
    """
    need = amount_out
    current = output_mint
    reversed_hops: list[RouteHop] = []
    for pool in reversed(path):
        prev = pool.other_mint(current)
        if prev is None:
            _disconnected(pool, current, strict)
            return None
        required = quote_in_single(pool, current, need)
        if required <= 0 or is_unreachable(required):
            return None
        reversed_hops.append(
            RouteHop(
                pool=pool,
                input_mint=prev,
                output_mint=current,
                amount_in=required,
                amount_out=need,
            )
        )
        current = prev
        need = required

    if not reversed_hops or current != input_mint:
        return None
    hops = tuple(reversed(reversed_hops))
    return RouteQuote(
        hops=hops,
        total_amount_in=hops[0].amount_in,
        total_amount_out=hops[-1].amount_out,
    )

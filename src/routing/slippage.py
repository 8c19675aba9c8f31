"""Slippage bounds (min-out / max-in) for a priced route."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from .constants import BPS
from .errors import InvalidSlippageError
from .route import RouteQuote
from .selector import TradeMode


def validate_slippage_bps(slippage_bps: int) -> int:
    if not isinstance(slippage_bps, int) or isinstance(slippage_bps, bool):
        raise InvalidSlippageError("slippage_bps must be int")
    if slippage_bps < 0 or slippage_bps > BPS:
        raise InvalidSlippageError("slippage_bps must be in [0, 10000]")
    return slippage_bps


def bps_to_fraction(slippage_bps: int) -> Decimal:
    """50 bps -> Decimal('0.005'). Display only."""
    return Decimal(slippage_bps) / Decimal(BPS)


def apply_slippage(quote: RouteQuote, slippage_bps: int, mode: TradeMode | str) -> RouteQuote:
    """
    Return a new quote carrying the execution bounds.

    Exact-in: every hop gets min_out and total_amount_out is lowered.
    Exact-out: every hop gets max_in and total_amount_in is raised.
    The range of slippage_bps is the caller's responsibility.
    """
    mode = TradeMode.parse(mode)
    if mode is TradeMode.EXACT_IN:
        factor = BPS - slippage_bps
        return replace(
            quote,
            hops=tuple(replace(hop, min_out=hop.amount_out * factor // BPS) for hop in quote.hops),
            total_amount_out=quote.total_amount_out * factor // BPS,
        )

    factor = BPS + slippage_bps
    return replace(
        quote,
        hops=tuple(replace(hop, max_in=hop.amount_in * factor // BPS) for hop in quote.hops),
        total_amount_in=quote.total_amount_in * factor // BPS,
    )

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from config import ROUTING_CONFIG
from core.base_types import Address, TokenAmount

from .constants import MAX_UINT128
from .errors import NoRouteFoundError
from .pool import CpPool
from .route import RouteQuote
from .selector import RouteFinder, TradeMode
from .slippage import apply_slippage, bps_to_fraction, validate_slippage_bps

logger = logging.getLogger(__name__)


class SwapRouter:
    """
    Main interface for the routing module.
    Turns request parameters into a slippage-bounded quote over a pool set.

    Pools must be freshly built for each request; the router does no I/O.
    """

    def __init__(
        self,
        pools: list[CpPool],
        max_hops: Optional[int] = None,
        default_slippage_bps: Optional[int] = None,
        strict: Optional[bool] = None,
    ):
        self.max_hops = ROUTING_CONFIG["max_hops"] if max_hops is None else max_hops
        self.default_slippage_bps = validate_slippage_bps(
            ROUTING_CONFIG["default_slippage_bps"]
            if default_slippage_bps is None
            else default_slippage_bps
        )
        self.strict = ROUTING_CONFIG["strict"] if strict is None else strict
        self.load_pools(pools)

    def load_pools(self, pools: list[CpPool]) -> None:
        """Replace the pool set (e.g. after a fresh fetch)."""
        self.finder = RouteFinder(pools, self.max_hops, self.strict)
        logger.debug("Router loaded %d pools", len(self.finder.pools))

    def decimals_for(self, mint: Address) -> int:
        for pool in self.finder.pools:
            if pool.has_mint(mint):
                return pool.decimals_for(mint)
        raise NoRouteFoundError()

    def get_quote(
        self,
        input_mint: Address,
        output_mint: Address,
        mode: TradeMode | str,
        amount: int,
        slippage_bps: Optional[int] = None,
    ) -> "SwapQuote":
        """
        Best route for `amount` (smallest units) with slippage bounds applied.

        Raises NoRouteFoundError when no path can satisfy the request.
        """
        mode = TradeMode.parse(mode)
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError("amount must be int")
        if amount <= 0:
            raise ValueError("amount must be positive")
        bps = validate_slippage_bps(
            self.default_slippage_bps if slippage_bps is None else slippage_bps
        )

        route = self.finder.find_best_route(input_mint, output_mint, mode, amount)
        if route is None:
            raise NoRouteFoundError()

        bounded = apply_slippage(route, bps, mode)
        if mode is TradeMode.EXACT_IN:
            min_max_amount = bounded.total_amount_out
        else:
            min_max_amount = bounded.total_amount_in
        if min_max_amount <= 0 or min_max_amount >= MAX_UINT128:
            raise NoRouteFoundError()

        logger.info(
            "Best %s route %s: in=%s out=%s bound=%s hops=%d",
            mode.value,
            " -> ".join(mint.short() for mint in route.path),
            route.total_amount_in,
            route.total_amount_out,
            min_max_amount,
            route.num_hops,
        )
        return SwapQuote(
            mode=mode,
            slippage_bps=bps,
            route=route,
            bounded=bounded,
            min_max_amount=min_max_amount,
            price_impact=route.price_impact(),
            fingerprint=bounded.fingerprint(),
            input_decimals=route.hops[0].pool.decimals_for(route.input_mint),
            output_decimals=route.hops[-1].pool.decimals_for(route.output_mint),
        )

    def get_quote_human(
        self,
        input_mint: Address,
        output_mint: Address,
        mode: TradeMode | str,
        amount: str,
        slippage_bps: Optional[int] = None,
    ) -> "SwapQuote":
        """Same as get_quote, with `amount` in display units of the fixed side."""
        mode = TradeMode.parse(mode)
        fixed_mint = input_mint if mode is TradeMode.EXACT_IN else output_mint
        raw = TokenAmount.from_human(amount, self.decimals_for(fixed_mint)).raw
        return self.get_quote(input_mint, output_mint, mode, raw, slippage_bps)


@dataclass(frozen=True)
class SwapQuote:
    mode: TradeMode
    slippage_bps: int
    route: RouteQuote
    bounded: RouteQuote
    min_max_amount: int
    price_impact: Decimal
    fingerprint: str
    input_decimals: int
    output_decimals: int

    @property
    def is_exact_in(self) -> bool:
        return self.mode is TradeMode.EXACT_IN

    @property
    def input_amount(self) -> TokenAmount:
        return TokenAmount(self.route.total_amount_in, self.input_decimals)

    @property
    def output_amount(self) -> TokenAmount:
        return TokenAmount(self.route.total_amount_out, self.output_decimals)

    @property
    def bound_amount(self) -> TokenAmount:
        """min_max_amount on the side the slippage applies to."""
        decimals = self.output_decimals if self.is_exact_in else self.input_decimals
        return TokenAmount(self.min_max_amount, decimals)

    @property
    def amount_out_per_one_token_in(self) -> int:
        return self.route.amount_out_per_one_token_in

    @property
    def amount_in_per_one_token_out(self) -> int:
        return self.route.amount_in_per_one_token_out

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "slippage_bps": self.slippage_bps,
            "slippage": str(bps_to_fraction(self.slippage_bps)),
            "amount_in": str(self.route.total_amount_in),
            "amount_out": str(self.route.total_amount_out),
            "min_max_amount": str(self.min_max_amount),
            "amount_in_human": str(self.input_amount.human),
            "amount_out_human": str(self.output_amount.human),
            "min_max_amount_human": str(self.bound_amount.human),
            "amount_out_per_one_token_in": str(self.amount_out_per_one_token_in),
            "amount_in_per_one_token_out": str(self.amount_in_per_one_token_out),
            "price_impact": str(self.price_impact),
            "fingerprint": self.fingerprint,
            "hops": self.bounded.to_dict()["hops"],
        }

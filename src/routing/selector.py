from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from core.base_types import Address

from .constants import DEFAULT_MAX_HOPS
from .graph import build_graph, enumerate_paths
from .pool import CpPool
from .route import RouteQuote, quote_path_exact_in, quote_path_exact_out

logger = logging.getLogger(__name__)


class TradeMode(str, Enum):
    EXACT_IN = "ExactIn"
    EXACT_OUT = "ExactOut"

    @classmethod
    def parse(cls, value: "TradeMode | str") -> "TradeMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown trade mode: {value!r}") from None


def _is_better(candidate: RouteQuote, best: Optional[RouteQuote], mode: TradeMode) -> bool:
    if best is None:
        return True
    if mode is TradeMode.EXACT_IN:
        return candidate.total_amount_out > best.total_amount_out
    return candidate.total_amount_in < best.total_amount_in


class RouteFinder:
    """
    Finds the best-priced route between two mints over a fixed pool set.
    """

    def __init__(
        self,
        pools: list[CpPool],
        max_hops: int = DEFAULT_MAX_HOPS,
        strict: bool = False,
    ):
        self.pools = list(pools)
        self.max_hops = max_hops
        self.strict = strict
        self.graph = build_graph(self.pools)

    def find_all_paths(self, input_mint: Address, output_mint: Address) -> list[list[CpPool]]:
        return enumerate_paths(self.graph, input_mint, output_mint, self.max_hops)

    def quote_path(
        self,
        path: list[CpPool],
        input_mint: Address,
        output_mint: Address,
        mode: TradeMode | str,
        amount: int,
    ) -> Optional[RouteQuote]:
        if TradeMode.parse(mode) is TradeMode.EXACT_IN:
            return quote_path_exact_in(path, input_mint, output_mint, amount, self.strict)
        return quote_path_exact_out(path, input_mint, output_mint, amount, self.strict)

    def quote_all(
        self,
        input_mint: Address,
        output_mint: Address,
        mode: TradeMode | str,
        amount: int,
    ) -> list[RouteQuote]:
        """Every path that prices successfully, in enumeration order."""
        if input_mint == output_mint:
            return []
        quotes: list[RouteQuote] = []
        for path in self.find_all_paths(input_mint, output_mint):
            quote = self.quote_path(path, input_mint, output_mint, mode, amount)
            if quote is not None:
                quotes.append(quote)
        return quotes

    def find_best_route(
        self,
        input_mint: Address,
        output_mint: Address,
        mode: TradeMode | str,
        amount: int,
    ) -> Optional[RouteQuote]:
        """
        Exact-in maximizes total_amount_out; exact-out minimizes total_amount_in.

        Ties keep the first path in enumeration order. Returns None when no
        path prices.
        """
        mode = TradeMode.parse(mode)
        best: Optional[RouteQuote] = None
        for quote in self.quote_all(input_mint, output_mint, mode, amount):
            if _is_better(quote, best, mode):
                best = quote
        if best is None:
            logger.debug("No route %s -> %s for %s %s", input_mint, output_mint, mode.value, amount)
        return best

    def compare_routes(
        self,
        input_mint: Address,
        output_mint: Address,
        mode: TradeMode | str,
        amount: int,
    ) -> list[dict]:
        """
        Compare all priced routes:
        {
            'route': RouteQuote,
            'path': [Address, ...],
            'num_hops': int,
            'amount_in': int,
            'amount_out': int,
            'price_impact': Decimal,
        }
        """
        comparisons: list[dict] = []
        for quote in self.quote_all(input_mint, output_mint, mode, amount):
            comparisons.append(
                {
                    "route": quote,
                    "path": quote.path,
                    "num_hops": quote.num_hops,
                    "amount_in": quote.total_amount_in,
                    "amount_out": quote.total_amount_out,
                    "price_impact": quote.price_impact(),
                }
            )
        return comparisons


def find_best_route(
    pools: list[CpPool],
    input_mint: Address,
    output_mint: Address,
    mode: TradeMode | str,
    amount: int,
    max_hops: int = DEFAULT_MAX_HOPS,
) -> Optional[RouteQuote]:
    if input_mint == output_mint:
        return None
    return RouteFinder(pools, max_hops=max_hops).find_best_route(
        input_mint, output_mint, mode, amount
    )

from .engine import SwapQuote, SwapRouter
from .errors import (
    InvalidMintError,
    InvalidSlippageError,
    NoRouteFoundError,
    RoutingError,
    simplify_routing_error_msg,
)
from .fees import effective_fee_ppm
from .graph import build_graph, enumerate_paths
from .pool import CpPool, CreatorFeeOn, FeeConfig, PoolState, build_cp_pool, build_cp_pools
from .quoter import UNREACHABLE, quote_in_single, quote_out_single
from .route import RouteHop, RouteQuote, quote_path_exact_in, quote_path_exact_out
from .selector import RouteFinder, TradeMode, find_best_route
from .slippage import apply_slippage, validate_slippage_bps

__all__ = [
    "SwapRouter",
    "SwapQuote",
    "RoutingError",
    "NoRouteFoundError",
    "InvalidMintError",
    "InvalidSlippageError",
    "simplify_routing_error_msg",
    "effective_fee_ppm",
    "build_graph",
    "enumerate_paths",
    "CpPool",
    "CreatorFeeOn",
    "FeeConfig",
    "PoolState",
    "build_cp_pool",
    "build_cp_pools",
    "UNREACHABLE",
    "quote_in_single",
    "quote_out_single",
    "RouteHop",
    "RouteQuote",
    "quote_path_exact_in",
    "quote_path_exact_out",
    "RouteFinder",
    "TradeMode",
    "find_best_route",
    "apply_slippage",
    "validate_slippage_bps",
]

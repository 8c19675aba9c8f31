"""Numeric constants shared by the quoting math."""

ONE_M = 1_000_000  # ppm, 100%
BPS = 10_000  # basis points, 100%

MAX_UINT128 = 2**128 - 1
ONE_E9 = 10**9

DEFAULT_SLIPPAGE_BPS = 10  # 0.1%
DEFAULT_MAX_HOPS = 3

# PoolState.status bit 2 set -> swaps disabled on-chain.
SWAP_DISABLED_BIT = 0b100

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
for path in (ROOT, SRC_PATH):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from core.base_types import Address, TokenAmount, to_int  # noqa: E402
from routing import (  # noqa: E402
    CpPool,
    FeeConfig,
    NoRouteFoundError,
    PoolState,
    SwapRouter,
    TradeMode,
    build_cp_pools,
    simplify_routing_error_msg,
)

PROGRAM_ID = Address.from_bytes(bytes([0xC9]) * 32)
WSOL = Address("So11111111111111111111111111111111111111112")
USDC = Address.from_bytes(bytes([0x0C]) * 32)
BONK = Address.from_bytes(bytes([0xB0]) * 32)
SYMBOLS = {WSOL: "SOL", USDC: "USDC", BONK: "BONK"}


def _sample_pools() -> list[CpPool]:
    # Shallow direct BONK/SOL pool, deep BONK/USDC and SOL/USDC pools.
    def _pool(seed: int, mint0: Address, dec0: int, mint1: Address, dec1: int,
              reserve0: int, reserve1: int) -> CpPool:
        return CpPool(
            program_id=PROGRAM_ID,
            pool_address=Address.from_bytes(bytes([seed]) * 32),
            token0_mint=mint0,
            token1_mint=mint1,
            mint0_decimals=dec0,
            mint1_decimals=dec1,
            fee_config=FeeConfig(trade_fee_rate=2_500),
            reserve0=reserve0,
            reserve1=reserve1,
        )

    return [
        _pool(1, BONK, 5, WSOL, 9, 5_000_000_000 * 10**5, 100 * 10**9),
        _pool(2, BONK, 5, USDC, 6, 900_000_000_000 * 10**5, 20_000_000 * 10**6),
        _pool(3, WSOL, 9, USDC, 6, 200_000 * 10**9, 30_000_000 * 10**6),
    ]


def _load_snapshot(path: Path) -> list[CpPool]:
    """
    Snapshot format:
    {"program_id": "...", "pools": [{"state": {...}, "fee_config": {...},
      "vault0_balance": "...", "vault1_balance": "..."}]}
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    program_id = Address.from_string(data["program_id"])
    entries = [
        (
            PoolState.from_dict(item["state"]),
            FeeConfig.from_dict(item["fee_config"]),
            to_int(item["vault0_balance"]),
            to_int(item["vault1_balance"]),
        )
        for item in data["pools"]
    ]
    return build_cp_pools(program_id, entries)


def _label(mint: Address) -> str:
    return SYMBOLS.get(mint, mint.short())


def _resolve_mint(value: str) -> Address:
    for mint, symbol in SYMBOLS.items():
        if value.upper() == symbol:
            return mint
    return Address.from_string(value)


def main() -> None:
    parser = argparse.ArgumentParser(description="Demo: best CPMM route")
    parser.add_argument("--snapshot", help="JSON pool snapshot (default: built-in sample)")
    parser.add_argument("--input", default="BONK", help="Input mint or sample symbol")
    parser.add_argument("--output", default="SOL", help="Output mint or sample symbol")
    parser.add_argument("--amount", default="1000000000", help="Human-readable amount")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in TradeMode],
        default=TradeMode.EXACT_IN.value,
    )
    parser.add_argument("--slippage-bps", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pools = _load_snapshot(Path(args.snapshot)) if args.snapshot else _sample_pools()
    router = SwapRouter(pools)
    input_mint = _resolve_mint(args.input)
    output_mint = _resolve_mint(args.output)

    mode = TradeMode(args.mode)
    fixed = input_mint if mode is TradeMode.EXACT_IN else output_mint
    try:
        raw = TokenAmount.from_human(args.amount, router.decimals_for(fixed)).raw
    except NoRouteFoundError as exc:
        raise SystemExit(simplify_routing_error_msg(exc)) from exc
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    print(f"Candidate routes {_label(input_mint)} -> {_label(output_mint)} ({mode.value})")
    print("-" * 72)
    for row in router.finder.compare_routes(input_mint, output_mint, mode, raw):
        hops = " -> ".join(_label(mint) for mint in row["path"])
        fees = "+".join(pool.fee_config.trade_fee_pct for pool in row["route"].pools)
        print(
            f"{hops:<24} in={row['amount_in']:>24} out={row['amount_out']:>24} "
            f"fees={fees:<12} impact={row['price_impact']:.4%}"
        )
    print("-" * 72)

    try:
        quote = router.get_quote(input_mint, output_mint, mode, raw, args.slippage_bps)
    except NoRouteFoundError as exc:
        raise SystemExit(simplify_routing_error_msg(exc)) from exc

    in_label = SYMBOLS.get(input_mint)
    out_label = SYMBOLS.get(output_mint)
    bound_label = out_label if quote.is_exact_in else in_label
    bound_name = "min out" if quote.is_exact_in else "max in"
    print(f"pay      {replace(quote.input_amount, symbol=in_label)}")
    print(f"receive  {replace(quote.output_amount, symbol=out_label)}")
    print(f"{bound_name:<8} {replace(quote.bound_amount, symbol=bound_label)}")
    print(json.dumps(quote.to_dict(), indent=2))


if __name__ == "__main__":
    main()

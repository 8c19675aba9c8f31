"""Token graph over CPMM pools and exhaustive path enumeration."""

from __future__ import annotations

from core.base_types import Address

from .constants import DEFAULT_MAX_HOPS
from .pool import CpPool

PoolGraph = dict[Address, list[CpPool]]


def build_graph(pools: list[CpPool]) -> PoolGraph:
    """
    Build adjacency graph: mint -> [pool, ...]

    Undirected multigraph; several pools may join the same pair. Adjacency
    lists keep the order pools were supplied in.
    """
    graph: PoolGraph = {}
    for pool in pools:
        graph.setdefault(pool.token0_mint, []).append(pool)
        graph.setdefault(pool.token1_mint, []).append(pool)
    return graph


def enumerate_paths(
    graph: PoolGraph,
    source: Address,
    dest: Address,
    max_hops: int = DEFAULT_MAX_HOPS,
) -> list[list[CpPool]]:
    """
    Find every simple path from `source` to `dest` with at most `max_hops` pools.

    Exhaustive rather than shortest-path: a longer path through deep pools can
    beat a direct shallow one. No mint is visited twice within one path.
    """
    if source == dest or max_hops <= 0:
        return []

    paths: list[list[CpPool]] = []
    seen: set[Address] = {source}

    def dfs(current: Address, path: list[CpPool], hops: int) -> None:
        if hops > max_hops:
            return
        if current == dest and path:
            paths.append(list(path))
            return
        for pool in graph.get(current, []):
            nxt = pool.other_mint(current)
            if nxt is None or nxt in seen:
                continue
            seen.add(nxt)
            path.append(pool)
            dfs(nxt, path, hops + 1)
            path.pop()
            seen.discard(nxt)

    dfs(source, [], 0)
    return paths

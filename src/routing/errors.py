"""Routing exceptions and user-facing error messages."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

NO_BEST_QUOTE_FOUND = "No best quote found"
FAILED_TO_GET_BEST_QUOTE = "Failed to get best quote"


class RoutingError(Exception):
    """Base class for routing errors."""


class NoRouteFoundError(RoutingError):
    """No path could satisfy the request."""

    def __init__(self, message: str = NO_BEST_QUOTE_FOUND):
        super().__init__(message)


class InvalidMintError(RoutingError, ValueError):
    """Mint is not one of the pool's two tokens."""

    def __init__(self, mint: object, pool_address: object):
        self.mint = mint
        self.pool_address = pool_address
        super().__init__(f"mint {mint} not in pool {pool_address}")


class InvalidSlippageError(RoutingError, ValueError):
    """Slippage tolerance outside [0, 10000] bps."""


def simplify_routing_error_msg(error: object) -> str:
    """Collapse any quoting failure into one of two messages for display."""
    if not isinstance(error, Exception):
        logger.warning("Routing failed with non-exception value: %r", error)
        return FAILED_TO_GET_BEST_QUOTE
    logger.info("Routing failed: %s", error)
    if isinstance(error, NoRouteFoundError):
        return NO_BEST_QUOTE_FOUND
    return FAILED_TO_GET_BEST_QUOTE

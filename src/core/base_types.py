"""Core type definitions for the swap router."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

import base58

PUBKEY_LENGTH = 32


@dataclass(frozen=True)
class Address:
    """Solana public key in base58 form, validated on construction."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("Address value must be a string")
        try:
            raw = base58.b58decode(self.value)
        except ValueError as exc:
            raise ValueError("Invalid Solana address") from exc
        if len(raw) != PUBKEY_LENGTH:
            raise ValueError("Invalid Solana address")

    @classmethod
    def from_string(cls, s: str) -> "Address":
        return cls(s.strip())

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Address":
        if len(raw) != PUBKEY_LENGTH:
            raise ValueError("public key must be 32 bytes")
        return cls(base58.b58encode(raw).decode("ascii"))

    @property
    def base58(self) -> str:
        return self.value

    def to_bytes(self) -> bytes:
        return base58.b58decode(self.value)

    def short(self) -> str:
        """Display form: first five and last four characters."""
        return f"{self.value[:5]}...{self.value[-4:]}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TokenAmount:
    """
    Represents a token amount with proper decimal handling.

    Internally stores raw integer (smallest units).
    Provides human-readable formatting.
    """

    raw: int
    decimals: int
    symbol: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.raw, int):
            raise TypeError("raw must be an int")
        if not isinstance(self.decimals, int) or self.decimals < 0:
            raise ValueError("decimals must be a non-negative integer")

    @classmethod
    def from_human(
        cls, amount: str | Decimal, decimals: int, symbol: str | None = None
    ) -> "TokenAmount":
        """Create from human-readable amount (e.g., '1.5' SOL)."""
        if isinstance(amount, float):
            raise TypeError("amount must be a string or Decimal, not float")
        if isinstance(amount, str):
            try:
                decimal_amount = Decimal(amount.strip().replace("_", ""))
            except InvalidOperation as exc:
                raise ValueError(f"invalid amount: {amount!r}") from exc
        elif isinstance(amount, Decimal):
            decimal_amount = amount
        else:
            raise TypeError("amount must be a string or Decimal")
        if not decimal_amount.is_finite():
            raise ValueError(f"invalid amount: {amount!r}")

        scale = Decimal(10) ** Decimal(decimals)
        raw_decimal = decimal_amount * scale
        if raw_decimal != raw_decimal.to_integral_value():
            raise ValueError("amount has more precision than decimals allow")
        return cls(raw=int(raw_decimal), decimals=decimals, symbol=symbol)

    @property
    def human(self) -> Decimal:
        """Returns human-readable decimal."""
        scale = Decimal(10) ** Decimal(self.decimals)
        return Decimal(self.raw) / scale

    def __str__(self) -> str:
        return f"{self.human} {self.symbol or ''}".strip()


def to_int(value: object) -> int:
    """Parse an integer-like value from a JSON snapshot (int or decimal string)."""
    if isinstance(value, bool):
        raise ValueError("Expected integer-like value")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    raise ValueError("Expected integer-like value")


def to_bool(value: object) -> bool:
    """Parse a flag from a JSON snapshot (bool, 0/1, or 'true'/'false' text)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off", ""):
            return False
    raise ValueError("Expected boolean-like value")

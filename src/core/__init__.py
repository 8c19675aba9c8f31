from .base_types import Address, TokenAmount
from .serializer import CanonicalSerializer

__all__ = ["Address", "TokenAmount", "CanonicalSerializer"]

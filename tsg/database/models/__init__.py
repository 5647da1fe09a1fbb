"""Database models for triton service group keys."""

from .base import Base
from .keys import KeyRecord

__all__ = [
    "Base",
    "KeyRecord",
]

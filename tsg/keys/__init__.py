from .key import Key
from .store import KeyStore

__all__ = ["Key", "KeyStore"]

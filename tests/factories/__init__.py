from .keys import KeyFactory

__all__ = ["KeyFactory"]

from .client import FinraClient

__all__ = ["FinraClient"]

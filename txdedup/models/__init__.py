"""Database models."""

from .transaction import Base, Transaction

__all__ = ["Base", "Transaction"]

"""Database models."""

from app.models.transaction import Transaction

__all__ = [
    "Transaction",
]

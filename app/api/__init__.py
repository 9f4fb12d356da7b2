"""External API clients."""

from app.api.transaction_feed import FeedTransaction, TransactionFeedClient

__all__ = [
    "FeedTransaction",
    "TransactionFeedClient",
]

"""Remote product-transaction feed client.

The feed is a single JSON array of transaction-shaped objects, e.g.::

    {"id": 1, "title": "...", "price": 329.85, "description": "...",
     "category": "men's clothing", "image": "https://...", "sold": false,
     "dateOfSale": "2021-11-27T20:29:54+05:30"}
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.config import settings
from app.exceptions import SeedFailure

logger = logging.getLogger(__name__)


class FeedTransaction(BaseModel):
    """One record of the feed, validated and normalised for storage."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    source_id: Optional[str] = Field(default=None, alias="id")
    title: Optional[str] = None
    description: Optional[str] = None
    price: float
    date_of_sale: Optional[datetime] = Field(default=None, alias="dateOfSale")
    category: Optional[str] = None
    sold: bool
    image: Optional[str] = None

    @field_validator("source_id", mode="before")
    @classmethod
    def _id_as_string(cls, v: Any) -> Any:
        # Feed ids are numbers; stored as opaque strings
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("date_of_sale")
    @classmethod
    def _to_naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is None or v.tzinfo is None:
            return v
        return v.astimezone(timezone.utc).replace(tzinfo=None)


class TransactionFeedClient:
    """Fetches the full transaction set from the configured feed URL."""

    def __init__(
        self,
        feed_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.feed_url = feed_url or settings.transactions_feed_url
        self.timeout = timeout if timeout is not None else settings.feed_timeout_seconds
        self._transport = transport

    async def fetch_transactions(self) -> list[FeedTransaction]:
        """Download and validate every record; any bad record fails the whole fetch."""
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.get(self.feed_url, timeout=self.timeout)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SeedFailure(f"Failed to fetch transaction feed from {self.feed_url}: {e}") from e

        if not isinstance(data, list):
            raise SeedFailure(f"Transaction feed returned {type(data).__name__}, expected a JSON array")

        return self.parse_records(data)

    def parse_records(self, data: list[Any]) -> list[FeedTransaction]:
        out: list[FeedTransaction] = []
        for position, item in enumerate(data):
            try:
                out.append(FeedTransaction.model_validate(item))
            except ValidationError as e:
                raise SeedFailure(f"Invalid transaction at position {position}: {e}") from e
        logger.info(f"Fetched {len(out)} transactions from feed")
        return out


transaction_feed = TransactionFeedClient()

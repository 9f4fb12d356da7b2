"""Product transaction model (one row per record of the seed feed)."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import Boolean, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Transaction(Base):
    """Represents a product sale transaction seeded from the remote feed."""

    __tablename__ = "transactions"

    # Storage identity; the feed's own "id" is not guaranteed unique.
    pk: Mapped[int] = mapped_column(primary_key=True)
    source_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    title: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True, index=True)

    # Naive UTC
    date_of_sale: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    sold: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def to_dict(self) -> dict[str, Any]:
        """JSON shape served to the dashboard frontend."""
        date_of_sale = None
        if self.date_of_sale is not None:
            date_of_sale = self.date_of_sale.replace(tzinfo=timezone.utc).isoformat()
        return {
            "_id": self.pk,
            "id": self.source_id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "dateOfSale": date_of_sale,
            "category": self.category,
            "sold": self.sold,
            "image": self.image,
        }

    def __repr__(self) -> str:
        return f"<Transaction(pk={self.pk}, id={self.source_id}, price={self.price})>"

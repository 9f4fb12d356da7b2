"""Read-only queries over the seeded transactions.

Each operation takes an explicit session (or, for the combined view, a session
factory) and a parsed ``TransactionFilter``; none of them write.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Callable, Optional

from sqlalchemy import case, extract, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.exceptions import DashboardError, StorageFailure, UpstreamFailure
from app.filters import TransactionFilter
from app.models import Transaction

logger = logging.getLogger(__name__)

# Largest integer a JS number holds exactly; the frontend renders this label as-is.
MAX_SAFE_INTEGER = 9007199254740991

PRICE_RANGES: list[tuple[int, int]] = [
    (0, 100),
    (101, 200),
    (201, 300),
    (301, 400),
    (401, 500),
    (501, 600),
    (601, 700),
    (701, 800),
    (801, 900),
    (901, MAX_SAFE_INTEGER),
]


@contextmanager
def _storage_errors(what: str):
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Error fetching {what}: {e}")
        raise StorageFailure(f"Failed to fetch {what}") from e


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _conditions(filters: TransactionFilter) -> list:
    """Translate a filter into SQL WHERE clauses (ANDed by the caller)."""
    conditions = []

    if filters.search_text:
        pattern = f"%{_escape_like(filters.search_text)}%"
        matches = [
            Transaction.title.ilike(pattern, escape="\\"),
            Transaction.description.ilike(pattern, escape="\\"),
            Transaction.category.ilike(pattern, escape="\\"),
        ]
        if filters.price_equals is not None:
            matches.append(Transaction.price == filters.price_equals)
        conditions.append(or_(*matches))

    if filters.month_index is not None:
        # Calendar month in any year
        conditions.append(extract("month", Transaction.date_of_sale) == filters.month_index)

    return conditions


def list_transactions(
    db: Session,
    filters: TransactionFilter,
    page: int = 1,
    per_page: int = 10,
) -> dict[str, Any]:
    """One page of matching transactions plus the total match count."""
    conditions = _conditions(filters)

    with _storage_errors("transactions"):
        rows = db.scalars(
            select(Transaction)
            .where(*conditions)
            .order_by(Transaction.pk)
            .offset((page - 1) * per_page)
            .limit(per_page)
        ).all()
        total = db.scalar(select(func.count()).select_from(Transaction).where(*conditions))

    return {
        "transactions": [tx.to_dict() for tx in rows],
        "total": total or 0,
        "page": page,
        "perPage": per_page,
    }


def get_statistics(db: Session, filters: TransactionFilter) -> dict[str, Any]:
    """Sale amount, sold count and unsold count for one calendar month."""
    filters.require_month()

    stmt = select(
        func.coalesce(func.sum(case((Transaction.sold == True, Transaction.price), else_=0)), 0),
        func.coalesce(func.sum(case((Transaction.sold == True, 1), else_=0)), 0),
        func.coalesce(func.sum(case((Transaction.sold == False, 1), else_=0)), 0),
    ).where(*_conditions(filters))

    with _storage_errors("statistics"):
        total_sale_amount, total_sold, total_not_sold = db.execute(stmt).one()

    return {
        "totalSaleAmount": float(total_sale_amount),
        "totalSoldItems": int(total_sold),
        "totalNotSoldItems": int(total_not_sold),
    }


def get_bar_chart(db: Session, filters: TransactionFilter) -> list[dict[str, Any]]:
    """Transaction counts per fixed price range, always all ten ranges in order.

    A price lands in the first range whose upper bound it does not exceed, so
    integer prices respect the inclusive bounds (100 -> 0-100, 101 -> 101-200)
    and fractional prices between two ranges go to the higher one.
    """
    bucket = case(
        *[(Transaction.price <= upper, index) for index, (_, upper) in enumerate(PRICE_RANGES)],
        else_=len(PRICE_RANGES) - 1,
    ).label("bucket")

    stmt = (
        select(bucket, func.count())
        .where(Transaction.price.isnot(None), *_conditions(filters))
        .group_by("bucket")
    )

    with _storage_errors("bar chart data"):
        counts = {int(index): count for index, count in db.execute(stmt).all()}

    return [
        {"range": f"{low}-{high}", "count": counts.get(index, 0)}
        for index, (low, high) in enumerate(PRICE_RANGES)
    ]


def get_pie_chart(db: Session, filters: TransactionFilter) -> dict[Optional[str], int]:
    """Transaction count per category."""
    stmt = (
        select(Transaction.category, func.count())
        .where(*_conditions(filters))
        .group_by(Transaction.category)
        .order_by(Transaction.category)
    )

    with _storage_errors("pie chart data"):
        return {category: count for category, count in db.execute(stmt).all()}


def _with_session(session_factory: sessionmaker, fn: Callable, filters: TransactionFilter):
    db = session_factory()
    try:
        return fn(db, filters)
    finally:
        db.close()


async def get_combined_data(session_factory: sessionmaker, filters: TransactionFilter) -> dict[str, Any]:
    """Statistics, bar chart and pie chart for one month, fetched concurrently.

    Each read runs in its own worker thread with its own session.
    """
    filters.require_month()

    try:
        statistics, bar_chart, pie_chart = await asyncio.gather(
            asyncio.to_thread(_with_session, session_factory, get_statistics, filters),
            asyncio.to_thread(_with_session, session_factory, get_bar_chart, filters),
            asyncio.to_thread(_with_session, session_factory, get_pie_chart, filters),
        )
    except (DashboardError, SQLAlchemyError) as e:
        logger.error(f"Combined data for {filters.month_name} failed: {e}")
        raise UpstreamFailure("Failed to fetch combined data") from e

    return {
        "statistics": statistics,
        "barChart": bar_chart,
        "pieChart": pie_chart,
    }

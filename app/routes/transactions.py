"""Transaction routes for the reporting dashboard."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, sessionmaker

from app.config import settings
from app.database import get_db, get_session_factory
from app.filters import TransactionFilter
from app.services import transactions as service

router = APIRouter(prefix="/api/transactions")


@router.get("")
def list_transactions(
    db: Session = Depends(get_db),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=settings.default_per_page, ge=1, le=settings.max_per_page, alias="perPage"),
    search: str = "",
    month: Optional[str] = None,
):
    """
    List transactions with search and pagination.

    Args:
        page: 1-based page number
        perPage: Page size
        search: Matches title/description/category (substring) or exact price
        month: English month name; matches that month in any year
    """
    filters = TransactionFilter.parse(month=month, search=search)
    return service.list_transactions(db, filters, page=page, per_page=per_page)


@router.get("/statistics")
def get_statistics(db: Session = Depends(get_db), month: Optional[str] = None):
    """Total sale amount and sold / not-sold counts for a month."""
    filters = TransactionFilter.parse(month=month)
    return service.get_statistics(db, filters)


@router.get("/bar-chart")
def get_bar_chart(db: Session = Depends(get_db), month: Optional[str] = None):
    """Transaction counts per price range."""
    filters = TransactionFilter.parse(month=month)
    return service.get_bar_chart(db, filters)


@router.get("/pie-chart")
def get_pie_chart(db: Session = Depends(get_db), month: Optional[str] = None):
    """Transaction counts per category."""
    filters = TransactionFilter.parse(month=month)
    return service.get_pie_chart(db, filters)


@router.get("/combined-data")
async def get_combined_data(
    session_factory: sessionmaker = Depends(get_session_factory),
    month: Optional[str] = None,
):
    """Statistics, bar chart and pie chart for a month in one response."""
    filters = TransactionFilter.parse(month=month)
    return await service.get_combined_data(session_factory, filters)

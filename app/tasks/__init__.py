"""Celery tasks."""

from app.tasks.celery_app import celery_app
from app.tasks.reseed import seed_transactions

__all__ = [
    "celery_app",
    "seed_transactions",
]

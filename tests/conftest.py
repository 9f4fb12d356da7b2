"""Shared fixtures: a throwaway SQLite database per test and a seeded API client."""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.api.transaction_feed import FeedTransaction
from app.database import Base, get_db, get_session_factory
from app.main import app
from app.seeds import seed_transactions

# Feed-shaped records. March holds the price-boundary cases.
SAMPLE_FEED: list[dict[str, object]] = [
    {"id": 1, "title": "Fjallraven Backpack", "description": "Your perfect pack for everyday use",
     "price": 109.95, "category": "men's clothing", "sold": False,
     "dateOfSale": "2021-09-27T20:29:54+05:30", "image": "https://img.test/1.jpg"},
    {"id": 2, "title": "Mens Casual T-Shirt", "description": "Slim-fitting style",
     "price": 22.3, "category": "men's clothing", "sold": False,
     "dateOfSale": "2022-10-27T20:29:54+05:30", "image": "https://img.test/2.jpg"},
    {"id": 3, "title": "Mens Cotton Jacket", "description": "Great outerwear jacket",
     "price": 55.99, "category": "men's clothing", "sold": True,
     "dateOfSale": "2021-11-27T20:29:54+05:30", "image": "https://img.test/3.jpg"},
    {"id": 4, "title": "Gold Ring", "description": "Classic 100% gold band",
     "price": 100, "category": "jewelery", "sold": True,
     "dateOfSale": "2022-03-15T10:00:00Z", "image": "https://img.test/4.jpg"},
    {"id": 5, "title": "Silver Ring", "description": "Plain band",
     "price": 101, "category": "jewelery", "sold": False,
     "dateOfSale": "2021-03-10T10:00:00Z", "image": "https://img.test/5.jpg"},
    {"id": 6, "title": "SSD 1TB", "description": "Fast storage",
     "price": 900, "category": "electronics", "sold": True,
     "dateOfSale": "2022-03-01T08:00:00Z", "image": "https://img.test/6.jpg"},
    {"id": 7, "title": "Monitor 4K", "description": "Ultra HD display",
     "price": 901, "category": "electronics", "sold": True,
     "dateOfSale": "2021-03-31T23:30:00Z", "image": "https://img.test/7.jpg"},
    {"id": 8, "title": "Rain Jacket Women", "description": "Lightweight",
     "price": 39.99, "category": "women's clothing", "sold": True,
     "dateOfSale": "2022-07-04T12:00:00Z", "image": "https://img.test/8.jpg"},
    {"id": 9, "title": "Laptop", "description": "Gaming laptop",
     "price": 999.99, "category": "electronics", "sold": False,
     "dateOfSale": "2021-12-25T12:00:00Z", "image": "https://img.test/9.jpg"},
    {"id": 10, "title": "USB Cable", "description": "1 meter cable_usb",
     "price": 9.85, "category": "electronics", "sold": True,
     "dateOfSale": "2022-01-02T12:00:00Z", "image": "https://img.test/10.jpg"},
    # 2021-03-31T20:30 UTC, so March
    {"id": 11, "title": "Night Lamp", "description": "Warm light",
     "price": 150.5, "category": "home decor", "sold": False,
     "dateOfSale": "2021-04-01T02:00:00+05:30", "image": "https://img.test/11.jpg"},
    {"id": 12, "title": "Desk Mat", "description": "Soft mat",
     "price": 100.5, "category": "home decor", "sold": False,
     "dateOfSale": "2022-02-14T12:00:00Z", "image": "https://img.test/12.jpg"},
]


def feed_records(items: list[dict[str, object]] | None = None) -> list[FeedTransaction]:
    return [FeedTransaction.model_validate(item) for item in (SAMPLE_FEED if items is None else items)]


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'transactions.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    seed_transactions(db, feed_records())
    return db


def _override_db(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    return _get_db


@pytest.fixture
def client(session_factory, seeded_db):
    app.dependency_overrides[get_db] = _override_db(session_factory)
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

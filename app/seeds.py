"""Database seeding from the remote transaction feed.

Seeding replaces the whole table: delete everything, bulk insert the fetched
records, commit once. A process lock plus a database table lock keep two
seeds (web workers, the Celery task) from interleaving.
"""

import logging
import threading
from typing import Optional

from sqlalchemy import delete, insert, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.api.transaction_feed import FeedTransaction, TransactionFeedClient, transaction_feed
from app.database import SessionLocal
from app.exceptions import SeedFailure
from app.models import Transaction

logger = logging.getLogger(__name__)

_seed_lock = threading.Lock()


def _lock_table(db: Session) -> None:
    """Block other seeders until this transaction ends.

    SQLite already serialises writers on its database lock. On PostgreSQL a
    second DELETE would otherwise miss rows the first seeder inserted.
    """
    if db.get_bind().dialect.name == "postgresql":
        db.execute(text(f"LOCK TABLE {Transaction.__tablename__} IN EXCLUSIVE MODE"))


def seed_transactions(db: Session, records: list[FeedTransaction]) -> int:
    """Replace all stored transactions with ``records``. Returns rows inserted."""
    rows = [record.model_dump() for record in records]

    with _seed_lock:
        try:
            _lock_table(db)
            db.execute(delete(Transaction))
            if rows:
                db.execute(insert(Transaction), rows)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise SeedFailure(f"Failed to replace stored transactions: {e}") from e

    logger.info(f"Seeded {len(rows)} transactions")
    return len(rows)


async def initialize_database(
    session_factory: sessionmaker = SessionLocal,
    client: TransactionFeedClient = transaction_feed,
) -> Optional[int]:
    """Fetch the feed and reseed. Failures are logged, never raised.

    Returns the number of rows inserted, or None when seeding failed and the
    previous contents (possibly none) are left in place.
    """
    try:
        records = await client.fetch_transactions()
        db = session_factory()
        try:
            count = seed_transactions(db, records)
        finally:
            db.close()
    except SeedFailure as e:
        logger.error(f"Failed to initialize database: {e}")
        return None

    logger.info("Database initialized")
    return count

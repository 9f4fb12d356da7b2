"""Re-seed the transactions table from the remote feed, out of process.

Run on demand:
    celery -A app.tasks.celery_app call app.tasks.reseed.seed_transactions
"""

import asyncio
import logging

from app.api.transaction_feed import transaction_feed
from app.database import SessionLocal
from app.exceptions import SeedFailure
from app.seeds import seed_transactions as replace_transactions
from app.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


def run_async(coro):
    """Helper to run async code in sync context."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@celery_app.task(bind=True)
def seed_transactions(self):
    """Fetch the feed and replace every stored transaction.

    Failures are reported in the result, not retried.
    """
    logger.info("Starting transaction re-seed")

    db = SessionLocal()
    try:
        records = run_async(transaction_feed.fetch_transactions())
        inserted = replace_transactions(db, records)
    except SeedFailure as e:
        logger.error(f"Transaction re-seed failed: {e}")
        return {"status": "failed", "error": str(e)}
    finally:
        db.close()

    logger.info(f"Transaction re-seed complete: {inserted} inserted")
    return {"status": "success", "inserted": inserted}

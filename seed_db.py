"""Seed the database with the remote transaction feed, once.

Creates the tables if needed, then replaces every stored transaction with the
feed contents. For a running deployment, prefer the Celery task:
    celery -A app.tasks.celery_app call app.tasks.reseed.seed_transactions
"""

import asyncio
import logging
import sys

from app.database import Base, engine
from app.seeds import initialize_database

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    Base.metadata.create_all(bind=engine)
    inserted = asyncio.run(initialize_database())
    if inserted is None:
        print("Seeding failed; see log for details.")
        return 1

    print(f"Seeded {inserted} transactions.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Seed the document store with the bundled fixture dataset.

Usage:
    aptiprep-seed
    python -m aptiprep.scripts.seed_data

Exits 0 on success and 1 if any seeding step fails.
"""

import asyncio
import logging
import sys
from pathlib import Path

from aptiprep.core.config import Settings, get_settings
from aptiprep.core.store import create_document_store
from aptiprep.services.seed_service import SeedReport, seed_database


logger = logging.getLogger(__name__)


async def run_seed(settings: Settings) -> SeedReport:
    """Open the configured store, seed it and close it again."""
    store = create_document_store(settings)
    try:
        if settings.DOCUMENT_STORE == "sql":
            await store.create_tables()
        return await seed_database(store)
    finally:
        await store.close()


def print_summary(report: SeedReport) -> None:
    print("\n🎉 Database seeding completed successfully!")
    print("\nSeeded data:")
    for name, count in report.counts().items():
        print(f"- {count} {name}")


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if settings.DOCUMENT_STORE == "firestore":
        key_path = Path(settings.FIREBASE_CREDENTIALS_PATH)
        if key_path.is_file():
            print(f"🔑 Using service account key {key_path}")
        else:
            print(f"⚠️  {key_path} not found, falling back to Application Default Credentials")
        print(f"🔥 Project: {settings.FIREBASE_PROJECT_ID}")
    else:
        print(f"🗄️  SQL store: {settings.DATABASE_URL}")

    print("🌱 Starting database seeding...\n")

    try:
        report = asyncio.run(run_seed(settings))
    except Exception as e:
        logger.exception("Seeding aborted")
        print(f"❌ Error seeding database: {e}")
        sys.exit(1)

    print_summary(report)
    sys.exit(0)


if __name__ == "__main__":
    main()

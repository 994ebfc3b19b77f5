import sys

from pymongo.errors import PyMongoError

from bookshelf import config
from bookshelf.logger import get_logger
from bookshelf.runner import open_connection
from bookshelf.seed import seed_books

logger = get_logger("seed_books")


def main() -> int:
    try:
        with open_connection() as db:
            ids = seed_books(db, config.SEED_FAKE_BOOKS, locale=config.SEED_LOCALE, drop_existing=True)
    except PyMongoError as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    logger.info(f"Inserted {len(ids)} books into {config.MONGO_DB}.{config.MONGO_COLLECTION}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

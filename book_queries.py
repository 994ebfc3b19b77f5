import sys

from bookshelf.logger import get_logger
from bookshelf.runner import run

logger = get_logger("book_queries")


def main() -> int:
    result = run()
    if result.ok:
        logger.info("All queries completed")
        return 0
    where = f" at step '{result.failed_step}'" if result.failed_step else ""
    logger.error(f"Run ended with {result.status.value}{where}: {result.error}")
    return 1


if __name__ == "__main__":
    sys.exit(main())

"""
One-time environment setup: reserve the duplicate filter and build the text index.

Usage::

    python -m bites.bootstrap                 # filter (if missing) + index
    python -m bites.bootstrap --reset-filter  # also forget every recorded signature
"""

import argparse
import asyncio
import logging

from bites.redis_client import create_redis
from bites.services import duplicates, search

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def run(reset_filter: bool = False) -> None:
    redis = create_redis()
    try:
        if reset_filter:
            await duplicates.reset_filter(redis)
            logger.info("Duplicate filter reset")
        elif not await duplicates.ensure_filter(redis):
            logger.info("Duplicate filter already present")

        await search.create_index(redis)
    finally:
        await redis.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Prepare the Redis Stack environment")
    parser.add_argument(
        "--reset-filter",
        action="store_true",
        help="Drop and re-reserve the duplicate filter",
    )
    args = parser.parse_args()
    asyncio.run(run(reset_filter=args.reset_filter))
    logger.info("Done!")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Entrypoint script for maintenance tasks.

    python manage.py setup     # create indexes and seed default languages
    python manage.py stats     # print catalog statistics as JSON
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

# === Add 'src' directory to PYTHONPATH ===
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_PATH = PROJECT_ROOT / "src"

if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

load_dotenv(dotenv_path=PROJECT_ROOT / ".env", override=True)

from common.logging.logger import log_info  # noqa: E402
from common.utils.string_utils import json_default  # noqa: E402
from domain.products.services.stats_service import ProductStatsAggregator  # noqa: E402
from infrastructure.database.mongodb.connection import MongoDBConnection  # noqa: E402
from infrastructure.database.mongodb.mongo_client import PRODUCTS_COLLECTION  # noqa: E402
from infrastructure.database.mongodb.repository import MongoRepository  # noqa: E402
from infrastructure.setup.initial_setup import run_initial_setup  # noqa: E402


async def setup():
    db = await MongoDBConnection.connect()
    try:
        await run_initial_setup(db)
    finally:
        await MongoDBConnection.disconnect()


async def stats():
    db = await MongoDBConnection.connect()
    try:
        result = await ProductStatsAggregator(MongoRepository(db, PRODUCTS_COLLECTION)).stats()
    finally:
        await MongoDBConnection.disconnect()
    print(json.dumps(result, default=json_default, ensure_ascii=False, indent=2))


COMMANDS = {"setup": setup, "stats": stats}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Moger Mulluk maintenance tasks")
    parser.add_argument("command", choices=sorted(COMMANDS))
    args = parser.parse_args(argv)

    log_info("Manage script started.", extra={"command": args.command})
    asyncio.run(COMMANDS[args.command]())


if __name__ == "__main__":
    main()

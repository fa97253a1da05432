#!/usr/bin/env python3
"""Load a JSON employee seed file into the Cosmos DB employee container.

Run from the backend/ directory:

    python3 scripts/seed_directory.py [--file PATH] [--dry-run] [--verbose]

Existing employees with the same id are overwritten (upsert).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from azure.cosmos.aio import CosmosClient  # noqa: E402

from employee_directory.core.config import Settings  # noqa: E402
from employee_directory.models.employee import Employee  # noqa: E402
from employee_directory.services.store import load_seed_file, to_document  # noqa: E402

logger = logging.getLogger(__name__)


def build_documents(employees: list[Employee]) -> list[dict[str, Any]]:
    return [to_document(e) for e in employees]


async def upsert_documents(container: Any, documents: list[dict[str, Any]], *, dry_run: bool = False) -> tuple[int, int]:
    if dry_run:
        return len(documents), 0

    succeeded = 0
    failed = 0
    for doc in documents:
        try:
            await container.upsert_item(body=doc)
            succeeded += 1
        except Exception:
            logger.exception("Failed to upsert employee %s", doc.get("id"))
            failed += 1
    return succeeded, failed


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Seed the employee directory container from a JSON file",
    )
    parser.add_argument(
        "--file",
        default=None,
        help="Seed file (default: EMPLOYEE_SEED_FILE setting)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and validate the seed file without writing to Cosmos DB",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


async def seed(args: argparse.Namespace) -> tuple[int, int]:
    settings = Settings()
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    path = args.file or settings.EMPLOYEE_SEED_FILE
    employees = load_seed_file(path)
    documents = build_documents(employees)
    logger.info("Loaded %d employees from %s", len(documents), path)

    if args.dry_run:
        succeeded, failed = await upsert_documents(None, documents, dry_run=True)
        logger.info("[DRY RUN] %d employees validated, nothing written.", succeeded)
        return succeeded, failed

    logger.info("Connecting to Cosmos DB...")
    cosmos_client = CosmosClient(settings.COSMOS_DB_ENDPOINT, settings.COSMOS_DB_KEY)
    try:
        db = cosmos_client.get_database_client(settings.COSMOS_DB_DATABASE)
        container = db.get_container_client(settings.COSMOS_DB_EMPLOYEES_CONTAINER)
        succeeded, failed = await upsert_documents(container, documents)
    finally:
        await cosmos_client.close()

    logger.info("Seeding complete: %d succeeded, %d failed", succeeded, failed)
    return succeeded, failed


def main() -> None:
    args = parse_args()
    asyncio.run(seed(args))


if __name__ == "__main__":
    main()

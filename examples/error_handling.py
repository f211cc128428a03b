"""Error handling — hard failures from queries, soft failures from mutations.

Demonstrates the normalized error hierarchy, the logged notices issued by
lifecycle operations, and strict mode turning those notices into errors.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile

from disk_entities import (
    AlreadyExists,
    DiskConfig,
    DiskEntityError,
    DiskFolder,
    NotFound,
    aggregate,
    list_all_files,
)

if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        missing = os.path.join(tmp, "missing")

        # --- Queries raise ---
        try:
            list_all_files(missing)
        except NotFound as exc:
            print(f"NotFound: {exc}")
            print(f"  path={exc.path}, operation={exc.operation}")

        try:
            asyncio.run(aggregate(missing))
        except DiskEntityError as exc:
            print(f"\n{type(exc).__name__}: {exc}")

        # --- Mutations log a notice and carry on ---
        DiskFolder(folder_path=os.path.join(tmp, "taken")).create()
        source = DiskFolder("source", tmp).create()
        source.move_to("taken")
        print(f"\nMove refused, folder still at {source.full_path}")

        # --- Strict mode raises instead ---
        strict = DiskFolder("source", tmp, config=DiskConfig(strict=True))
        try:
            strict.move_to("taken")
        except AlreadyExists as exc:
            print(f"\nAlreadyExists: {exc}")

    print("\nDone!")

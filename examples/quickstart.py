"""Quickstart — create, write, list and measure a folder tree.

Demonstrates:
- Creating folders and saving files through entities
- Listing every file of a subtree
- Aggregating the size and date range of the subtree
"""

from __future__ import annotations

import asyncio
import tempfile

from disk_entities import DiskFile, DiskFolder

if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        project = DiskFolder("project", tmp).create()

        # Save a few files; parent folders are created on demand
        DiskFile("readme", project.full_path, extension="md", content="# Project\n").save()
        DiskFile("main", f"{project.full_path}/src", extension="py", content="print('hi')\n").save()
        DiskFile("util", f"{project.full_path}/src/lib", extension="py", content="X = 1\n").save()

        # Relative paths of every file
        print("Files:")
        for path in project.list_all_files():
            print(f"  {path}")

        # Only Python files, as absolute paths
        print("\nPython files:")
        for path in project.list_all_files(r"\.py$", include_full_path=True):
            print(f"  {path}")

        # Aggregate statistics
        stats = asyncio.run(project.get_stats())
        print(f"\nTotal size: {stats.size_bytes} bytes")
        print(f"Oldest change: {stats.oldest_modified}")
        print(f"Newest change: {stats.newest_modified}")

    print("\nDone! Temp directory cleaned up automatically.")

"""File operations — the lifecycle API demonstrated.

Covers: save, read, rename, move_to, copy_to, save_as, delete,
empty_content, content search and search_and_replace.
"""

from __future__ import annotations

import logging
import tempfile

from disk_entities import DiskFile, DiskFolder, Materialize

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        docs = DiskFolder("docs", tmp).create()

        # --- Save and read ---
        notes = DiskFile("notes", docs.full_path, extension="txt", content="TODO: write docs\n").save()
        print(f"Saved {notes.full_path} ({notes.size_in_bytes} bytes)")
        print(f"Read back: {notes.get_content()!r}")

        # --- Rename (extension is kept) ---
        notes.rename("todo")
        print(f"\nRenamed to {notes.file_name} (exists: {notes.exists()})")

        # --- Move into a subfolder, relative to the current folder ---
        notes.move_to("archive")
        print(f"Moved to {notes.folder_path}")

        # --- Copy returns a new entity ---
        backup = notes.copy_to("../backup")
        print(f"Copied to {backup.full_path}")

        # --- save_as writes the in-memory content elsewhere ---
        draft = notes.read().save_as("../draft.txt")
        print(f"Saved a draft at {draft.full_path}")

        # --- Search file contents across the subtree ---
        print("\nFiles mentioning TODO:")
        for match in docs.find_all_matching("TODO"):
            print(f"  {match.full_path}")

        # --- Edit in memory, then write ---
        draft.search_and_replace("TODO", "DONE").save()
        print(f"\nDraft now reads: {draft.get_content()!r}")

        # --- Entities for every file ---
        for entity in docs.list_all_files(materialize=Materialize.DISK_FILE):
            print(f"  {entity.file_name}: {entity.size_in_bytes} bytes, modified {entity.last_modified}")

        # --- Delete keeps the in-memory content ---
        draft.delete()
        print(f"\nDeleted draft (exists: {draft.exists()}, content kept: {draft.content!r})")

        # --- Renaming something that is not on disk only logs a notice ---
        DiskFile("ghost", docs.full_path).rename("still-ghost")

        # --- empty_content clears descendants but keeps the folder ---
        docs.empty_content()
        print(f"\nAfter empty_content: {docs.get_children(True, True, True)} (exists: {docs.exists()})")

    print("\nDone!")

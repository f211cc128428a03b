"""Immutable probe and statistics models."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclasses.dataclass(frozen=True)
class ProbeResult:
    """Snapshot of a single path's own metadata (links are not followed).

    :param path: The probed path.
    :param is_dir: ``True`` for a directory.
    :param is_file: ``True`` for a regular file.
    :param is_symlink: ``True`` for a symbolic link.
    :param size_bytes: Size reported by ``lstat``.
    :param modified: Last modification time (UTC).
    """

    path: str
    is_dir: bool
    is_file: bool
    is_symlink: bool
    size_bytes: int
    modified: datetime


@dataclasses.dataclass(frozen=True)
class AggregateStats:
    """Cumulative size and modification range of a directory subtree.

    :param size_bytes: Total size of every leaf in the subtree.
    :param oldest_modified: Earliest leaf modification time, ``None`` if no leaf.
    :param newest_modified: Latest leaf modification time, ``None`` if no leaf.
    """

    size_bytes: int = 0
    oldest_modified: datetime | None = None
    newest_modified: datetime | None = None

    @property
    def is_empty(self) -> bool:
        """``True`` when no leaf contributed to the statistics."""
        return self.oldest_modified is None

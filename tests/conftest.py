"""Shared test fixtures and marker registration."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator

T1 = datetime(2023, 5, 1, 12, 0, tzinfo=timezone.utc)
T2 = datetime(2024, 2, 10, 8, 30, tzinfo=timezone.utc)


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "symlink: requires permission to create symbolic links")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if _symlinks_supported():
        return
    skip = pytest.mark.skip(reason="symbolic links cannot be created here")
    for item in items:
        if "symlink" in item.keywords:
            item.add_marker(skip)


def _symlinks_supported() -> bool:
    with tempfile.TemporaryDirectory() as tmp:
        try:
            os.symlink(tmp, os.path.join(tmp, "link"))
        except (OSError, NotImplementedError):
            return False
    return True


def write_file(path: str, data: bytes, mtime: datetime | None = None) -> str:
    """Write ``data`` to ``path`` (creating parents) and optionally pin its mtime."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as fh:
        fh.write(data)
    if mtime is not None:
        ts = mtime.timestamp()
        os.utime(path, (ts, ts))
    return path


@pytest.fixture
def workdir() -> Iterator[str]:
    with tempfile.TemporaryDirectory() as tmp:
        yield os.path.realpath(tmp)


@pytest.fixture
def tree(workdir: str) -> str:
    """``root/a.txt`` (10 bytes, T1) and ``root/sub/b.txt`` (20 bytes, T2)."""
    root = os.path.join(workdir, "root")
    write_file(os.path.join(root, "a.txt"), b"a" * 10, T1)
    write_file(os.path.join(root, "sub", "b.txt"), b"b" * 20, T2)
    return root

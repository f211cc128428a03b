"""Statistics aggregator — recursive, concurrent size and date range of a subtree.

Children of a folder are probed concurrently as asyncio tasks; subfolders are
aggregated recursively. Every task completes on the event loop thread, so the
running totals of one call are updated without a lock. A failing child
cancels its still-running siblings and the failure propagates to the caller.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import os
from typing import TYPE_CHECKING

from disk_entities._config import DEFAULT_CONFIG
from disk_entities._models import AggregateStats
from disk_entities._probe import list_dir_async, probe_async

if TYPE_CHECKING:
    from datetime import datetime

    from disk_entities._config import DiskConfig
    from disk_entities._types import PathLike

log = logging.getLogger(__name__)


@dataclasses.dataclass
class _Accumulator:
    """Running totals owned by a single :func:`aggregate` call."""

    size_bytes: int = 0
    oldest: datetime | None = None
    newest: datetime | None = None

    def add_leaf(self, size_bytes: int, modified: datetime) -> None:
        self.size_bytes += size_bytes
        self._widen(modified, modified)

    def merge(self, sub: AggregateStats) -> None:
        self.size_bytes += sub.size_bytes
        if sub.oldest_modified is not None and sub.newest_modified is not None:
            self._widen(sub.oldest_modified, sub.newest_modified)

    def _widen(self, oldest: datetime, newest: datetime) -> None:
        if self.oldest is None or oldest < self.oldest:
            self.oldest = oldest
        if self.newest is None or newest > self.newest:
            self.newest = newest

    def freeze(self) -> AggregateStats:
        return AggregateStats(size_bytes=self.size_bytes, oldest_modified=self.oldest, newest_modified=self.newest)


async def aggregate(folder_path: PathLike, *, config: DiskConfig | None = None) -> AggregateStats:
    """Compute the cumulative size and modification range of a folder subtree.

    Symbolic links count as leaves with their own size and date; their
    targets are never followed. Folders themselves contribute only through
    their content, so a subtree without any leaf has no dates.

    :param folder_path: Folder to aggregate.
    :param config: Retry and concurrency settings.
    :raises NotFound: If the folder, or an entry while being probed, is missing.
    :raises PermissionDenied: If part of the subtree cannot be read.
    :raises IOFailure: For any other OS error.
    """
    config = config or DEFAULT_CONFIG
    limiter = asyncio.Semaphore(config.max_concurrent_probes)
    return await _aggregate(os.fspath(folder_path), config, limiter)


async def _aggregate(path: str, config: DiskConfig, limiter: asyncio.Semaphore) -> AggregateStats:
    names = await list_dir_async(path, config=config)
    if not names:
        return AggregateStats()

    acc = _Accumulator()
    tasks = [asyncio.ensure_future(_contribute(os.path.join(path, name), acc, config, limiter)) for name in names]
    await _join(tasks)
    log.debug("Aggregated %d entries under %s: %d bytes", len(tasks), path, acc.size_bytes)
    return acc.freeze()


async def _contribute(path: str, acc: _Accumulator, config: DiskConfig, limiter: asyncio.Semaphore) -> None:
    async with limiter:
        info = await probe_async(path, config=config)
    if info.is_dir and not info.is_symlink:
        acc.merge(await _aggregate(path, config, limiter))
    else:
        acc.add_leaf(info.size_bytes, info.modified)


async def _join(tasks: list[asyncio.Future[None]]) -> None:
    """Wait for every task; on the first failure cancel the rest and re-raise it."""
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    failure: BaseException | None = None
    for task in done:
        if task.cancelled():
            continue
        exc = task.exception()
        if exc is not None and failure is None:
            failure = exc
    if failure is None:
        return

    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
    log.debug("Aggregation aborted, %d sibling probes cancelled", len(pending))
    raise failure

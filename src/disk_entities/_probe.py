"""Existence and metadata queries against a single path."""

from __future__ import annotations

import errno
import logging
import os
import stat
from datetime import datetime, timezone
from typing import TYPE_CHECKING, TypeVar

import aiofiles.os
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from disk_entities._config import DEFAULT_CONFIG
from disk_entities._errors import NotFound, map_os_error
from disk_entities._models import ProbeResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from disk_entities._config import DiskConfig
    from disk_entities._types import PathLike

T = TypeVar("T")

log = logging.getLogger(__name__)

_TRANSIENT_ERRNOS = frozenset({errno.EAGAIN, errno.EBUSY, errno.EINTR, errno.ETIMEDOUT})


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, OSError) and exc.errno in _TRANSIENT_ERRNOS


def _to_probe_result(path: str, st: os.stat_result) -> ProbeResult:
    return ProbeResult(
        path=path,
        is_dir=stat.S_ISDIR(st.st_mode),
        is_file=stat.S_ISREG(st.st_mode),
        is_symlink=stat.S_ISLNK(st.st_mode),
        size_bytes=st.st_size,
        modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
    )


# region: existence checks
def folder_exists(path: PathLike) -> bool:
    """Return ``True`` only if ``path`` is a directory, not a link to one. Never raises."""
    try:
        return stat.S_ISDIR(os.stat(path, follow_symlinks=False).st_mode)
    except (OSError, ValueError):
        return False


def file_exists(path: PathLike) -> bool:
    """Return ``True`` if ``path`` exists, whatever its type. Never raises."""
    try:
        return os.path.exists(path)
    except ValueError:
        return False


# endregion


# region: metadata probes
def probe(path: PathLike) -> ProbeResult:
    """Probe a path's own metadata, without following a symbolic link.

    :raises NotFound: If the path does not exist.
    :raises PermissionDenied: If the path cannot be inspected.
    :raises IOFailure: For any other OS error.
    """
    native = os.fspath(path)
    try:
        st = os.stat(native, follow_symlinks=False)
    except OSError as exc:
        raise map_os_error(exc, native, "probe") from None
    return _to_probe_result(native, st)


async def _retrying(func: Callable[[], Awaitable[T]], config: DiskConfig) -> T:
    """Await ``func`` again while it fails with a transient OS error."""
    async for attempt in AsyncRetrying(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(config.probe_attempts),
        wait=wait_exponential(multiplier=config.probe_backoff, max=1.0),
        before_sleep=before_sleep_log(log, logging.WARNING),  # type: ignore[arg-type,unused-ignore]
        reraise=True,
    ):
        with attempt:
            return await func()
    raise AssertionError("unreachable")  # pragma: no cover


async def probe_async(path: PathLike, *, config: DiskConfig | None = None) -> ProbeResult:
    """Asynchronous :func:`probe`; transient OS errors are retried.

    :raises NotFound: If the path does not exist.
    :raises PermissionDenied: If the path cannot be inspected.
    :raises IOFailure: For any other OS error.
    """
    native = os.fspath(path)
    try:
        st = await _retrying(lambda: aiofiles.os.stat(native, follow_symlinks=False), config or DEFAULT_CONFIG)
    except OSError as exc:
        raise map_os_error(exc, native, "probe") from None
    return _to_probe_result(native, st)


async def list_dir_async(path: PathLike, *, config: DiskConfig | None = None) -> list[str]:
    """List the entry names of a directory; transient OS errors are retried.

    :raises NotFound: If the directory does not exist.
    :raises PermissionDenied: If the directory cannot be read.
    :raises IOFailure: For any other OS error.
    """
    native = os.fspath(path)
    try:
        return await _retrying(lambda: aiofiles.os.listdir(native), config or DEFAULT_CONFIG)
    except OSError as exc:
        raise map_os_error(exc, native, "list") from None


# endregion


# region: listing
def list_children(path: PathLike, *, directories: bool, files: bool, others: bool = False) -> list[str]:
    """Sorted names of the direct children of a directory, filtered by type.

    Types are taken from ``lstat``, so a symbolic link is neither a
    directory nor a file. With all three flags set every entry is returned.

    :param directories: Include directories.
    :param files: Include regular files.
    :param others: Include anything else (links, sockets, FIFOs...).
    :raises NotFound: If ``path`` is not an existing directory.
    :raises PermissionDenied: If the directory cannot be read.
    """
    native = os.fspath(path)
    if not os.path.isdir(native):
        raise NotFound(f"Folder does not exist: {native}", path=native, operation="list")
    try:
        names = sorted(os.listdir(native))
    except OSError as exc:
        raise map_os_error(exc, native, "list") from None
    if directories and files and others:
        return names

    kept: list[str] = []
    for name in names:
        info = probe(os.path.join(native, name))
        if (
            (directories and info.is_dir)
            or (files and info.is_file)
            or (others and not info.is_dir and not info.is_file)
        ):
            kept.append(name)
    return kept


# endregion

"""Normalized error hierarchy for disk_entities."""

from __future__ import annotations

import errno
from typing import Optional


class DiskEntityError(Exception):
    """Base class for all disk_entities errors.

    :param message: Human-readable error description.
    :param path: The path involved in the error, if any.
    :param operation: The entity operation that failed, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None, operation: Optional[str] = None) -> None:
        self.path = path
        self.operation = operation
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.operation is not None:
            parts.append(f"operation={self.operation!r}")
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(super().__str__())]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.operation is not None:
            args.append(f"operation={self.operation!r}")
        return f"{cls}({', '.join(args)})"


class NotFound(DiskEntityError):
    """Raised when an operation needs a file or folder that does not exist."""


class AlreadyExists(DiskEntityError):
    """Raised when a destination already exists where none is expected."""


class InvalidPath(DiskEntityError):
    """Raised when an entity cannot be built from the given path parts."""


class IOFailure(DiskEntityError):
    """Raised for disk, transient or otherwise unclassified OS errors.

    :param errno: The native ``errno`` value, if known.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        errno: Optional[int] = None,
    ) -> None:
        self.errno = errno
        super().__init__(message, path=path, operation=operation)


class PermissionDenied(IOFailure):
    """Raised when the operating system refuses access to a path."""


_NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


def map_os_error(exc: OSError, path: str, operation: str) -> DiskEntityError:
    """Translate a native ``OSError`` into the matching :class:`DiskEntityError`.

    The caller is expected to ``raise ... from None``.
    """
    reason = exc.strerror or str(exc)
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)) or exc.errno in _NOT_FOUND_ERRNOS:
        return NotFound(f"No such file or folder: {path}", path=path, operation=operation)
    if isinstance(exc, FileExistsError) or exc.errno in (errno.EEXIST, errno.ENOTEMPTY):
        return AlreadyExists(f"Destination already exists: {path}", path=path, operation=operation)
    if isinstance(exc, PermissionError):
        return PermissionDenied(f"Permission denied: {path}", path=path, operation=operation, errno=exc.errno)
    return IOFailure(f"{reason}: {path}", path=path, operation=operation, errno=exc.errno)

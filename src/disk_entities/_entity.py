"""In-memory descriptors of folder and file locations."""

from __future__ import annotations

import io
import os
from typing import TYPE_CHECKING

from disk_entities._config import DEFAULT_CONFIG
from disk_entities._errors import InvalidPath

if TYPE_CHECKING:
    from disk_entities._config import DiskConfig
    from disk_entities._types import Content, PathLike


def _absolute(path: PathLike) -> str:
    return os.path.abspath(os.fspath(path))


class Folder:
    """A folder location, whether or not it exists on disk.

    Build it either from ``name`` and ``parent_path`` or from a complete
    ``folder_path``.

    :param name: Final path component.
    :param parent_path: Path of the containing folder.
    :param folder_path: Complete path of the folder itself.
    :param config: Settings handed down to entities created from this one.
    :raises InvalidPath: If neither form is fully given.
    """

    def __init__(
        self,
        name: str | None = None,
        parent_path: PathLike | None = None,
        *,
        folder_path: PathLike | None = None,
        config: DiskConfig | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        if folder_path is not None:
            full = _absolute(folder_path)
            self.parent_path, self.name = os.path.split(full)
            if not self.name:
                # filesystem root: keep it whole as the parent
                self.parent_path, self.name = full, ""
        elif name is not None and parent_path is not None:
            self.name = name
            self.parent_path = _absolute(parent_path)
        else:
            raise InvalidPath("Folder needs either folder_path or both name and parent_path")

    @property
    def full_path(self) -> str:
        """Absolute path, recomputed from ``parent_path`` and ``name``."""
        if not self.name:
            return self.parent_path
        return os.path.join(self.parent_path, self.name)

    def __fspath__(self) -> str:
        return self.full_path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_path!r})"


class File:
    """A file location plus an in-memory content buffer.

    Build it either from ``name`` and ``folder_path`` or from a complete
    ``file_path``. The content is never synced with disk implicitly.

    :param name: File name, without ``extension``.
    :param folder_path: Path of the containing folder.
    :param extension: Suffix appended after a dot; empty for none.
    :param file_path: Complete path of the file (``extension`` stays empty).
    :param content: Initial in-memory content.
    :param config: Settings handed down to entities created from this one.
    :raises InvalidPath: If neither form is fully given.
    """

    def __init__(
        self,
        name: str | None = None,
        folder_path: PathLike | None = None,
        *,
        extension: str = "",
        file_path: PathLike | None = None,
        content: Content | None = None,
        config: DiskConfig | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.size_in_bytes = 0
        if file_path is not None:
            self.folder_path, self.name = os.path.split(_absolute(file_path))
            self.extension = ""
        elif name is not None and folder_path is not None:
            self.name = name
            self.folder_path = _absolute(folder_path)
            self.extension = extension
        else:
            raise InvalidPath("File needs either file_path or both name and folder_path")
        if not self.name:
            raise InvalidPath("File name must not be empty", path=os.fspath(file_path or folder_path or ""))
        self._content: Content | None = None
        if content is not None:
            self.content = content

    @property
    def file_name(self) -> str:
        """Name including the extension."""
        if self.extension:
            return f"{self.name}.{self.extension}"
        return self.name

    @property
    def full_path(self) -> str:
        """Absolute path, recomputed from ``folder_path``, ``name`` and ``extension``."""
        return os.path.join(self.folder_path, self.file_name)

    @property
    def content(self) -> Content | None:
        return self._content

    @content.setter
    def content(self, value: Content | None) -> None:
        self._content = value
        if isinstance(value, str):
            self.size_in_bytes = len(value.encode(self.config.encoding))
        elif isinstance(value, (bytes, bytearray)):
            self.size_in_bytes = len(value)
        elif value is None:
            self.size_in_bytes = 0

    def content_bytes(self) -> bytes:
        """Return the in-memory content as bytes, draining a stream if needed."""
        value = self._content
        if value is None:
            return b""
        if isinstance(value, str):
            return value.encode(self.config.encoding)
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        if isinstance(value, io.IOBase) and value.seekable():
            value.seek(0)
        return value.read()

    def __fspath__(self) -> str:
        return self.full_path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_path!r})"

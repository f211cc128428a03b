"""DiskFile — a file entity bound to the local filesystem."""

from __future__ import annotations

import logging
import os
import re
import shutil
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, BinaryIO

from disk_entities._entity import File
from disk_entities._errors import AlreadyExists, NotFound, map_os_error
from disk_entities._folder import DiskFolder, soft_fail
from disk_entities._probe import file_exists

if TYPE_CHECKING:
    from collections.abc import Callable

    from disk_entities._config import DiskConfig
    from disk_entities._types import Content, PathLike

log = logging.getLogger(__name__)


def _birthtime(st: os.stat_result) -> float:
    # st_birthtime exists on macOS, BSD and Windows (3.12+); ctime elsewhere
    return getattr(st, "st_birthtime", st.st_ctime)


class DiskFile(File):
    """A file whose operations act on disk.

    Stats are loaded at construction when the file already exists; the
    content is only loaded by :meth:`read`.

    :param on_change: Called once as ``on_change(self, on_change_params)``
        after construction.
    :param on_change_params: Extra argument for ``on_change``.
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
        on_change: Callable[[DiskFile, Any], object] | None = None,
        on_change_params: Any = None,
    ) -> None:
        super().__init__(
            name,
            folder_path,
            extension=extension,
            file_path=file_path,
            content=content,
            config=config,
        )
        self._stream: BinaryIO | None = None
        self.stats: os.stat_result | None = None
        self.last_modified: datetime | None = None
        self.created: datetime | None = None
        if self.exists():
            self.get_stats()
        if on_change is not None:
            on_change(self, on_change_params)

    def exists(self) -> bool:
        """``True`` if the path exists, whatever its type."""
        return file_exists(self.full_path)

    def get_stats(self) -> os.stat_result:
        """Stat the file and refresh the cached size and dates.

        :raises NotFound: If the file does not exist.
        """
        path = self.full_path
        try:
            st = os.stat(path)
        except OSError as exc:
            raise map_os_error(exc, path, "stat") from None
        self.stats = st
        self.size_in_bytes = st.st_size
        self.last_modified = datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)
        self.created = datetime.fromtimestamp(_birthtime(st), tz=timezone.utc)
        return st

    def _reset_stats(self) -> None:
        self.stats = None
        self.size_in_bytes = 0
        self.last_modified = None
        self.created = None

    # region: content
    def read(self) -> DiskFile:
        """Load the content from disk.

        Files of at least ``config.large_file_threshold`` bytes are handed out
        as an open binary stream instead of bytes.
        """
        path = self.full_path
        if not self.exists():
            soft_fail(self.config, NotFound(f"File has not been found: {path}", path=path, operation="read"))
            return self
        self.close()
        try:
            if self.get_stats().st_size < self.config.large_file_threshold:
                with open(path, "rb") as fh:
                    self.content = fh.read()
            else:
                self._stream = open(path, "rb")  # noqa: SIM115
                self.content = self._stream
        except OSError as exc:
            raise map_os_error(exc, path, "read") from None
        return self

    def close(self) -> None:
        """Close the stream handed out by a previous :meth:`read`, if any."""
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()

    def get_content(self) -> Content | None:
        """Read the file and return its content."""
        return self.read().content

    def search_and_replace(self, pattern: str | bytes | re.Pattern[Any], replacement: str | bytes) -> DiskFile:
        """Substitute every match of ``pattern`` in the in-memory content."""
        content = self.content
        if content is None:
            return self
        if not isinstance(content, (str, bytes, bytearray)):
            content = self.content_bytes()
        compiled = re.compile(pattern) if isinstance(pattern, (str, bytes)) else pattern
        if isinstance(compiled.pattern, bytes) and isinstance(content, str):
            content = content.encode(self.config.encoding)
        elif isinstance(compiled.pattern, str) and not isinstance(content, str):
            content = bytes(content).decode(self.config.encoding)
        self.content = compiled.sub(replacement, content)
        return self

    # endregion

    # region: lifecycle
    def create(self) -> DiskFile:
        return self.save()

    def save(self) -> DiskFile:
        """Write the in-memory content to disk, creating the parent folder first."""
        DiskFolder(folder_path=self.folder_path, config=self.config).create()
        path = self.full_path
        data = self.content_bytes()
        try:
            with open(path, "wb") as fh:
                fh.write(data)
        except OSError as exc:
            raise map_os_error(exc, path, "save") from None
        log.debug("Saved %d bytes to %s", len(data), path)
        self.get_stats()
        return self

    def save_as(self, target_path: PathLike) -> DiskFile:
        """Write this content to ``target_path``, resolved against the folder.

        :returns: A new entity for the written file.
        """
        target = os.path.abspath(os.path.join(self.folder_path, os.fspath(target_path)))
        return DiskFile(file_path=target, content=self.content, config=self.config).create()

    def rename(self, new_name: str) -> DiskFile:
        """Rename the file on disk if it exists; the in-memory name changes anyway.

        The extension is kept.
        """
        if self.exists():
            src = self.full_path
            dst = os.path.join(self.folder_path, f"{new_name}.{self.extension}" if self.extension else new_name)
            try:
                os.rename(src, dst)
            except OSError as exc:
                raise map_os_error(exc, dst, "rename") from None
            log.debug("Renamed file %s -> %s", src, dst)
        else:
            soft_fail(
                self.config,
                NotFound(
                    f"Cannot rename file that does not exist yet, create it first: {self.full_path}",
                    path=self.full_path,
                    operation="rename",
                ),
            )
        self.name = new_name
        return self

    def delete(self) -> DiskFile:
        """Delete the file on disk. The in-memory content is kept."""
        path = self.full_path
        if not self.exists():
            soft_fail(
                self.config,
                NotFound(f"Cannot delete file that does not exist yet: {path}", path=path, operation="delete"),
            )
            return self
        try:
            os.unlink(path)
        except OSError as exc:
            raise map_os_error(exc, path, "delete") from None
        self._reset_stats()
        log.debug("Deleted file %s", path)
        return self

    def move_to(self, relative_folder_path: PathLike) -> DiskFile:
        """Move the file into a folder resolved against its current folder.

        A folder already sitting at the destination path is never moved into:
        the move is refused and neither disk nor this entity change.

        :raises NotFound: If the file does not exist.
        """
        new_folder = os.path.abspath(os.path.join(self.folder_path, os.fspath(relative_folder_path)))
        src, dst = self.full_path, os.path.join(new_folder, self.file_name)
        if os.path.isdir(dst):
            soft_fail(
                self.config,
                AlreadyExists(f"A folder already exists at the destination: {dst}", path=dst, operation="move"),
            )
            return self
        DiskFolder(folder_path=new_folder, config=self.config).create()
        try:
            shutil.move(src, dst)
        except OSError as exc:
            raise map_os_error(exc, src, "move") from None
        log.debug("Moved file %s -> %s", src, dst)
        self.folder_path = new_folder
        return self

    def copy_to(self, relative_folder_path: PathLike) -> DiskFile:
        """Copy the file into a folder resolved against its current folder.

        :returns: A new entity for the copy.
        :raises NotFound: If the file does not exist.
        """
        new_folder = os.path.abspath(os.path.join(self.folder_path, os.fspath(relative_folder_path)))
        src, dst = self.full_path, os.path.join(new_folder, self.file_name)
        if not self.exists():
            raise NotFound(f"File does not exist: {src}", path=src, operation="copy")
        DiskFolder(folder_path=new_folder, config=self.config).create()
        try:
            shutil.copy2(src, dst)
        except OSError as exc:
            raise map_os_error(exc, dst, "copy") from None
        log.debug("Copied file %s -> %s", src, dst)
        return DiskFile(file_path=dst, config=self.config)

    # endregion

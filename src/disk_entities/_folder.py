"""DiskFolder — a folder entity bound to the local filesystem."""

from __future__ import annotations

import logging
import os
import shutil
from typing import TYPE_CHECKING

from disk_entities import _search, _stats, _traversal
from disk_entities._entity import Folder
from disk_entities._errors import AlreadyExists, NotFound, map_os_error
from disk_entities._probe import file_exists, folder_exists, list_children
from disk_entities._traversal import Materialize

if TYPE_CHECKING:
    from disk_entities._config import DiskConfig
    from disk_entities._errors import DiskEntityError
    from disk_entities._file import DiskFile
    from disk_entities._models import AggregateStats
    from disk_entities._types import ContentPattern, NamePattern, PathLike

log = logging.getLogger(__name__)


def soft_fail(config: DiskConfig, error: DiskEntityError) -> None:
    """Raise ``error`` in strict mode, otherwise log it as a notice."""
    if config.strict:
        raise error
    log.warning("%s", error)


class DiskFolder(Folder):
    """A folder whose operations act on disk.

    Lifecycle operations return ``self`` so calls can be chained, e.g.
    ``DiskFolder(folder_path=p).create().copy_to("../backup")``. Acting on a
    missing folder or onto an existing target is reported as a logged
    notice (or raised with ``DiskConfig(strict=True)``); OS errors during an
    attempted change are always raised.
    """

    # region: queries
    def exists(self) -> bool:
        """``True`` only if the path exists and is a directory."""
        return folder_exists(self.full_path)

    def get_children(self, directories: bool, files: bool, others: bool = False) -> list[str]:
        """Names of direct children, filtered by type.

        :raises NotFound: If the folder does not exist.
        """
        return list_children(self.full_path, directories=directories, files=files, others=others)

    def get_sub_folders(self) -> list[str]:
        """Names of the direct subfolders."""
        return self.get_children(True, False)

    def list_files(
        self,
        name_pattern: NamePattern | None = None,
        materialize: Materialize = Materialize.RAW,
    ) -> list:
        """Direct files of this folder; see :func:`disk_entities.list_files`."""
        return _traversal.list_files(
            self.full_path, name_pattern=name_pattern, materialize=materialize, config=self.config
        )

    def list_all_files(
        self,
        name_pattern: NamePattern | None = None,
        materialize: Materialize = Materialize.RAW,
        include_full_path: bool = False,
    ) -> list:
        """Every file of this subtree; see :func:`disk_entities.list_all_files`."""
        return _traversal.list_all_files(
            self.full_path,
            name_pattern=name_pattern,
            materialize=materialize,
            include_full_path=include_full_path,
            config=self.config,
        )

    def find_first_matching(self, pattern: ContentPattern | None) -> DiskFile | None:
        return _search.find_first_matching(self.full_path, pattern, config=self.config)

    def find_all_matching(self, pattern: ContentPattern | None) -> list[DiskFile]:
        return _search.find_all_matching(self.full_path, pattern, config=self.config)

    async def get_stats(self, folder_path: PathLike | None = None) -> AggregateStats:
        """Aggregate size and modification range of this subtree (or of ``folder_path``)."""
        return await _stats.aggregate(folder_path or self.full_path, config=self.config)

    # endregion

    # region: lifecycle
    def create(self) -> DiskFolder:
        """Create the folder and any missing parents; no-op if it exists."""
        if not self.exists():
            path = self.full_path
            try:
                os.makedirs(path, exist_ok=True)
            except OSError as exc:
                raise map_os_error(exc, path, "create") from None
            log.debug("Created folder %s", path)
        return self

    def save(self) -> DiskFolder:
        return self.create()

    def rename(self, new_name: str) -> DiskFolder:
        """Rename the folder on disk if it exists; the in-memory name changes anyway."""
        if self.exists():
            src, dst = self.full_path, os.path.join(self.parent_path, new_name)
            try:
                os.rename(src, dst)
            except OSError as exc:
                raise map_os_error(exc, dst, "rename") from None
            log.debug("Renamed folder %s -> %s", src, dst)
        else:
            soft_fail(
                self.config,
                NotFound(
                    f"Cannot rename folder that does not exist yet, create it first: {self.full_path}",
                    path=self.full_path,
                    operation="rename",
                ),
            )
        self.name = new_name
        return self

    def delete(self) -> DiskFolder:
        """Delete the folder and everything below it."""
        path = self.full_path
        if not self.exists():
            soft_fail(self.config, NotFound(f"Folder does not exist: {path}", path=path, operation="delete"))
            return self
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            # an entry vanished while walking; remove whatever is left
            if folder_exists(path):
                try:
                    shutil.rmtree(path)
                except OSError as exc:
                    raise map_os_error(exc, path, "delete") from None
        except OSError as exc:
            raise map_os_error(exc, path, "delete") from None
        log.debug("Deleted folder %s", path)
        return self

    def empty_content(self) -> DiskFolder:
        """Remove every descendant, keeping the folder itself."""
        return self.delete().create()

    def move_to(self, target_path: PathLike) -> DiskFolder:
        """Move the folder to ``target_path``, resolved against the parent folder.

        An existing target entry is never overwritten: the move is refused
        and neither disk nor this entity change.
        """
        target = os.path.abspath(os.path.join(self.parent_path, os.fspath(target_path)))
        if file_exists(target):
            soft_fail(
                self.config,
                AlreadyExists(f"Target destination already exists: {target}", path=target, operation="move"),
            )
            return self

        if self.exists():
            src = self.full_path
            try:
                os.makedirs(os.path.dirname(target), exist_ok=True)
                os.rename(src, target)
            except OSError as exc:
                raise map_os_error(exc, target, "move") from None
            log.debug("Moved folder %s -> %s", src, target)
        else:
            src = self.full_path
            soft_fail(self.config, NotFound(f"Folder does not exist: {src}", path=src, operation="move"))
        self.parent_path, self.name = os.path.split(target)
        return self

    def copy_to(self, target_path: PathLike) -> DiskFolder:
        """Copy the folder and its content to ``target_path``, resolved against the parent folder.

        Files already at the destination are overwritten; symbolic links are
        copied as links.

        :returns: A new entity for the copy.
        :raises NotFound: If this folder does not exist.
        """
        src = self.full_path
        target = os.path.abspath(os.path.join(self.parent_path, os.fspath(target_path)))
        if not self.exists():
            raise NotFound(f"Folder does not exist: {src}", path=src, operation="copy")
        try:
            shutil.copytree(src, target, symlinks=True, dirs_exist_ok=True)
        except shutil.Error as exc:
            raise map_os_error(OSError(str(exc)), target, "copy") from None
        except OSError as exc:
            raise map_os_error(exc, target, "copy") from None
        log.debug("Copied folder %s -> %s", src, target)
        return DiskFolder(folder_path=target, config=self.config)

    # endregion

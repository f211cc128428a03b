"""Direct and recursive file enumeration with name filtering."""

from __future__ import annotations

import enum
import os
import re
from typing import TYPE_CHECKING, Union

from disk_entities._config import DEFAULT_CONFIG
from disk_entities._entity import File
from disk_entities._probe import list_children

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from disk_entities._config import DiskConfig
    from disk_entities._file import DiskFile
    from disk_entities._types import NamePattern, PathLike

Listed = Union[list[str], list[File], list["DiskFile"]]  # noqa: UP007


class Materialize(enum.Enum):
    """Shape of the items returned by a file listing."""

    RAW = "raw"
    FILE = "file"
    DISK_FILE = "disk_file"


def _name_filter(name_pattern: NamePattern | None) -> Callable[[str], bool] | None:
    if name_pattern is None:
        return None
    if isinstance(name_pattern, str):
        name_pattern = re.compile(name_pattern)
    if isinstance(name_pattern, re.Pattern):
        compiled = name_pattern
        return lambda name: compiled.search(name) is not None
    return name_pattern


def _builder(materialize: Materialize) -> Callable[..., File]:
    if materialize is Materialize.DISK_FILE:
        from disk_entities._file import DiskFile

        return DiskFile
    return File


def list_files(
    folder_path: PathLike,
    *,
    name_pattern: NamePattern | None = None,
    materialize: Materialize = Materialize.RAW,
    config: DiskConfig | None = None,
) -> Listed:
    """List the regular files directly inside a folder.

    :param folder_path: Folder to list.
    :param name_pattern: Regex (searched in the name) or predicate on the name.
    :param materialize: Return names, ``File`` or ``DiskFile`` entities.
    :param config: Settings handed to materialized entities.
    :raises NotFound: If the folder does not exist.
    """
    native = os.path.abspath(os.fspath(folder_path))
    names = list_children(native, directories=False, files=True)
    keep = _name_filter(name_pattern)
    if keep is not None:
        names = [name for name in names if keep(name)]
    if materialize is Materialize.RAW:
        return names
    build = _builder(materialize)
    return [build(name, native, config=config or DEFAULT_CONFIG) for name in names]


def list_all_files(
    folder_path: PathLike,
    *,
    name_pattern: NamePattern | None = None,
    materialize: Materialize = Materialize.RAW,
    include_full_path: bool = False,
    config: DiskConfig | None = None,
) -> Listed:
    """List every regular file of a folder subtree, depth first.

    Raw results are ``/``-joined paths relative to ``folder_path``, or
    absolute paths with ``include_full_path``. Entities carry their own
    absolute folder and are returned as is.

    :param folder_path: Root of the subtree.
    :param name_pattern: Regex (searched in the name) or predicate on the name.
    :param materialize: Return paths, ``File`` or ``DiskFile`` entities.
    :param include_full_path: Return absolute paths (raw mode only).
    :param config: Settings handed to materialized entities.
    :raises NotFound: If the folder does not exist.
    """
    root = os.path.abspath(os.fspath(folder_path))
    return _walk(root, (), name_pattern, materialize, include_full_path, config)


def _walk(
    root: str,
    segments: Sequence[str],
    name_pattern: NamePattern | None,
    materialize: Materialize,
    include_full_path: bool,
    config: DiskConfig | None,
) -> Listed:
    here = os.path.join(root, *segments)
    found = list(list_files(here, name_pattern=name_pattern, materialize=materialize, config=config))
    if materialize is Materialize.RAW:
        if include_full_path:
            found = [os.path.join(here, name) for name in found]
        else:
            found = ["/".join((*segments, name)) for name in found]

    for sub in list_children(here, directories=True, files=False):
        found.extend(_walk(root, (*segments, sub), name_pattern, materialize, include_full_path, config))
    return found

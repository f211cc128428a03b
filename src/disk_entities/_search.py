"""Scan every file of a subtree for a regex match."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from disk_entities._config import DEFAULT_CONFIG
from disk_entities._traversal import Materialize, list_all_files

if TYPE_CHECKING:
    from disk_entities._config import DiskConfig
    from disk_entities._file import DiskFile
    from disk_entities._types import ContentPattern, PathLike


def _matches(file: DiskFile, pattern: re.Pattern[str] | re.Pattern[bytes], encoding: str) -> bool:
    try:
        data = file.read().content_bytes()
    finally:
        file.close()
    file.content = data
    if isinstance(pattern.pattern, bytes):
        return pattern.search(data) is not None  # type: ignore[arg-type]
    return pattern.search(data.decode(encoding, errors="replace")) is not None  # type: ignore[arg-type]


def find_all_matching(
    folder_path: PathLike,
    pattern: ContentPattern | None,
    *,
    first_only: bool = False,
    config: DiskConfig | None = None,
) -> list[DiskFile]:
    """Return the files of a subtree whose content matches ``pattern``.

    Files are read one after the other, in listing order. Text patterns are
    searched in the content decoded with ``config.encoding``; bytes patterns
    in the raw content. Without a pattern every file is returned.

    :param first_only: Stop after the first matching file.
    :raises NotFound: If the folder does not exist.
    """
    config = config or DEFAULT_CONFIG
    files: list[DiskFile] = list_all_files(folder_path, materialize=Materialize.DISK_FILE, config=config)  # type: ignore[assignment]
    if pattern is None:
        return files[:1] if first_only else files

    compiled = re.compile(pattern) if isinstance(pattern, (str, bytes)) else pattern
    found: list[DiskFile] = []
    for file in files:
        if _matches(file, compiled, config.encoding):
            found.append(file)
            if first_only:
                break
    return found


def find_first_matching(
    folder_path: PathLike,
    pattern: ContentPattern | None,
    *,
    config: DiskConfig | None = None,
) -> DiskFile | None:
    """Return the first file of a subtree whose content matches ``pattern``, or ``None``."""
    found = find_all_matching(folder_path, pattern, first_only=True, config=config)
    return found[0] if found else None

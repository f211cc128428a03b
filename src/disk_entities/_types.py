"""Type aliases used throughout disk_entities."""

from __future__ import annotations

import os  # noqa: TC003
import re
from collections.abc import Callable
from typing import BinaryIO, Union

PathLike = Union[str, "os.PathLike[str]"]  # noqa: UP007
Content = str | bytes | BinaryIO
NamePattern = str | re.Pattern[str] | Callable[[str], bool]
ContentPattern = str | bytes | re.Pattern[str] | re.Pattern[bytes]

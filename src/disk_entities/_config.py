"""Configuration model — immutable settings shared by entities and traversals."""

from __future__ import annotations

import codecs
import dataclasses

_TWO_GIB = 2 * 1024**3


@dataclasses.dataclass(frozen=True)
class DiskConfig:
    """Tunables for disk-backed entities.

    :param large_file_threshold: Size in bytes at or above which ``read()``
        hands out an open stream instead of loading the content.
    :param encoding: Encoding for text content and content search.
    :param strict: Raise ``NotFound`` / ``AlreadyExists`` from lifecycle
        operations instead of logging a notice.
    :param probe_attempts: Attempts for a filesystem probe failing with a
        transient OS error.
    :param probe_backoff: Multiplier (seconds) of the exponential retry wait.
    :param max_concurrent_probes: Upper bound on in-flight probes for one
        statistics aggregation.
    """

    large_file_threshold: int = _TWO_GIB
    encoding: str = "utf-8"
    strict: bool = False
    probe_attempts: int = 3
    probe_backoff: float = 0.05
    max_concurrent_probes: int = 64

    def validate(self) -> None:
        """Check value ranges.

        :raises ValueError: If a setting is out of range.
        """
        if self.large_file_threshold < 0:
            raise ValueError(f"large_file_threshold must be >= 0, got {self.large_file_threshold}")
        if self.probe_attempts < 1:
            raise ValueError(f"probe_attempts must be >= 1, got {self.probe_attempts}")
        if self.probe_backoff < 0:
            raise ValueError(f"probe_backoff must be >= 0, got {self.probe_backoff}")
        if self.max_concurrent_probes < 1:
            raise ValueError(f"max_concurrent_probes must be >= 1, got {self.max_concurrent_probes}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding!r}") from None

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> DiskConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        :param data: Mapping of field names to values.
        :raises TypeError: If ``data`` holds an unknown key.
        :raises ValueError: If a value is out of range.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown DiskConfig keys: {unknown}. Known keys: {sorted(known)}"
            raise TypeError(msg)
        config = cls(**data)  # type: ignore[arg-type]
        config.validate()
        return config


DEFAULT_CONFIG = DiskConfig()

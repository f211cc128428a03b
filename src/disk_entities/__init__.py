"""Folder and file entities with disk-backed operations."""

from disk_entities._config import DEFAULT_CONFIG, DiskConfig
from disk_entities._entity import File, Folder
from disk_entities._errors import (
    AlreadyExists,
    DiskEntityError,
    InvalidPath,
    IOFailure,
    NotFound,
    PermissionDenied,
)
from disk_entities._file import DiskFile
from disk_entities._folder import DiskFolder
from disk_entities._models import AggregateStats, ProbeResult
from disk_entities._probe import file_exists, folder_exists, list_children, probe, probe_async
from disk_entities._search import find_all_matching, find_first_matching
from disk_entities._stats import aggregate
from disk_entities._traversal import Materialize, list_all_files, list_files

__version__ = "0.1.0"

__all__ = [
    # Entities
    "Folder",
    "File",
    "DiskFolder",
    "DiskFile",
    # Models
    "AggregateStats",
    "ProbeResult",
    # Probes
    "folder_exists",
    "file_exists",
    "probe",
    "probe_async",
    "list_children",
    # Statistics, traversal & search
    "aggregate",
    "Materialize",
    "list_files",
    "list_all_files",
    "find_first_matching",
    "find_all_matching",
    # Config
    "DiskConfig",
    "DEFAULT_CONFIG",
    # Errors
    "DiskEntityError",
    "NotFound",
    "AlreadyExists",
    "InvalidPath",
    "IOFailure",
    "PermissionDenied",
    # Version
    "__version__",
]

"""Core types, validation and errors for tager."""

from tager.core.exceptions import (
    ConfigCorruptError,
    ConfigurationError,
    CycleError,
    DuplicateError,
    EmptyQueryError,
    FileReferenceNotFoundError,
    FilesystemError,
    InvalidNameError,
    NoCurrentTagError,
    NotFoundError,
    TagerError,
    TagNotFoundError,
)
from tager.core.models import (
    BatchResult,
    ChildTagEntry,
    DanglingReport,
    MountReport,
    RootState,
    TagNode,
)

__all__ = [
    "TagerError",
    "NotFoundError",
    "TagNotFoundError",
    "FileReferenceNotFoundError",
    "DuplicateError",
    "CycleError",
    "InvalidNameError",
    "NoCurrentTagError",
    "FilesystemError",
    "ConfigCorruptError",
    "EmptyQueryError",
    "ConfigurationError",
    "TagNode",
    "RootState",
    "ChildTagEntry",
    "BatchResult",
    "DanglingReport",
    "MountReport",
]

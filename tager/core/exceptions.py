"""Custom exceptions for tager with actionable solutions."""

from typing import List, Optional


class TagerError(Exception):
    """Base exception for all tager errors with actionable solutions."""

    error_code = "E000"  # Default error code, overridden by subclasses

    def __init__(self, message: str, solution: Optional[str] = None):
        """
        Initialize error with actionable guidance.

        Args:
            message: Error description
            solution: Suggested solution or next steps
        """
        self.message = message
        self.solution = solution

        full_message = f"[{self.error_code}] {message}"
        if solution:
            full_message += f"\n\n💡 Solution: {solution}"

        super().__init__(full_message)


class NotFoundError(TagerError):
    """Raised when a tag or file reference does not resolve."""

    error_code = "E001"


class TagNotFoundError(NotFoundError):
    """Raised when a tag name is not present in the store."""

    error_code = "E002"

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Tag '{name}' does not exist",
            solution=f"Create it first: tager create {name}",
        )


class FileReferenceNotFoundError(NotFoundError):
    """Raised when a file path does not exist or is not registered on a tag."""

    error_code = "E003"

    def __init__(self, path: str, tag: Optional[str] = None):
        self.path = path
        self.tag = tag
        if tag is None:
            super().__init__(f"No such file: {path}")
        else:
            super().__init__(f"File '{path}' is not registered on tag '{tag}'")


class DuplicateError(TagerError):
    """Raised when creating or adding something that is already present."""

    error_code = "E004"


class CycleError(TagerError):
    """Raised when a tag edge would close a cycle in the tag graph."""

    error_code = "E005"

    def __init__(self, path: List[str]):
        self.path = list(path)
        chain = " -> ".join(self.path)
        super().__init__(
            f"Adding this edge would create a cycle: {chain}",
            solution="Remove one of the existing edges on the chain, or pick another child tag",
        )


class InvalidNameError(TagerError):
    """Raised when a tag name uses a reserved character or reserved name."""

    error_code = "E006"

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid tag name '{name}': {reason}")


class NoCurrentTagError(TagerError):
    """Raised when '.' is used as a tag reference and no current tag is set."""

    error_code = "E007"

    def __init__(self):
        super().__init__(
            "'.' was used but no current tag is selected",
            solution="Select one with: tager ch TAG",
        )


class FilesystemError(TagerError):
    """Raised when a filesystem operation (stat, symlink, write) fails."""

    error_code = "E008"


class ConfigCorruptError(TagerError):
    """Raised when the persisted snapshot cannot be parsed."""

    error_code = "E009"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            f"Tag store {path} is corrupt: {reason}",
            solution=f"Fix or move away {path}; a fresh store is created on the next run",
        )


class EmptyQueryError(TagerError):
    """Raised when an AND-query is given no tag references."""

    error_code = "E010"

    def __init__(self):
        super().__init__("At least one tag is required for a file query")


class ConfigurationError(TagerError):
    """Raised when configuration is invalid."""

    error_code = "E011"

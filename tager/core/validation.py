"""Input validation for tag names and file references."""

import os

from tager.core.exceptions import InvalidNameError

# Alias resolved to the current tag, never usable as a real name.
CURRENT_TAG_ALIAS = "."

# Would escape the mount directory when used as a path component.
PARENT_DIR_NAME = ".."

PATH_SEPARATOR = "/"


def validate_tag_name(name: str) -> str:
    """
    Validate a tag name before it enters the store.

    Args:
        name: Proposed tag name

    Returns:
        The name, unchanged

    Raises:
        InvalidNameError: If the name is empty, reserved, or contains a separator
    """
    if not name:
        raise InvalidNameError(name, "tag names cannot be empty")
    if name == CURRENT_TAG_ALIAS:
        raise InvalidNameError(name, f"'{CURRENT_TAG_ALIAS}' is reserved for the current tag")
    if name == PARENT_DIR_NAME:
        raise InvalidNameError(name, f"'{PARENT_DIR_NAME}' is reserved by the filesystem")
    if PATH_SEPARATOR in name:
        raise InvalidNameError(name, f"'{PATH_SEPARATOR}' cannot be used in tag names")
    return name


def is_valid_tag_name(name: str) -> bool:
    try:
        validate_tag_name(name)
    except InvalidNameError:
        return False
    return True


def canonical_path(path: str) -> str:
    """Return the absolute, normalized form used as a file key."""
    return os.path.abspath(path)

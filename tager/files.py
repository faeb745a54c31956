"""Expansion of file arguments (glob patterns) for add/remove file."""

import glob
import os
from pathlib import PurePath
from typing import Iterable, List, Tuple

from tager.log_utils import get_logger

logger = get_logger(__name__)

# Directories never searched in recursive mode
EXCLUDED_DIRS = {
    ".git", ".hg", ".svn", ".venv", "venv", "__pycache__",
    "node_modules", ".pytest_cache", ".mypy_cache", ".tox",
}


def _is_excluded(path: str) -> bool:
    return any(part in EXCLUDED_DIRS for part in PurePath(path).parts[:-1])


def expand_patterns(
    patterns: Iterable[str], recursive: bool = False, base: str = "."
) -> List[Tuple[str, List[str]]]:
    """
    Expand glob patterns into file paths.

    A pattern that matches nothing expands to itself, so callers can still
    report it (add) or unregister an already deleted file (remove).

    Args:
        patterns: Glob patterns or plain paths
        recursive: Apply each pattern inside every directory below ``base``
        base: Root directory for recursive expansion

    Returns:
        List of (pattern, matches) in argument order
    """
    expanded = []
    for pattern in patterns:
        if recursive and not os.path.isabs(pattern):
            search = os.path.join(base, "**", pattern)
            matches = [
                os.path.normpath(m)
                for m in glob.glob(search, recursive=True)
                if not _is_excluded(m)
            ]
        elif os.path.exists(pattern):
            # Existing paths are taken literally, even with glob characters
            matches = [pattern]
        else:
            matches = glob.glob(pattern)

        matches = sorted(set(matches))
        if not matches:
            logger.debug(f"Pattern matched nothing, using it literally: {pattern}")
            matches = [pattern]
        expanded.append((pattern, matches))

    return expanded


def flatten(expanded: List[Tuple[str, List[str]]]) -> List[str]:
    """Flatten expansion results, keeping first occurrences."""
    return list(dict.fromkeys(path for _, matches in expanded for path in matches))

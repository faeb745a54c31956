"""JSON snapshot persistence for the tag graph."""

import json
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from tager.core.exceptions import ConfigCorruptError, FilesystemError
from tager.core.models import RootState
from tager.core.validation import is_valid_tag_name
from tager.log_utils import get_logger

logger = get_logger(__name__)


class SnapshotStore:
    """
    Reads and writes the whole tag graph as one JSON document.

    The file is read once per process and rewritten in full on save. There
    is no locking: concurrent writers race and the last one wins.
    """

    def __init__(self, path: Union[str, Path], indent: str = "\t"):
        """
        Initialize snapshot store.

        Args:
            path: Location of the snapshot file
            indent: Indentation used when writing
        """
        self.path = Path(path)
        self.indent = indent

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> RootState:
        """
        Load the snapshot, creating an empty one on first run.

        Returns:
            RootState parsed from disk

        Raises:
            ConfigCorruptError: If the file is not valid JSON or has the wrong shape
            FilesystemError: If the file cannot be read or created
        """
        if not self.path.exists():
            logger.info(f"No tag store at {self.path}, creating an empty one")
            state = RootState()
            self.save(state)
            return state

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise FilesystemError(f"Cannot read tag store {self.path}: {e}") from e

        if not raw.strip():
            logger.debug(f"Tag store {self.path} is empty")
            return RootState()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigCorruptError(str(self.path), f"invalid JSON ({e})") from e

        if not isinstance(data, dict):
            raise ConfigCorruptError(str(self.path), "top level must be an object")

        try:
            state = RootState.from_snapshot(data)
        except (ValueError, ValidationError) as e:
            raise ConfigCorruptError(str(self.path), str(e)) from e

        for name in state.tags:
            if not is_valid_tag_name(name):
                logger.warning_ctx(
                    "Invalid tag name in tag store; it can still be shown and deleted",
                    path=str(self.path),
                    tag=name,
                )

        logger.debug_ctx(
            "Loaded tag store",
            path=str(self.path),
            tags=len(state.tags),
            current=state.current,
        )
        return state

    def save(self, state: RootState) -> None:
        """
        Write the whole snapshot back to disk.

        Raises:
            FilesystemError: If the directory or file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(state.to_snapshot(), f, indent=self.indent, ensure_ascii=False)
                f.write("\n")
        except OSError as e:
            logger.error(f"Failed to save tag store {self.path}: {e}")
            raise FilesystemError(f"Cannot write tag store {self.path}: {e}") from e

        logger.info(f"Saved {len(state.tags)} tags to {self.path}")

"""Core data models for tager."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from tager.core.exceptions import InvalidNameError, TagerError
from tager.core.validation import validate_tag_name


class TagNode(BaseModel):
    """A named tag holding child-tag references, file references and a comment."""

    name: str
    comment: Optional[str] = None
    # Ordered sets: child name -> child name, absolute path -> display path
    child_tags: Dict[str, str] = Field(default_factory=dict)
    files: Dict[str, str] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str, info: ValidationInfo) -> str:
        """Reject reserved names and names containing the path separator.

        Snapshots are loaded with ``{"allow_invalid_names": True}`` as context
        so names rejected by `tager create` but present on disk stay readable.
        """
        if info.context and info.context.get("allow_invalid_names"):
            return v
        try:
            return validate_tag_name(v)
        except InvalidNameError as e:
            raise ValueError(e.reason) from e

    def to_snapshot(self) -> Dict[str, Any]:
        """Convert to the persisted snapshot layout (name is the parent key)."""
        data: Dict[str, Any] = {}
        if self.comment is not None:
            data["comment"] = self.comment
        data["tags"] = dict(self.child_tags)
        data["files"] = dict(self.files)
        return data

    @classmethod
    def from_snapshot(cls, name: str, data: Dict[str, Any]) -> "TagNode":
        """Create a TagNode from its snapshot entry, accepting any stored name."""
        return cls.model_validate(
            {
                "name": name,
                "comment": data.get("comment"),
                "child_tags": data.get("tags") or {},
                "files": data.get("files") or {},
            },
            context={"allow_invalid_names": True},
        )


class RootState(BaseModel):
    """The whole tag graph plus the current-tag pointer."""

    current: Optional[str] = None
    tags: Dict[str, TagNode] = Field(default_factory=dict)

    def to_snapshot(self) -> Dict[str, Any]:
        """Convert to the persisted snapshot document."""
        root: Dict[str, Any] = {}
        if self.current is not None:
            root["current"] = self.current
        root["tags"] = {name: node.to_snapshot() for name, node in self.tags.items()}
        return {"root": root}

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> "RootState":
        """Create a RootState from a snapshot document."""
        root = data.get("root") or {}
        if not isinstance(root, dict):
            raise ValueError("'root' must be an object")
        raw_tags = root.get("tags") or {}
        if not isinstance(raw_tags, dict):
            raise ValueError("'root.tags' must be an object")

        tags = {}
        for name, entry in raw_tags.items():
            if not isinstance(entry, dict):
                raise ValueError(f"tag '{name}' must be an object")
            tags[name] = TagNode.from_snapshot(name, entry)
        return cls(current=root.get("current"), tags=tags)

    def edge_count(self) -> int:
        """Total number of tag->tag edges."""
        return sum(len(node.child_tags) for node in self.tags.values())


@dataclass(frozen=True)
class ChildTagEntry:
    """
    A child tag reached from an origin tag.

    Attributes:
        name: Child tag name
        path: Slash-joined path from the origin to the child, origin included
    """
    name: str
    path: str

    @property
    def relative_path(self) -> str:
        """Path below the origin tag (origin stripped)."""
        return self.path.split("/", 1)[1] if "/" in self.path else ""


@dataclass
class BatchResult:
    """Outcome of a batch mutation: applied items and per-item errors."""

    applied: List[str] = field(default_factory=list)
    errors: List[Tuple[str, TagerError]] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.applied)


@dataclass
class DanglingReport:
    """
    Dangling edges found (or removed) per tag.

    Attributes:
        kind: "tag" or "file"
        dangling: Tag name -> dangling child names or file paths
        errors: Targets that could not be scanned
    """
    kind: str
    dangling: Dict[str, List[str]] = field(default_factory=dict)
    errors: List[Tuple[str, TagerError]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(len(items) for items in self.dangling.values())

    def is_empty(self) -> bool:
        return self.total == 0


@dataclass
class MountReport:
    """Directories and symlinks created by a mount, plus per-link failures."""

    root: str
    directories: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    errors: List[Tuple[str, str]] = field(default_factory=list)

"""Tag graph ownership: creation, deletion and edge mutation."""

import os
from typing import Iterable, List, Optional

from tager.core.exceptions import (
    DuplicateError,
    FileReferenceNotFoundError,
    NotFoundError,
    TagNotFoundError,
)
from tager.core.models import BatchResult, RootState, TagNode
from tager.core.validation import canonical_path, validate_tag_name
from tager.graph.cycle_guard import CycleGuard
from tager.graph.navigator import GraphNavigator
from tager.log_utils import get_logger
from tager.store.snapshot import SnapshotStore

logger = get_logger(__name__)


class TagStore:
    """
    Owns the in-memory tag graph.

    Features:
    - Create and delete tags
    - Add/remove child-tag edges (always checked by CycleGuard)
    - Add/remove file edges
    - Comments and the current-tag pointer
    - Persistence through an optional SnapshotStore
    """

    def __init__(self, state: RootState, persistence: Optional[SnapshotStore] = None):
        """
        Initialize tag store.

        Args:
            state: Graph state shared with the other components
            persistence: Snapshot writer; None keeps the store in memory only
        """
        self.state = state
        self.persistence = persistence
        self.navigator = GraphNavigator(state)
        self.cycle_guard = CycleGuard(state)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def exists(self, name: str) -> bool:
        return name in self.state.tags

    def get(self, name: str) -> TagNode:
        """
        Get a tag by exact name.

        Raises:
            TagNotFoundError: If the tag does not exist
        """
        try:
            return self.state.tags[name]
        except KeyError:
            raise TagNotFoundError(name) from None

    def names(self) -> List[str]:
        return list(self.state.tags)

    # ------------------------------------------------------------------
    # Tag lifecycle
    # ------------------------------------------------------------------

    def create(self, name: str) -> TagNode:
        """
        Create an empty tag.

        Raises:
            InvalidNameError: If the name is reserved or contains "/"
            DuplicateError: If the tag already exists (the existing tag is kept)
        """
        validate_tag_name(name)
        if name in self.state.tags:
            raise DuplicateError(f"Tag '{name}' already exists")

        node = TagNode(name=name)
        self.state.tags[name] = node
        logger.info_ctx("Created tag", tag=name)
        return node

    def delete(self, name: str) -> None:
        """
        Delete a tag.

        Edges in other tags that name it are left in place and become
        dangling until reconciled.

        Raises:
            TagNotFoundError: If the tag does not exist
        """
        if name not in self.state.tags:
            raise TagNotFoundError(name)
        del self.state.tags[name]
        logger.info_ctx("Deleted tag", tag=name)

    def set_comment(self, ref: str, comment: str) -> TagNode:
        node = self.navigator.resolve(ref)
        node.comment = comment
        logger.info_ctx("Set comment", tag=node.name)
        return node

    def set_current(self, ref: str) -> str:
        """
        Select the tag that "." refers to.

        Raises:
            TagNotFoundError: If the tag does not exist
        """
        name = self.navigator.resolve_name(ref)
        self.state.current = name
        logger.info_ctx("Changed current tag", tag=name)
        return name

    # ------------------------------------------------------------------
    # Child-tag edges
    # ------------------------------------------------------------------

    def add_child_tags(self, parent_ref: str, children: Iterable[str]) -> BatchResult:
        """
        Add child-tag edges to a tag.

        Every candidate edge is checked before any is committed, so a cycle
        anywhere in the batch leaves the graph unchanged. Missing child tags
        and existing edges are reported per item.

        Args:
            parent_ref: Tag gaining the children ("." allowed)
            children: Child tag references

        Returns:
            BatchResult with the added child names and per-item errors

        Raises:
            CycleError: If any edge would close a cycle
            NotFoundError: If the parent does not resolve
        """
        parent = self.navigator.resolve(parent_ref)
        result = BatchResult()
        pending: List[TagNode] = []

        for ref in children:
            try:
                child = self.navigator.resolve(ref)
            except NotFoundError as e:
                result.errors.append((ref, e))
                continue
            if child.name in parent.child_tags or any(p.name == child.name for p in pending):
                result.errors.append(
                    (ref, DuplicateError(f"Tag '{child.name}' is already a child of '{parent.name}'"))
                )
                continue
            self.cycle_guard.check_edge(parent, child)
            pending.append(child)

        for child in pending:
            parent.child_tags[child.name] = child.name
            result.applied.append(child.name)

        self._log_batch("Added child tags", parent.name, result)
        return result

    def add_child_tag(self, parent_ref: str, child_ref: str) -> None:
        """
        Add a single child-tag edge, raising instead of collecting errors.

        Raises:
            CycleError, DuplicateError, NotFoundError
        """
        result = self.add_child_tags(parent_ref, [child_ref])
        if result.errors:
            raise result.errors[0][1]

    def remove_child_tags(self, parent_ref: str, children: Iterable[str]) -> BatchResult:
        """
        Remove child-tag edges.

        Edges to deleted tags can be removed too; the child name is matched
        literally. Absent edges are reported per item.
        """
        parent = self.navigator.resolve(parent_ref)
        result = BatchResult()

        for name in children:
            if name not in parent.child_tags:
                result.errors.append(
                    (name, NotFoundError(f"Tag '{name}' is not a child of '{parent.name}'"))
                )
                continue
            del parent.child_tags[name]
            result.applied.append(name)

        self._log_batch("Removed child tags", parent.name, result)
        return result

    # ------------------------------------------------------------------
    # File edges
    # ------------------------------------------------------------------

    def add_files(self, tag_ref: str, paths: Iterable[str]) -> BatchResult:
        """
        Attach files to a tag.

        Each path must exist; it is stored under its absolute path with the
        path as given kept for display.

        Returns:
            BatchResult with the absolute paths added and per-item errors
        """
        node = self.navigator.resolve(tag_ref)
        result = BatchResult()

        for display in paths:
            if not os.path.exists(display):
                result.errors.append((display, FileReferenceNotFoundError(display)))
                continue
            full = canonical_path(display)
            if full in node.files:
                result.errors.append(
                    (display, DuplicateError(f"File '{display}' is already registered on '{node.name}'"))
                )
                continue
            node.files[full] = display
            result.applied.append(full)

        self._log_batch("Added files", node.name, result)
        return result

    def remove_files(self, tag_ref: str, paths: Iterable[str]) -> BatchResult:
        """
        Detach files from a tag.

        Paths need not exist anymore, so deleted files can be unregistered.
        """
        node = self.navigator.resolve(tag_ref)
        result = BatchResult()

        for display in paths:
            full = canonical_path(display)
            if full not in node.files:
                result.errors.append((display, FileReferenceNotFoundError(display, node.name)))
                continue
            del node.files[full]
            result.applied.append(full)

        self._log_batch("Removed files", node.name, result)
        return result

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Persist the whole graph (no-op for in-memory stores)."""
        if self.persistence is None:
            return
        self.persistence.save(self.state)

    def _log_batch(self, action: str, tag: str, result: BatchResult) -> None:
        if result.applied:
            logger.info_ctx(action, tag=tag, items=result.applied)
        for item, error in result.errors:
            logger.warning_ctx(f"{action}: skipped item", tag=tag, item=item, reason=error.message)


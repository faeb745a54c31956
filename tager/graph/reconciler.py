"""Detection and removal of dangling tag and file edges (autoremove)."""

import os
from typing import Callable, List, Optional, Sequence, Tuple

from tager.core.exceptions import NotFoundError
from tager.core.models import DanglingReport, TagNode
from tager.graph.closure import ClosureComputer, EdgeKind
from tager.graph.tag_store import TagStore
from tager.log_utils import get_logger

logger = get_logger(__name__)


class ConsistencyReconciler:
    """
    Finds edges that point at deleted tags or missing files.

    Only a tag's direct edges are scanned: a dangling edge two levels down
    is reported by its own tag's scan, not by an ancestor's. The execute
    variants remove exactly what the matching query reports, so running
    them twice in a row changes nothing the second time.
    """

    def __init__(
        self,
        store: TagStore,
        closure: ClosureComputer,
        file_exists: Callable[[str], bool] = os.path.exists,
    ):
        """
        Initialize reconciler.

        Args:
            store: Tag store to scan and mutate
            closure: Edge enumerator over the same graph
            file_exists: Existence check for file edges
        """
        self.store = store
        self.closure = closure
        self.file_exists = file_exists

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def dangling_tags(self, targets: Optional[Sequence[str]] = None) -> DanglingReport:
        """Report child-tag edges whose tag no longer exists."""
        return self._scan(
            EdgeKind.TAGS, targets, lambda name: not self.store.exists(name)
        )

    def dangling_files(self, targets: Optional[Sequence[str]] = None) -> DanglingReport:
        """Report file edges whose path no longer exists."""
        return self._scan(
            EdgeKind.FILES, targets, lambda path: not self.file_exists(path)
        )

    # ------------------------------------------------------------------
    # Execute
    # ------------------------------------------------------------------

    def remove_dangling_tags(self, targets: Optional[Sequence[str]] = None) -> DanglingReport:
        """Remove dangling child-tag edges and persist. Returns what was removed."""
        report = self.dangling_tags(targets)
        self._remove(report, lambda node, name: node.child_tags.pop(name, None))
        return report

    def remove_dangling_files(self, targets: Optional[Sequence[str]] = None) -> DanglingReport:
        """Remove dangling file edges and persist. Returns what was removed."""
        report = self.dangling_files(targets)
        self._remove(report, lambda node, path: node.files.pop(path, None))
        return report

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _targets(self, targets: Optional[Sequence[str]]) -> Tuple[List[TagNode], List]:
        if not targets:
            return list(self.store.state.tags.values()), []

        nodes: List[TagNode] = []
        errors = []
        for ref in targets:
            try:
                node = self.store.navigator.resolve(ref)
            except NotFoundError as e:
                errors.append((ref, e))
                continue
            if all(n.name != node.name for n in nodes):
                nodes.append(node)
        return nodes, errors

    def _scan(self, kind: EdgeKind, targets, is_dangling) -> DanglingReport:
        nodes, errors = self._targets(targets)
        label = "tag" if kind == EdgeKind.TAGS else "file"
        report = DanglingReport(kind=label, errors=errors)

        for node in nodes:
            dangling = [
                target
                for _, _, target in self.closure.edges(node, kind)
                if is_dangling(target)
            ]
            if dangling:
                report.dangling[node.name] = dangling

        return report

    def _remove(self, report: DanglingReport, detach) -> None:
        if report.is_empty():
            logger.debug_ctx("Nothing to autoremove", kind=report.kind)
            return

        for name, items in report.dangling.items():
            node = self.store.get(name)
            for item in items:
                detach(node, item)
            logger.info_ctx(f"Removed dangling {report.kind} edges", tag=name, items=items)

        self.store.save()

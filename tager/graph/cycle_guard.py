"""Cycle prevention for tag-to-tag edges."""

from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from tager.core.exceptions import CycleError
from tager.core.models import RootState, TagNode
from tager.log_utils import get_logger

logger = get_logger(__name__)


class NodeColor(str, Enum):
    """Node colors based on DFS state."""
    WHITE = "white"  # Not visited
    GRAY = "gray"    # Currently visiting (in recursion stack)
    BLACK = "black"  # Fully processed


class CycleGuard:
    """
    Validates tag edges before they are committed.

    Every operation that inserts a tag->tag edge must call
    :meth:`check_edge` first; a rejected edge leaves the graph untouched.
    """

    def __init__(self, state: RootState):
        self.state = state

    def check_edge(self, src: TagNode, dst: TagNode) -> None:
        """
        Check that adding ``src -> dst`` keeps the graph acyclic.

        Walks depth-first from ``dst`` along child-tag edges with an explicit
        visited set, so it terminates even if the stored graph already holds
        a cycle.

        Args:
            src: Tag that would gain the child edge
            dst: Tag that would become a child

        Raises:
            CycleError: If ``src`` is ``dst`` or is reachable from ``dst``
        """
        if src.name == dst.name:
            raise CycleError([src.name, src.name])

        path = self._find_path(dst.name, src.name)
        if path is not None:
            logger.warning_ctx("Rejected cyclic edge", parent=src.name, child=dst.name)
            raise CycleError([src.name] + path)

    def would_create_cycle(self, src: TagNode, dst: TagNode) -> bool:
        try:
            self.check_edge(src, dst)
        except CycleError:
            return True
        return False

    def _find_path(self, start: str, target: str) -> Optional[List[str]]:
        """Return the edge path from start to target, or None if unreachable."""
        parents: Dict[str, Optional[str]] = {start: None}
        stack = [start]

        while stack:
            name = stack.pop()
            if name == target:
                path = [name]
                while parents[path[-1]] is not None:
                    path.append(parents[path[-1]])
                return list(reversed(path))

            node = self.state.tags.get(name)
            if node is None:
                # Dangling reference, nothing to follow
                continue
            for child in reversed(list(node.child_tags)):
                if child not in parents:
                    parents[child] = name
                    stack.append(child)

        return None

    def find_cycles(self) -> List[List[str]]:
        """
        Find cycles already present in the stored graph.

        Uses the white-gray-black algorithm. A consistent store never holds
        one; a hand-edited snapshot might.

        Returns:
            List of cycles, each as names with the first repeated at the end
        """
        color: Dict[str, NodeColor] = {name: NodeColor.WHITE for name in self.state.tags}
        cycles: List[List[str]] = []

        for root in self.state.tags:
            if color[root] != NodeColor.WHITE:
                continue

            # Stack of (name, remaining children); path mirrors it
            color[root] = NodeColor.GRAY
            path: List[str] = [root]
            stack: List[Tuple[str, Iterator[str]]] = [(root, iter(self.state.tags[root].child_tags))]

            while stack:
                name, children = stack[-1]
                child = next(children, None)
                if child is None:
                    color[name] = NodeColor.BLACK
                    path.pop()
                    stack.pop()
                    continue
                if child not in color:
                    continue  # dangling
                if color[child] == NodeColor.WHITE:
                    color[child] = NodeColor.GRAY
                    path.append(child)
                    stack.append((child, iter(self.state.tags[child].child_tags)))
                elif color[child] == NodeColor.GRAY:
                    start = path.index(child)
                    cycles.append(path[start:] + [child])

        return cycles

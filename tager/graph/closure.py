"""Reachability over the tag graph: child tags and file closures."""

from enum import Enum
from typing import Iterator, Set, Tuple

from tager.core.models import ChildTagEntry, RootState, TagNode
from tager.graph.navigator import GraphNavigator


class EdgeKind(str, Enum):
    """Which outgoing edges of a tag to enumerate."""
    TAGS = "tags"
    FILES = "files"


class ClosureComputer:
    """
    Enumerates what a tag reaches, shallow or recursive.

    All recursive enumeration goes through :meth:`walk`, a depth-first
    pre-order traversal that visits each tag once. Every public method
    resolves its reference eagerly (so lookup errors surface on call) and
    returns a fresh lazy iterator.
    """

    def __init__(self, state: RootState, navigator: GraphNavigator):
        self.state = state
        self.navigator = navigator

    def walk(self, origin: TagNode) -> Iterator[Tuple[TagNode, str]]:
        """
        Yield every tag reachable from ``origin`` with its path.

        Args:
            origin: Starting tag (not yielded itself)

        Yields:
            (node, path) where path is slash-joined from the origin, e.g. "A/B/D"
        """
        return self._walk(origin)

    def _walk(self, origin: TagNode) -> Iterator[Tuple[TagNode, str]]:
        visited: Set[str] = {origin.name}
        stack = [(origin, origin.name)]

        while stack:
            node, path = stack.pop()
            if node is not origin:
                yield node, path
            children = []
            for name in node.child_tags:
                child = self.state.tags.get(name)
                if child is None or name in visited:
                    continue
                visited.add(name)
                children.append((child, f"{path}/{name}"))
            # Reversed so the first child is expanded first
            stack.extend(reversed(children))

    def edges(
        self, origin: TagNode, kind: EdgeKind, recursive: bool = False
    ) -> Iterator[Tuple[TagNode, str, str]]:
        """
        Yield outgoing edges of ``kind`` from origin and, optionally, its closure.

        Yields:
            (owner, owner_path, target) where target is a child tag name or a
            file's absolute path
        """
        return self._edges(origin, kind, recursive)

    def _edges(
        self, origin: TagNode, kind: EdgeKind, recursive: bool
    ) -> Iterator[Tuple[TagNode, str, str]]:
        owners = [(origin, origin.name)]
        if recursive:
            owners = _chain_first(owners[0], self._walk(origin))
        for owner, path in owners:
            targets = owner.child_tags if kind == EdgeKind.TAGS else owner.files
            for target in list(targets):
                yield owner, path, target

    def child_tags(self, ref: str, recursive: bool = False) -> Iterator[ChildTagEntry]:
        """
        Enumerate child tags of a tag.

        Non-recursive mode lists the direct child names as stored, dangling
        ones included. Recursive mode lists every reachable tag once.

        Raises:
            NotFoundError: If the tag does not exist
            NoCurrentTagError: If ref is "." and no current tag is set
        """
        origin = self.navigator.resolve(ref)
        if recursive:
            return (ChildTagEntry(node.name, path) for node, path in self._walk(origin))
        return (
            ChildTagEntry(target, f"{path}/{target}")
            for _, path, target in self._edges(origin, EdgeKind.TAGS, False)
        )

    def files(self, ref: str, recursive: bool = False) -> Iterator[str]:
        """
        Enumerate absolute file paths attached to a tag.

        Recursive mode adds the files of every reachable tag; the same path
        may appear more than once.

        Raises:
            NotFoundError: If the tag does not exist
            NoCurrentTagError: If ref is "." and no current tag is set
        """
        origin = self.navigator.resolve(ref)
        return (target for _, _, target in self._edges(origin, EdgeKind.FILES, recursive))


def _chain_first(first, rest):
    yield first
    yield from rest

"""AND-queries over the file closures of several tags."""

from typing import Iterable, List, Sequence

from tager.core.exceptions import EmptyQueryError
from tager.graph.closure import ClosureComputer
from tager.graph.navigator import GraphNavigator
from tager.log_utils import get_logger

logger = get_logger(__name__)


def intersect_ordered(accumulator: List[str], other: Iterable[str]) -> List[str]:
    """Keep the accumulator's elements that also occur in ``other``, in accumulator order."""
    present = set(other)
    return [item for item in accumulator if item in present]


def unique_ordered(items: Iterable[str]) -> List[str]:
    """Deduplicate, keeping first occurrences."""
    return list(dict.fromkeys(items))


class SetQueryEngine:
    """Computes the files shared by every tag in a query."""

    def __init__(self, navigator: GraphNavigator, closure: ClosureComputer):
        self.navigator = navigator
        self.closure = closure

    def intersect_files(self, tag_refs: Sequence[str], recursive: bool = False) -> List[str]:
        """
        Return the files reachable from every tag in ``tag_refs``.

        The result follows the first tag's order, narrowed by each following
        tag in turn, then deduplicated.

        Args:
            tag_refs: Tag references ("." allowed)
            recursive: Use recursive file closures

        Raises:
            EmptyQueryError: If no references are given
            NotFoundError: On the first reference that does not resolve
        """
        if not tag_refs:
            raise EmptyQueryError()

        # Resolve everything before computing anything
        names = [self.navigator.resolve_name(ref) for ref in tag_refs]
        file_lists = [list(self.closure.files(name, recursive)) for name in names]

        result = list(file_lists[0])
        for files in file_lists[1:]:
            result = intersect_ordered(result, files)
        result = unique_ordered(result)

        logger.debug_ctx("File query", tags=names, recursive=recursive, matches=len(result))
        return result

"""Tag reference resolution, including the current-tag alias."""

from tager.core.exceptions import NoCurrentTagError, TagNotFoundError
from tager.core.models import RootState, TagNode
from tager.core.validation import CURRENT_TAG_ALIAS


class GraphNavigator:
    """
    Resolves tag references to nodes.

    This is the only place the "." alias is interpreted; every other
    component receives real tag names or nodes.
    """

    def __init__(self, state: RootState):
        self.state = state

    def resolve_name(self, ref: str) -> str:
        """
        Resolve a reference to an existing tag name.

        Raises:
            NoCurrentTagError: If ref is "." and no current tag is set
            TagNotFoundError: If the tag does not exist
        """
        name = ref
        if ref == CURRENT_TAG_ALIAS:
            if self.state.current is None:
                raise NoCurrentTagError()
            name = self.state.current
        if name not in self.state.tags:
            raise TagNotFoundError(name)
        return name

    def resolve(self, ref: str) -> TagNode:
        """Resolve a reference to its TagNode."""
        return self.state.tags[self.resolve_name(ref)]

    def exists(self, ref: str) -> bool:
        try:
            self.resolve_name(ref)
        except (NoCurrentTagError, TagNotFoundError):
            return False
        return True

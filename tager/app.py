"""Per-process context wiring every component around one graph state."""

from pathlib import Path
from typing import Optional, Union

from tager.config import TagerConfig, get_config
from tager.core.models import RootState
from tager.graph.closure import ClosureComputer
from tager.graph.query import SetQueryEngine
from tager.graph.reconciler import ConsistencyReconciler
from tager.graph.tag_store import TagStore
from tager.mount import SymlinkMounter
from tager.store.snapshot import SnapshotStore


class TagerApp:
    """
    Holds the graph state and the services built over it.

    One instance per process; commands receive it explicitly instead of
    reaching for module-level state.
    """

    def __init__(
        self,
        state: RootState,
        persistence: Optional[SnapshotStore] = None,
        config: Optional[TagerConfig] = None,
    ):
        self.config = config or get_config()
        self.state = state
        self.store = TagStore(state, persistence)
        self.navigator = self.store.navigator
        self.cycle_guard = self.store.cycle_guard
        self.closure = ClosureComputer(state, self.navigator)
        self.query = SetQueryEngine(self.navigator, self.closure)
        self.reconciler = ConsistencyReconciler(self.store, self.closure)
        self.mounter = SymlinkMounter(
            self.navigator,
            self.closure,
            prefix=self.config.mount_prefix,
            separator=self.config.mount_separator,
        )

    @classmethod
    def open(
        cls,
        config: Optional[TagerConfig] = None,
        store_path: Optional[Union[str, Path]] = None,
    ) -> "TagerApp":
        """
        Load the snapshot and build the app.

        Args:
            config: Settings (defaults to the global config)
            store_path: Overrides ``config.store_path``

        Raises:
            ConfigCorruptError: If the snapshot cannot be parsed
        """
        config = config or get_config()
        path = Path(store_path) if store_path else config.store_path_expanded
        persistence = SnapshotStore(path)
        return cls(persistence.load(), persistence, config)

    def save(self) -> None:
        self.store.save()

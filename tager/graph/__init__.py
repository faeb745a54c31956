"""Tag graph engine: storage, navigation, cycle checks, closures and queries."""

from tager.graph.navigator import GraphNavigator
from tager.graph.cycle_guard import CycleGuard, NodeColor
from tager.graph.closure import ClosureComputer, EdgeKind
from tager.graph.query import SetQueryEngine
from tager.graph.tag_store import TagStore
from tager.graph.reconciler import ConsistencyReconciler

__all__ = [
    "GraphNavigator",
    "CycleGuard",
    "NodeColor",
    "ClosureComputer",
    "EdgeKind",
    "SetQueryEngine",
    "TagStore",
    "ConsistencyReconciler",
]

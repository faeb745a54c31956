"""Tests for child-tag and file closures."""

import types

import pytest

from tager.core.exceptions import NoCurrentTagError, TagNotFoundError
from tager.graph.closure import ClosureComputer, EdgeKind
from tager.graph.navigator import GraphNavigator


def make_closure(state):
    return ClosureComputer(state, GraphNavigator(state))


@pytest.fixture
def diamond(graph):
    return graph(
        {"A": ["B", "C"], "B": ["D"], "C": ["D"], "D": []},
        files={"A": ["/a"], "B": ["/b", "/shared"], "C": ["/c", "/shared"], "D": ["/d"]},
    )


class TestChildTags:
    """Tests for ClosureComputer.child_tags."""

    def test_direct_children(self, diamond):
        entries = list(make_closure(diamond).child_tags("A"))
        assert [e.name for e in entries] == ["B", "C"]
        assert [e.path for e in entries] == ["A/B", "A/C"]

    def test_diamond_recursive_visits_each_once(self, diamond):
        entries = list(make_closure(diamond).child_tags("A", recursive=True))
        assert [e.name for e in entries] == ["B", "D", "C"]
        assert [e.path for e in entries] == ["A/B", "A/B/D", "A/C"]

    def test_direct_children_include_dangling(self, graph):
        state = graph({"A": ["gone", "B"], "B": []})
        assert [e.name for e in make_closure(state).child_tags("A")] == ["gone", "B"]

    def test_recursive_skips_dangling(self, graph):
        state = graph({"A": ["gone", "B"], "B": []})
        assert [e.name for e in make_closure(state).child_tags("A", recursive=True)] == ["B"]

    def test_terminates_on_stored_cycle(self, graph):
        state = graph({"A": ["B"], "B": ["A"]})
        assert [e.name for e in make_closure(state).child_tags("A", recursive=True)] == ["B"]

    def test_missing_tag_raises_on_call(self, graph):
        closure = make_closure(graph({"A": []}))
        with pytest.raises(TagNotFoundError):
            closure.child_tags("missing")

    def test_alias_without_current_raises_on_call(self, graph):
        closure = make_closure(graph({"A": []}))
        with pytest.raises(NoCurrentTagError):
            closure.child_tags(".")

    def test_returns_lazy_iterator(self, diamond):
        result = make_closure(diamond).child_tags("A", recursive=True)
        assert isinstance(result, types.GeneratorType)


class TestFiles:
    """Tests for ClosureComputer.files."""

    def test_direct_files(self, diamond):
        assert list(make_closure(diamond).files("B")) == ["/b", "/shared"]

    def test_recursive_files_may_repeat(self, diamond):
        files = list(make_closure(diamond).files("A", recursive=True))
        assert files == ["/a", "/b", "/shared", "/d", "/c", "/shared"]

    def test_current_alias(self, graph):
        state = graph({"A": []}, files={"A": ["/x"]}, current="A")
        assert list(make_closure(state).files(".")) == ["/x"]


class TestWalkAndEdges:
    """Tests for the shared traversal primitive."""

    def test_walk_excludes_origin(self, diamond):
        walked = [(node.name, path) for node, path in make_closure(diamond).walk(diamond.tags["A"])]
        assert walked == [("B", "A/B"), ("D", "A/B/D"), ("C", "A/C")]

    def test_walk_of_leaf_is_empty(self, diamond):
        assert list(make_closure(diamond).walk(diamond.tags["D"])) == []

    def test_edges_report_owner(self, diamond):
        edges = [
            (owner.name, path, target)
            for owner, path, target in make_closure(diamond).edges(
                diamond.tags["B"], EdgeKind.TAGS, recursive=True
            )
        ]
        assert edges == [("B", "B", "D")]

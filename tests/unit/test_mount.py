"""Tests for the symlink mount."""

import os

import pytest

from tager.core.exceptions import FilesystemError, TagNotFoundError
from tager.core.models import RootState
from tager.graph.closure import ClosureComputer
from tager.graph.navigator import GraphNavigator
from tager.mount import SymlinkMounter


def make_mounter(state, **kwargs):
    navigator = GraphNavigator(state)
    return SymlinkMounter(navigator, ClosureComputer(state, navigator), **kwargs)


@pytest.fixture
def destination(tmp_path):
    path = tmp_path / "mnt"
    path.mkdir()
    return path


@pytest.mark.parametrize(
    "separator,expected",
    [("-", "-home-u-a.txt"), ("_", "_home_u_a.txt")],
    ids=["dash", "underscore"],
)
def test_link_name_replaces_separators(separator, expected):
    mounter = make_mounter(RootState(), separator=separator)
    assert mounter.link_name("/home/u/a.txt") == expected


def test_mount_single_tag(graph, destination):
    state = graph({"A": []}, files={"A": ["/x/one.txt", "/x/two.txt"]})

    report = make_mounter(state).mount("A", destination=destination)

    root = destination / "tager-A"
    assert report.root == str(root)
    assert sorted(os.listdir(root)) == ["-x-one.txt", "-x-two.txt"]
    assert os.readlink(root / "-x-one.txt") == "/x/one.txt"
    assert report.errors == []


def test_recursive_mount_builds_tree(graph, destination):
    # Targets do not exist: links are created anyway
    state = graph({"A": ["B"], "B": []}, files={"A": ["/data/a.txt"], "B": ["/data/b.txt"]})

    report = make_mounter(state).mount("A", recursive=True, destination=destination)

    root = destination / "tager-A"
    assert report.directories == [str(root), str(root / "B")]
    assert os.path.islink(root / "-data-a.txt")
    assert os.path.islink(root / "B" / "-data-b.txt")
    assert not os.path.exists(root / "B" / "-data-b.txt")
    assert len(report.links) == 2


def test_recursive_mount_of_diamond(graph, destination):
    state = graph({"A": ["B", "C"], "B": ["D"], "C": ["D"], "D": []}, files={"D": ["/d"]})

    report = make_mounter(state).mount("A", recursive=True, destination=destination)

    root = destination / "tager-A"
    assert os.path.islink(root / "B" / "D" / "-d")
    assert not (root / "C" / "D").exists()
    assert report.links == [str(root / "B" / "D" / "-d")]


def test_non_recursive_ignores_children(graph, destination):
    state = graph({"A": ["B"], "B": []}, files={"B": ["/b"]})

    make_mounter(state).mount("A", destination=destination)

    assert os.listdir(destination / "tager-A") == []


def test_custom_prefix(graph, destination):
    state = graph({"A": []})
    report = make_mounter(state, prefix="m.").mount("A", destination=destination)
    assert report.root == str(destination / "m.A")


def test_existing_mount_directory_fails(graph, destination):
    state = graph({"A": []})
    (destination / "tager-A").mkdir()

    with pytest.raises(FilesystemError):
        make_mounter(state).mount("A", destination=destination)


def test_link_collision_collected(graph, destination):
    state = graph({"A": []}, files={"A": ["/x/a-b", "/x-a/b"]})

    report = make_mounter(state).mount("A", destination=destination)

    assert len(report.links) == 1
    assert [link for link, _ in report.errors] == [str(destination / "tager-A" / "-x-a-b")]


def test_unknown_tag(graph, destination):
    with pytest.raises(TagNotFoundError):
        make_mounter(graph({"A": []})).mount("nope", destination=destination)
    assert os.listdir(destination) == []


def test_recursive_mount_stays_inside_mount_directory(destination):
    # ".." can only come from a store file edited by hand
    state = RootState.from_snapshot(
        {
            "root": {
                "tags": {
                    "A": {"tags": {"..": ".."}, "files": {}},
                    "..": {"tags": {"X": "X"}, "files": {"/up": "/up"}},
                    "X": {"tags": {}, "files": {"/x": "/x"}},
                }
            }
        }
    )

    report = make_mounter(state).mount("A", recursive=True, destination=destination)

    assert os.listdir(destination) == ["tager-A"]
    assert os.listdir(destination / "tager-A") == []
    refused = [link for link, _ in report.errors]
    assert refused == [str(destination / "tager-A" / ".."), str(destination / "tager-A" / ".." / "X")]
    assert report.links == []

"""CLI commands that attach or detach data: add and remove."""

from typing import Tuple

import click

from tager.cli.output import report_batch, success
from tager.files import expand_patterns, flatten


@click.group(name="add")
def add_cli():
    """Register data on a tag."""
    pass


@add_cli.command(name="tag")
@click.argument("tag")
@click.argument("children", nargs=-1, required=True)
@click.pass_obj
def add_tags(state, tag: str, children: Tuple[str, ...]):
    """Add CHILDREN as child tags of TAG.

    Both TAG and every child must already exist. If any child would create
    a cycle, nothing is added.
    """
    app = state.app
    result = app.store.add_child_tags(tag, children)
    report_batch(result, "Added", app.navigator.resolve_name(tag))
    if result.changed:
        app.save()


@add_cli.command(name="file")
@click.option("-r", "--recursive", is_flag=True, help="Match patterns in every subdirectory")
@click.argument("tag")
@click.argument("patterns", nargs=-1, required=True)
@click.pass_obj
def add_files(state, recursive: bool, tag: str, patterns: Tuple[str, ...]):
    """Add files matching PATTERNS to TAG."""
    app = state.app
    # Resolve first so a bad tag fails before touching the filesystem
    name = app.navigator.resolve_name(tag)
    paths = flatten(expand_patterns(patterns, recursive=recursive))
    result = app.store.add_files(name, paths)
    report_batch(result, "Added", name)
    if result.changed:
        app.save()


@add_cli.command(name="comment")
@click.argument("tag")
@click.argument("words", nargs=-1, required=True)
@click.pass_obj
def add_comment(state, tag: str, words: Tuple[str, ...]):
    """Set the comment of TAG (words are joined with spaces)."""
    app = state.app
    node = app.store.set_comment(tag, " ".join(words))
    app.save()
    success(f"Comment set on '{node.name}'")


@click.group(name="remove")
def remove_cli():
    """Unregister data from a tag.

    Data that is not registered is ignored with a warning.
    """
    pass


@remove_cli.command(name="tag")
@click.argument("tag")
@click.argument("children", nargs=-1, required=True)
@click.pass_obj
def remove_tags(state, tag: str, children: Tuple[str, ...]):
    """Remove CHILDREN from the child tags of TAG."""
    app = state.app
    result = app.store.remove_child_tags(tag, children)
    report_batch(result, "Removed", app.navigator.resolve_name(tag))
    if result.changed:
        app.save()


@remove_cli.command(name="file")
@click.option("-r", "--recursive", is_flag=True, help="Match patterns in every subdirectory")
@click.argument("tag")
@click.argument("patterns", nargs=-1, required=True)
@click.pass_obj
def remove_files(state, recursive: bool, tag: str, patterns: Tuple[str, ...]):
    """Remove files matching PATTERNS from TAG.

    Files that were deleted from disk can still be removed by path.
    """
    app = state.app
    name = app.navigator.resolve_name(tag)
    paths = flatten(expand_patterns(patterns, recursive=recursive))
    result = app.store.remove_files(name, paths)
    report_batch(result, "Removed", name)
    if result.changed:
        app.save()

"""CLI commands for listing tag contents."""

from typing import Tuple

import click

from tager.cli.output import echo_lines

RECURSIVE_HELP = "Follow child tags recursively"


@click.group(name="show")
def show_cli():
    """Show the contents of a tag."""
    pass


def _tag_lines(app, tag: str, recursive: bool):
    for entry in app.closure.child_tags(tag, recursive):
        label = entry.path if recursive else entry.name
        node = app.state.tags.get(entry.name)
        if node is not None and node.comment:
            yield f"{label} : {node.comment}"
        else:
            yield label


@show_cli.command(name="tag")
@click.option("-r", "--recursive", is_flag=True, help=RECURSIVE_HELP)
@click.argument("tag", default=".")
@click.pass_obj
def show_tags(state, recursive: bool, tag: str):
    """List the child tags of TAG."""
    echo_lines(_tag_lines(state.app, tag, recursive))


@show_cli.command(name="file")
@click.option("-r", "--recursive", is_flag=True, help=RECURSIVE_HELP)
@click.argument("tags", nargs=-1)
@click.pass_obj
def show_files(state, recursive: bool, tags: Tuple[str, ...]):
    """List the files of TAG; with several tags, only files they all share."""
    echo_lines(state.app.query.intersect_files(list(tags) or ["."], recursive))


@show_cli.command(name="comment")
@click.argument("tag", default=".")
@click.pass_obj
def show_comment(state, tag: str):
    """Show the comment of TAG."""
    node = state.app.navigator.resolve(tag)
    if node.comment:
        click.echo(node.comment)


@show_cli.command(name="all")
@click.option("-r", "--recursive", is_flag=True, help=RECURSIVE_HELP)
@click.argument("tag", default=".")
@click.pass_obj
def show_all(state, recursive: bool, tag: str):
    """Show the comment, child tags and files of TAG."""
    app = state.app
    node = app.navigator.resolve(tag)

    if node.comment:
        click.echo(node.comment)
    click.echo()
    click.echo("tags:")
    echo_lines(_tag_lines(app, node.name, recursive))
    click.echo()
    click.echo("files:")
    echo_lines(app.query.intersect_files([node.name], recursive))

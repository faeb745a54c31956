"""CLI commands for store health and export: autoremove, info, mount."""

from typing import Tuple

import click
from rich.markup import escape
from rich.table import Table

from tager.cli.output import console, report_dangling, report_item_errors, warn


@click.group(name="autoremove")
def autoremove_cli():
    """Remove references to deleted tags or missing files.

    Without TAG arguments every tag is processed.
    """
    pass


@autoremove_cli.command(name="tag")
@click.argument("tags", nargs=-1)
@click.pass_obj
def autoremove_tags(state, tags: Tuple[str, ...]):
    """Remove child-tag references to tags that no longer exist."""
    report_dangling(state.app.reconciler.remove_dangling_tags(list(tags)), removed=True)


@autoremove_cli.command(name="file")
@click.argument("tags", nargs=-1)
@click.pass_obj
def autoremove_files(state, tags: Tuple[str, ...]):
    """Remove file references whose files no longer exist."""
    report_dangling(state.app.reconciler.remove_dangling_files(list(tags)), removed=True)


@autoremove_cli.command(name="all")
@click.argument("tags", nargs=-1)
@click.pass_obj
def autoremove_all(state, tags: Tuple[str, ...]):
    """Remove both dangling tag and file references."""
    reconciler = state.app.reconciler
    report_dangling(reconciler.remove_dangling_tags(list(tags)), removed=True)
    report_dangling(reconciler.remove_dangling_files(list(tags)), removed=True)


@click.command(name="info")
@click.argument("tag", required=False)
@click.pass_obj
def info_command(state, tag):
    """Show the current tag and broken references.

    With TAG, list the broken references of that tag.
    """
    app = state.app
    reconciler = app.reconciler

    if tag is not None:
        name = app.navigator.resolve_name(tag)
        report_dangling(reconciler.dangling_tags([name]), removed=False)
        report_dangling(reconciler.dangling_files([name]), removed=False)
        console.print()
        console.print(f"Fix with: tager autoremove all {escape(name)}", highlight=False)
        return

    console.print(f"current tag: {escape(app.state.current or '(none)')}", highlight=False)

    dangling_tags = reconciler.dangling_tags()
    dangling_files = reconciler.dangling_files()
    report_item_errors(dangling_tags.errors + dangling_files.errors)

    broken = sorted(set(dangling_tags.dangling) | set(dangling_files.dangling))
    if broken:
        table = Table(title="Broken references")
        table.add_column("Tag", style="cyan")
        table.add_column("Tags", style="magenta", justify="right")
        table.add_column("Files", style="magenta", justify="right")
        for name in broken:
            table.add_row(
                escape(name),
                str(len(dangling_tags.dangling.get(name, []))),
                str(len(dangling_files.dangling.get(name, []))),
            )
        console.print()
        console.print(table)
        console.print("\nDetails: tager info TAG")
    else:
        console.print("[green]No broken references[/green]")

    for cycle in app.cycle_guard.find_cycles():
        console.print(f"[red]Cycle in stored graph: {escape(' -> '.join(cycle))}[/red]")

    console.print(f"\n[green]Total: {len(app.state.tags)} tags[/green]")


@click.command(name="mount")
@click.option("-r", "--recursive", is_flag=True, help="Mount child tags as subdirectories")
@click.argument("tag")
@click.pass_obj
def mount_command(state, recursive: bool, tag: str):
    """Create a directory of symlinks to the files of TAG.

    The directory is created in the current directory as tager-TAG.
    """
    report = state.app.mounter.mount(tag, recursive=recursive)
    for link, reason in report.errors:
        warn(f"{link}: {reason}")
    click.echo(report.root)

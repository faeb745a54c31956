"""CLI commands for tag lifecycle: create, delete, ch."""

from typing import Tuple

import click

from tager.cli.output import report_item_errors, success
from tager.core.exceptions import TagerError


@click.command(name="create")
@click.argument("tags", nargs=-1, required=True)
@click.pass_obj
def create_command(state, tags: Tuple[str, ...]):
    """Create new tags."""
    app = state.app
    created = []
    errors = []

    for name in tags:
        try:
            app.store.create(name)
        except TagerError as e:
            errors.append((name, e))
            continue
        created.append(name)

    report_item_errors(errors)
    if created:
        app.save()
        success(f"Created {', '.join(created)}")


@click.command(name="delete")
@click.argument("tags", nargs=-1, required=True)
@click.pass_obj
def delete_command(state, tags: Tuple[str, ...]):
    """Delete tags completely.

    Other tags that reference a deleted tag keep the reference until
    `tager autoremove tag` is run.
    """
    app = state.app
    deleted = []
    errors = []

    for name in tags:
        try:
            app.store.delete(name)
        except TagerError as e:
            errors.append((name, e))
            continue
        deleted.append(name)

    report_item_errors(errors)
    if deleted:
        app.save()
        success(f"Deleted {', '.join(deleted)}")


@click.command(name="ch")
@click.argument("tag")
@click.pass_obj
def ch_command(state, tag: str):
    """Change the current tag (what "." refers to)."""
    app = state.app
    name = app.store.set_current(tag)
    app.save()
    success(f"Current tag is now '{name}'")

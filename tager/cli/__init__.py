"""Command-line interface for tager."""

from typing import Optional

import click
from pydantic import ValidationError

from tager import __version__
from tager.app import TagerApp
from tager.cli.edit_command import add_cli, remove_cli
from tager.cli.maintenance_command import autoremove_cli, info_command, mount_command
from tager.cli.output import error
from tager.cli.show_command import show_cli
from tager.cli.tags_command import ch_command, create_command, delete_command
from tager.config import TagerConfig, get_config
from tager.core.exceptions import ConfigurationError, TagerError
from tager.log_utils import configure_logging, get_logger

logger = get_logger(__name__)


class CliState:
    """Objects shared by every command of one invocation."""

    def __init__(self, config: TagerConfig, store_path: Optional[str] = None):
        self.config = config
        self.store_path = store_path
        self._app: Optional[TagerApp] = None

    @property
    def app(self) -> TagerApp:
        # Loaded on first use so `tager --help` never touches the store
        if self._app is None:
            self._app = TagerApp.open(self.config, self.store_path)
        return self._app


class TagerGroup(click.Group):
    """Root group turning tager errors into a message and exit status 1."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except TagerError as e:
            logger.debug_ctx("Command failed", error_code=e.error_code, error=e.message)
            error(str(e))
            ctx.exit(1)


def _load_config() -> TagerConfig:
    try:
        return get_config()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid settings: {e}",
            solution="Check the TAGER_* environment variables and ~/.tager/settings.json",
        ) from e


@click.group(cls=TagerGroup)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Set logging level (default: from settings, WARNING)",
)
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Tag store file (default: ~/.tager/config.json)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], store_path: Optional[str]):
    """tager - organize files with nestable tags.

    "." refers to the current tag, set with `tager ch TAG`.
    """
    config = _load_config()
    configure_logging(
        use_json=config.json_logging,
        level=log_level or config.log_level,
        log_file=config.log_file_expanded,
    )
    ctx.obj = CliState(config, store_path)


@cli.command(name="version")
def version_command():
    """Show the tager version."""
    click.echo(f"tager {__version__}")


cli.add_command(create_command)
cli.add_command(delete_command)
cli.add_command(ch_command)
cli.add_command(add_cli)
cli.add_command(remove_cli)
cli.add_command(show_cli)
cli.add_command(autoremove_cli)
cli.add_command(info_command)
cli.add_command(mount_command)


def main():
    """Main entry point."""
    cli(prog_name="tager")

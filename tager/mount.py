"""Symlink farm ("mount") mirroring a tag's file closure."""

import os
from pathlib import Path
from typing import Union

from tager.core.exceptions import FilesystemError
from tager.core.models import MountReport, TagNode
from tager.graph.closure import ClosureComputer
from tager.graph.navigator import GraphNavigator
from tager.log_utils import get_logger

logger = get_logger(__name__)


class SymlinkMounter:
    """
    Builds a directory of symlinks for a tag.

    Layout for ``mount -r A`` where A -> B -> C::

        tager-A/<links to A's files>
        tager-A/B/<links to B's files>
        tager-A/B/C/<links to C's files>

    Link names are the target's absolute path with "/" replaced by the
    separator character. Targets are not checked for existence.
    Tag directories that would resolve outside the mount directory are
    refused and reported.
    """

    def __init__(
        self,
        navigator: GraphNavigator,
        closure: ClosureComputer,
        prefix: str = "tager-",
        separator: str = "-",
    ):
        self.navigator = navigator
        self.closure = closure
        self.prefix = prefix
        self.separator = separator

    def link_name(self, target: str) -> str:
        return target.replace("/", self.separator)

    def mount(
        self, ref: str, recursive: bool = False, destination: Union[str, Path] = "."
    ) -> MountReport:
        """
        Create the mount directory for a tag.

        Args:
            ref: Tag reference ("." allowed)
            recursive: Also mount every reachable child tag as a subdirectory
            destination: Directory in which ``<prefix><tag>`` is created

        Returns:
            MountReport listing created directories and links, plus per-link failures

        Raises:
            NotFoundError: If the tag does not exist
            FilesystemError: If the mount directory cannot be created
        """
        origin = self.navigator.resolve(ref)
        root = Path(destination) / f"{self.prefix}{origin.name}"

        try:
            root.mkdir()
        except OSError as e:
            raise FilesystemError(f"Cannot create mount directory {root}: {e}") from e

        resolved_root = root.resolve()
        report = MountReport(root=str(root))
        report.directories.append(str(root))
        self._link_files(origin, root, report)

        if recursive:
            for node, path in self.closure.walk(origin):
                directory = root / path.split("/", 1)[1]
                if not directory.resolve().is_relative_to(resolved_root):
                    reason = "directory would be outside the mount directory"
                    report.errors.append((str(directory), reason))
                    logger.warning_ctx("Refused tag directory", tag=node.name, directory=str(directory))
                    continue
                try:
                    directory.mkdir()
                except OSError as e:
                    report.errors.append((str(directory), str(e)))
                    logger.warning_ctx("Cannot create tag directory", tag=node.name, error=str(e))
                    continue
                report.directories.append(str(directory))
                self._link_files(node, directory, report)

        logger.info_ctx(
            "Mounted tag",
            tag=origin.name,
            root=str(root),
            directories=len(report.directories),
            links=len(report.links),
        )
        return report

    def _link_files(self, node: TagNode, directory: Path, report: MountReport) -> None:
        for target in node.files:
            link = directory / self.link_name(target)
            try:
                os.symlink(target, link)
            except OSError as e:
                report.errors.append((str(link), str(e)))
                logger.warning_ctx("Cannot create symlink", tag=node.name, target=target, error=str(e))
                continue
            report.links.append(str(link))

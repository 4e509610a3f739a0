from typing import List

from core.contracts.collector import Collector
from core.contracts.models import GitChange
from core.contracts.vcs import VersionControl
from core.lockfiles import is_lockfile, normalize_path
from core.modes import ChangeMode
from core.status_parser import to_change_status
from utils.errors import CollectorError, GitCommandError
from utils.logger import logger


def split_status_lines(output: str) -> List[str]:
    """
    Splits status output into non-blank lines, keeping leading columns intact.

    Only ``\\n`` ends a record; other line-break characters can appear in
    unquoted file names.
    """
    lines = (line.rstrip() for line in output.split("\n"))
    return [line for line in lines if line.strip()]


class ChangeCollector(Collector[List[GitChange]]):
    """
    A collector that lists the changed files of one mode (staged or unstaged).
    """

    def __init__(self, vcs: VersionControl, mode: ChangeMode, exclude_lockfiles: bool = True):
        self.vcs = vcs
        self.mode = mode
        self.exclude_lockfiles = exclude_lockfiles

    async def collect(self) -> List[GitChange]:
        """
        Runs the mode's status query and parses every line of its output.

        Returns:
            The changes in the order git reported them.

        Raises:
            CollectorError: If the status query fails.
            RepositoryNotFoundError: If git reports that there is no repository.
        """
        try:
            output = await self.mode.query_status(self.vcs)
        except GitCommandError as e:
            raise CollectorError(f"Failed to collect {self.mode.value} changes: {e}") from e

        changes: List[GitChange] = []
        for line in split_status_lines(output):
            parsed = self.mode.parse_line(line)
            if parsed is None:
                continue
            file_path = normalize_path(parsed.file_path)
            if self.exclude_lockfiles and is_lockfile(file_path):
                logger.debug(f"Skipping lockfile: {file_path}")
                continue
            changes.append(GitChange(
                file_path=file_path,
                status=to_change_status(parsed.status_code),
                staged=self.mode.staged,
            ))

        logger.info(f"Collected {len(changes)} {self.mode.value} changes.")
        return changes


async def collect_changes(vcs: VersionControl, mode: ChangeMode, exclude_lockfiles: bool = True) -> List[GitChange]:
    return await ChangeCollector(vcs, mode, exclude_lockfiles).collect()

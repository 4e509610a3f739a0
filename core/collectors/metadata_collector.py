from typing import Optional

from core.contracts.collector import Collector
from core.contracts.models import DEFAULT_RECENT_COMMITS, RepositoryMetadata
from core.contracts.vcs import VersionControl
from utils.errors import VCSError
from utils.logger import logger


async def fetch_current_branch(vcs: VersionControl) -> Optional[str]:
    """Returns the current branch name, or None when detached or unavailable."""
    try:
        return await vcs.current_branch() or None
    except VCSError as e:
        logger.debug(f"Branch lookup failed, omitting it: {e}")
        return None


async def fetch_recent_commits(vcs: VersionControl, n: int = DEFAULT_RECENT_COMMITS) -> Optional[str]:
    """
    Formats the last ``n`` commits as ``<short hash> <subject>`` lines.

    Returns None when the repository has no commits or the lookup fails.
    """
    try:
        commits = await vcs.recent_commits(n)
    except VCSError as e:
        # An empty repository makes `git log` fail.
        logger.debug(f"Recent commits lookup failed, omitting them: {e}")
        return None
    if not commits:
        return None
    return "\n".join(f"{c.short_hash} {c.message}" for c in commits)


class RepositoryMetadataCollector(Collector[RepositoryMetadata]):
    """
    A collector for the branch name and recent history. Both lookups are
    best effort and never raise.
    """

    def __init__(self, vcs: VersionControl, n: int = DEFAULT_RECENT_COMMITS):
        if n <= 0:
            raise ValueError("Number of commits (n) must be a positive integer.")
        self.vcs = vcs
        self._n = n

    async def collect(self) -> RepositoryMetadata:
        branch = await fetch_current_branch(self.vcs)
        recent_commits = await fetch_recent_commits(self.vcs, self._n)
        return RepositoryMetadata(branch=branch, recent_commits=recent_commits)

from typing import List, Optional, Protocol

from .models import CommitSummary


class VersionControl(Protocol):
    """
    The read-only queries the context pipeline needs from a repository.
    Every method may raise ``GitCommandError``.
    """

    async def name_status_diff(self) -> str:
        """Index diff in ``<code>\\t<path>`` form, one line per file."""
        ...

    async def porcelain_status(self) -> str:
        """Working tree status in two-column porcelain form."""
        ...

    async def file_diff(self, path: str, staged: bool) -> str:
        ...

    async def current_branch(self) -> Optional[str]:
        ...

    async def recent_commits(self, n: int) -> List[CommitSummary]:
        ...

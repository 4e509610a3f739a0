from enum import Enum
from typing import Optional

from core.contracts.vcs import VersionControl
from core.status_parser import ParsedStatus, parse_name_status_line, parse_porcelain_line


class ChangeMode(Enum):
    """
    Which side of the repository the commit context describes.

    Each mode owns its status query, the parser matching that query's
    output and its diff query, so callers never pick them separately.
    """

    STAGED = "staged"
    UNSTAGED = "unstaged"

    @classmethod
    def from_staged(cls, staged: bool) -> "ChangeMode":
        return cls.STAGED if staged else cls.UNSTAGED

    @property
    def staged(self) -> bool:
        return self is ChangeMode.STAGED

    @property
    def title(self) -> str:
        """Capitalised label used in the diff section header."""
        return self.value.capitalize()

    async def query_status(self, vcs: VersionControl) -> str:
        if self.staged:
            return await vcs.name_status_diff()
        return await vcs.porcelain_status()

    def parse_line(self, line: str) -> Optional[ParsedStatus]:
        if self.staged:
            return parse_name_status_line(line)
        return parse_porcelain_line(line)

    async def query_diff(self, vcs: VersionControl, path: str) -> str:
        return await vcs.file_diff(path, staged=self.staged)

from typing import List, Optional, Sequence

from core.contracts.models import ChangeStatus, GitChange
from core.contracts.vcs import VersionControl
from core.modes import ChangeMode
from utils.errors import VCSError
from utils.logger import logger

UNTRACKED_ENTRY = "New untracked file: {path}"
UNAVAILABLE_ENTRY = "File {path} - diff unavailable"


async def _diff_entry(vcs: VersionControl, change: GitChange, mode: ChangeMode) -> Optional[str]:
    """
    Produces the diff text for one change, or a placeholder line.

    Returns None when git reports an empty diff for the file.
    """
    if change.status is ChangeStatus.UNTRACKED:
        return UNTRACKED_ENTRY.format(path=change.file_path)

    try:
        diff = await mode.query_diff(vcs, change.file_path)
    except VCSError as e:
        logger.warning(f"Could not diff {change.file_path}: {e}")
        return UNAVAILABLE_ENTRY.format(path=change.file_path)

    diff = diff.rstrip()
    return diff or None


async def build_diff(vcs: VersionControl, changes: Sequence[GitChange], mode: ChangeMode) -> str:
    """
    Concatenates the per-file diffs of ``changes`` in list order.

    Files are diffed one at a time. A file whose diff cannot be retrieved is
    replaced by a placeholder line and the remaining files are still diffed.
    """
    if not changes:
        return ""

    entries: List[str] = []
    for change in changes:
        entry = await _diff_entry(vcs, change, mode)
        if entry is not None:
            entries.append(entry)
    logger.debug(f"Assembled {len(entries)} diff entries for {len(changes)} {mode.value} changes.")
    return "\n".join(entries)

import asyncio
from pathlib import Path
from typing import List, Optional, Sequence, Union

from core.contracts.models import CommitSummary
from utils.errors import GitCommandError, RepositoryNotFoundError, VCSError
from utils.logger import logger

NOT_A_REPOSITORY_MARKER = "not a git repository"

# Separate hash from subject, and one commit from the next, in `git log` output.
# Subjects may contain any other character, including Unicode line breaks.
_LOG_FIELD_SEP = "\x1f"
_LOG_RECORD_SEP = "\x00"


async def run_git(args: Sequence[str], cwd: Union[str, Path]) -> str:
    """
    Runs a git command in ``cwd`` and returns its decoded stdout.

    Raises:
        RepositoryNotFoundError: If git reports that ``cwd`` is not inside a repository.
        GitCommandError: If the command exits with a non-zero status.
        VCSError: If git is not installed or not in PATH.
    """
    logger.debug(f"Running: git {' '.join(args)} (cwd={cwd})")
    try:
        proc = await asyncio.create_subprocess_exec(
            "git", *args,
            cwd=str(cwd),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise VCSError("Git is not installed or not in PATH.") from e

    try:
        out_b, err_b = await proc.communicate()
    except asyncio.CancelledError:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        await proc.wait()
        raise

    stderr = err_b.decode("utf-8", "replace").strip()
    if proc.returncode != 0:
        if NOT_A_REPOSITORY_MARKER in stderr.lower():
            raise RepositoryNotFoundError(f"Not a git repository: {cwd}")
        raise GitCommandError(args, proc.returncode, stderr)

    return out_b.decode("utf-8", "replace")


async def find_repo_root(start_dir: Union[str, Path] = ".") -> Path:
    """
    Gets the root directory of the repository containing ``start_dir``.

    Raises:
        RepositoryNotFoundError: If ``start_dir`` is not inside a git repository.
    """
    start = Path(start_dir)
    if not start.is_dir():
        raise RepositoryNotFoundError(f"Directory does not exist: {start}")
    try:
        output = await run_git(["rev-parse", "--show-toplevel"], cwd=start)
    except GitCommandError as e:
        raise RepositoryNotFoundError(f"Not a git repository: {start}") from e
    return Path(output.strip())


class GitRepository:
    """
    Answers the context pipeline's queries by running the git executable
    inside ``root``. Each call spawns one short-lived git process.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    async def _git(self, *args: str) -> str:
        return await run_git(args, cwd=self.root)

    async def name_status_diff(self) -> str:
        return await self._git("diff", "--name-status", "--cached")

    async def porcelain_status(self) -> str:
        return await self._git("status", "--porcelain")

    async def file_diff(self, path: str, staged: bool) -> str:
        if staged:
            return await self._git("diff", "--cached", "--", path)
        return await self._git("diff", "--", path)

    async def current_branch(self) -> Optional[str]:
        """Returns the checked out branch, or None on a detached HEAD."""
        branch = (await self._git("branch", "--show-current")).strip()
        return branch or None

    async def recent_commits(self, n: int) -> List[CommitSummary]:
        """
        Returns the last ``n`` commits, newest first.

        Raises:
            GitCommandError: If the repository has no commits yet.
        """
        output = await self._git("log", f"-n{n}", "--pretty=format:%H%x1f%s%x00")
        commits = []
        for record in output.split(_LOG_RECORD_SEP):
            # git puts a newline between entries, after the record separator.
            record = record.lstrip("\n")
            if not record:
                continue
            commit_hash, _, subject = record.partition(_LOG_FIELD_SEP)
            commits.append(CommitSummary(hash=commit_hash, message=subject))
        return commits

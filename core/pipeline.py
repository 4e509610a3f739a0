from pathlib import Path
from typing import List, Optional, Tuple, Union

from config.manager import ConfigurationManager
from core.collectors.change_collector import ChangeCollector
from core.collectors.metadata_collector import RepositoryMetadataCollector
from core.contracts.formatter import Formatter
from core.contracts.models import (
    CommitContextResult,
    ContextOptions,
    GitChange,
    RepositoryMetadata,
    ResolvedContextOptions,
)
from core.contracts.vcs import VersionControl
from core.diff_builder import build_diff
from core.formatter.context_formatter import ContextFormatter
from core.modes import ChangeMode
from core.options import ConfigProvider, resolve_options
from core.truncate import truncate_diff
from utils.errors import RepositoryNotFoundError
from utils.git import GitRepository
from utils.logger import logger


class CommitContextBuilder:
    """
    The main pipeline for building a commit context.
    It collects the changes, assembles and bounds their diff, and renders
    the final document.
    """

    def __init__(
        self,
        repo_root: Union[str, Path, None],
        config: Optional[ConfigProvider] = None,
        vcs: Optional[VersionControl] = None,
        formatter: Optional[Formatter] = None,
    ):
        """
        Args:
            repo_root: The root directory of the repository.
            config: Source of configured option values. Defaults to the process-wide configuration.
            vcs: The repository queries. Defaults to the git executable run in ``repo_root``.
            formatter: Renders the document. Defaults to the bundled Jinja2 template.

        Raises:
            RepositoryNotFoundError: If ``repo_root`` is missing or not a directory.
        """
        if not repo_root:
            raise RepositoryNotFoundError("No repository root given.")
        self.repo_root = Path(repo_root)
        if vcs is None:
            if not self.repo_root.is_dir():
                raise RepositoryNotFoundError(f"Repository root does not exist: {self.repo_root}")
            vcs = GitRepository(self.repo_root)
        self.vcs = vcs
        self.config = config if config is not None else ConfigurationManager.get_instance()
        self.formatter = formatter or ContextFormatter()

    async def build(self, options: Optional[ContextOptions] = None) -> CommitContextResult:
        """
        Builds the commit context document.

        Raises:
            CollectorError: If git cannot report the repository status.
            RepositoryNotFoundError: If git does not recognise the repository.
            FormatterError: If the document cannot be rendered.
        """
        logger.info(f"Building commit context for {self.repo_root}...")
        resolved = resolve_options(options, self.config)
        logger.debug(f"Resolved options: {resolved.model_dump_json()}")

        mode, changes = await self._collect_with_fallback(resolved)

        raw_diff = await build_diff(self.vcs, changes, mode)
        truncated = truncate_diff(raw_diff, resolved.max_diff_chars)
        if truncated.was_truncated:
            logger.info(f"Diff truncated from {len(raw_diff)} to {resolved.max_diff_chars} chars.")

        metadata: Optional[RepositoryMetadata] = None
        if resolved.include_repo_context:
            metadata = await RepositoryMetadataCollector(self.vcs, resolved.recent_commits).collect()

        context = self.formatter.format(
            mode=mode,
            diff=truncated.text,
            changes=changes,
            additional_context=resolved.additional_context,
            metadata=metadata,
        )
        logger.info(f"Commit context built from {len(changes)} {mode.value} changes.")
        return CommitContextResult(context=context, used_staged=mode.staged, changes=changes)

    async def _collect_with_fallback(self, resolved: ResolvedContextOptions) -> Tuple[ChangeMode, List[GitChange]]:
        """
        Collects the preferred mode; an empty staged set falls back to the
        unstaged changes once, when allowed.
        """
        mode = ChangeMode.from_staged(resolved.prefer_staged)
        changes = await ChangeCollector(self.vcs, mode, resolved.exclude_lockfiles).collect()

        if mode.staged and not changes and resolved.allow_unstaged_fallback:
            logger.info("No staged changes found, falling back to unstaged changes.")
            mode = ChangeMode.UNSTAGED
            changes = await ChangeCollector(self.vcs, mode, resolved.exclude_lockfiles).collect()

        return mode, changes


async def get_commit_context(
    repo_root: Union[str, Path, None],
    options: Optional[ContextOptions] = None,
    config: Optional[ConfigProvider] = None,
    vcs: Optional[VersionControl] = None,
) -> CommitContextResult:
    """Builds the commit context for the repository at ``repo_root``."""
    builder = CommitContextBuilder(repo_root, config=config, vcs=vcs)
    return await builder.build(options)

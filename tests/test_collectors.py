import asyncio
import unittest
from unittest.mock import AsyncMock

from core.collectors.change_collector import ChangeCollector, split_status_lines
from core.collectors.metadata_collector import (
    RepositoryMetadataCollector,
    fetch_current_branch,
    fetch_recent_commits,
)
from core.contracts.models import ChangeStatus, CommitSummary, GitChange
from core.modes import ChangeMode
from utils.errors import CollectorError, GitCommandError, RepositoryNotFoundError


class TestChangeCollector(unittest.TestCase):

    def setUp(self):
        self.vcs = AsyncMock()

    def test_collect_staged_changes(self):
        # Arrange
        self.vcs.name_status_diff.return_value = "M\tsrc/a.ts\nA\tsrc/b.ts\nD\told.txt\n"
        collector = ChangeCollector(self.vcs, ChangeMode.STAGED)

        # Act
        result = asyncio.run(collector.collect())

        # Assert
        self.assertEqual(result, [
            GitChange(file_path="src/a.ts", status=ChangeStatus.MODIFIED, staged=True),
            GitChange(file_path="src/b.ts", status=ChangeStatus.ADDED, staged=True),
            GitChange(file_path="old.txt", status=ChangeStatus.DELETED, staged=True),
        ])
        self.vcs.name_status_diff.assert_awaited_once()
        self.vcs.porcelain_status.assert_not_called()

    def test_collect_unstaged_changes_keeps_leading_column(self):
        # Arrange
        self.vcs.porcelain_status.return_value = " M file.txt\n?? new.txt\nM  index-only.txt\n"
        collector = ChangeCollector(self.vcs, ChangeMode.UNSTAGED)

        # Act
        result = asyncio.run(collector.collect())

        # Assert
        self.assertEqual(result, [
            GitChange(file_path="file.txt", status=ChangeStatus.MODIFIED, staged=False),
            GitChange(file_path="new.txt", status=ChangeStatus.UNTRACKED, staged=False),
            GitChange(file_path="index-only.txt", status=ChangeStatus.MODIFIED, staged=False),
        ])
        self.vcs.name_status_diff.assert_not_called()

    def test_collect_skips_malformed_lines(self):
        # Arrange
        self.vcs.name_status_diff.return_value = "garbage line\nM\tkeep.py\n\n   \n\tno-code.py\n"
        collector = ChangeCollector(self.vcs, ChangeMode.STAGED)

        # Act
        result = asyncio.run(collector.collect())

        # Assert
        self.assertEqual([c.file_path for c in result], ["keep.py"])

    def test_collect_excludes_lockfiles(self):
        # Arrange
        self.vcs.name_status_diff.return_value = "M\tsrc/x.ts\nM\tpackage-lock.json\nM\tweb/yarn.lock\n"

        # Act
        excluded = asyncio.run(ChangeCollector(self.vcs, ChangeMode.STAGED, exclude_lockfiles=True).collect())
        included = asyncio.run(ChangeCollector(self.vcs, ChangeMode.STAGED, exclude_lockfiles=False).collect())

        # Assert
        self.assertEqual([c.file_path for c in excluded], ["src/x.ts"])
        self.assertEqual([c.file_path for c in included], ["src/x.ts", "package-lock.json", "web/yarn.lock"])

    def test_collect_normalizes_separators(self):
        # Arrange
        self.vcs.name_status_diff.return_value = "M\tsrc\\win\\file.cs\n"

        # Act
        result = asyncio.run(ChangeCollector(self.vcs, ChangeMode.STAGED).collect())

        # Assert
        self.assertEqual(result[0].file_path, "src/win/file.cs")

    def test_collect_unknown_code(self):
        # Arrange
        self.vcs.name_status_diff.return_value = "T\tlink\n"

        # Act
        result = asyncio.run(ChangeCollector(self.vcs, ChangeMode.STAGED).collect())

        # Assert
        self.assertEqual(result[0].status, ChangeStatus.UNKNOWN)

    def test_collect_is_idempotent(self):
        # Arrange
        self.vcs.porcelain_status.return_value = " M b.txt\n?? a.txt\nD  c.txt\n"
        collector = ChangeCollector(self.vcs, ChangeMode.UNSTAGED)

        # Act
        first = asyncio.run(collector.collect())
        second = asyncio.run(collector.collect())

        # Assert
        self.assertEqual(first, second)

    def test_collect_status_failure_is_raised(self):
        # Arrange
        self.vcs.name_status_diff.side_effect = GitCommandError(["diff"], 129, "usage")
        collector = ChangeCollector(self.vcs, ChangeMode.STAGED)

        # Act & Assert
        with self.assertRaises(CollectorError) as cm:
            asyncio.run(collector.collect())
        self.assertIn("Failed to collect staged changes", str(cm.exception))
        self.assertIsInstance(cm.exception.__cause__, GitCommandError)

    def test_collect_missing_repository_is_raised(self):
        # Arrange
        self.vcs.porcelain_status.side_effect = RepositoryNotFoundError("Not a git repository: /tmp")
        collector = ChangeCollector(self.vcs, ChangeMode.UNSTAGED)

        # Act & Assert
        with self.assertRaises(RepositoryNotFoundError):
            asyncio.run(collector.collect())


class TestSplitStatusLines(unittest.TestCase):

    def test_drops_blank_lines_and_trailing_whitespace(self):
        self.assertEqual(
            split_status_lines(" M a.txt  \n\n   \r\n?? b.txt\n"),
            [" M a.txt", "?? b.txt"],
        )

    def test_only_newline_ends_a_record(self):
        self.assertEqual(
            split_status_lines("?? a\u2028b.txt\n M c\x85d.txt\n?? e\x1cf.txt\n"),
            ["?? a\u2028b.txt", " M c\x85d.txt", "?? e\x1cf.txt"],
        )

    def test_unquoted_file_name_with_line_separator(self):
        # Arrange
        vcs = AsyncMock()
        vcs.porcelain_status.return_value = "?? a\u2028b.txt\n M c.txt\n"
        collector = ChangeCollector(vcs, ChangeMode.UNSTAGED)

        # Act
        result = asyncio.run(collector.collect())

        # Assert
        self.assertEqual(result, [
            GitChange(file_path="a\u2028b.txt", status=ChangeStatus.UNTRACKED, staged=False),
            GitChange(file_path="c.txt", status=ChangeStatus.MODIFIED, staged=False),
        ])


class TestRepositoryMetadataCollector(unittest.TestCase):

    def setUp(self):
        self.vcs = AsyncMock()

    def test_collect_branch_and_commits(self):
        # Arrange
        self.vcs.current_branch.return_value = "feature/login"
        self.vcs.recent_commits.return_value = [
            CommitSummary(hash="0123456789abcdef", message="feat: add login"),
            CommitSummary(hash="fedcba9876543210", message="fix: typo"),
        ]
        collector = RepositoryMetadataCollector(self.vcs, n=2)

        # Act
        result = asyncio.run(collector.collect())

        # Assert
        self.assertEqual(result.branch, "feature/login")
        self.assertEqual(result.recent_commits, "0123456 feat: add login\nfedcba9 fix: typo")
        self.vcs.recent_commits.assert_awaited_once_with(2)

    def test_failures_are_swallowed(self):
        # Arrange
        self.vcs.current_branch.side_effect = GitCommandError(["branch"], 128, "fatal")
        self.vcs.recent_commits.side_effect = GitCommandError(
            ["log"], 128, "fatal: your current branch 'main' does not have any commits yet"
        )
        collector = RepositoryMetadataCollector(self.vcs)

        # Act
        result = asyncio.run(collector.collect())

        # Assert
        self.assertIsNone(result.branch)
        self.assertIsNone(result.recent_commits)

    def test_detached_head_and_empty_history(self):
        # Arrange
        self.vcs.current_branch.return_value = None
        self.vcs.recent_commits.return_value = []

        # Act
        branch = asyncio.run(fetch_current_branch(self.vcs))
        commits = asyncio.run(fetch_recent_commits(self.vcs))

        # Assert
        self.assertIsNone(branch)
        self.assertIsNone(commits)
        self.vcs.recent_commits.assert_awaited_once_with(5)

    def test_init_invalid_n(self):
        # Act & Assert
        with self.assertRaises(ValueError):
            RepositoryMetadataCollector(self.vcs, n=0)
        with self.assertRaises(ValueError):
            RepositoryMetadataCollector(self.vcs, n=-1)


if __name__ == "__main__":
    unittest.main()

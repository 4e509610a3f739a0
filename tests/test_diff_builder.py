import pytest

from core.contracts.models import ChangeStatus, GitChange
from core.diff_builder import build_diff
from core.modes import ChangeMode


def change(path, status=ChangeStatus.MODIFIED, staged=True):
    return GitChange(file_path=path, status=status, staged=staged)


@pytest.mark.asyncio
async def test_empty_changes_return_empty_string(fake_vcs):
    vcs = fake_vcs()

    assert await build_diff(vcs, [], ChangeMode.STAGED) == ""
    assert vcs.calls == []


@pytest.mark.asyncio
async def test_diffs_are_joined_in_order_and_right_trimmed(fake_vcs):
    vcs = fake_vcs(diffs={
        ("b.py", True): "diff --git a/b.py b/b.py\n+b\n\n",
        ("a.py", True): "diff --git a/a.py b/a.py\n+a\n",
    })

    result = await build_diff(vcs, [change("b.py"), change("a.py")], ChangeMode.STAGED)

    assert result == "diff --git a/b.py b/b.py\n+b\ndiff --git a/a.py b/a.py\n+a"
    assert vcs.calls == [("file_diff", "b.py", True), ("file_diff", "a.py", True)]


@pytest.mark.asyncio
async def test_untracked_files_get_a_placeholder_without_git_call(fake_vcs):
    vcs = fake_vcs(diffs={("tracked.txt", False): "+x\n"})
    changes = [
        change("new.txt", ChangeStatus.UNTRACKED, staged=False),
        change("tracked.txt", staged=False),
    ]

    result = await build_diff(vcs, changes, ChangeMode.UNSTAGED)

    assert result == "New untracked file: new.txt\n+x"
    assert vcs.calls == [("file_diff", "tracked.txt", False)]


@pytest.mark.asyncio
async def test_single_file_failure_does_not_abort(fake_vcs):
    vcs = fake_vcs(
        diffs={("first.py", True): "+first\n", ("third.py", True): "+third\n"},
        failing_diffs=["second.py"],
    )
    changes = [change("first.py"), change("second.py"), change("third.py")]

    result = await build_diff(vcs, changes, ChangeMode.STAGED)

    assert result.split("\n") == ["+first", "File second.py - diff unavailable", "+third"]


@pytest.mark.asyncio
async def test_empty_file_diff_contributes_nothing(fake_vcs):
    vcs = fake_vcs(diffs={("b.py", True): "+b\n"})

    result = await build_diff(vcs, [change("mode-only.sh"), change("b.py")], ChangeMode.STAGED)

    assert result == "+b"


@pytest.mark.asyncio
async def test_unstaged_mode_queries_working_tree(fake_vcs):
    vcs = fake_vcs(diffs={("a.py", False): "+wt\n", ("a.py", True): "+index\n"})

    result = await build_diff(vcs, [change("a.py", staged=False)], ChangeMode.UNSTAGED)

    assert result == "+wt"

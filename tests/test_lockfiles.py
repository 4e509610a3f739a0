import pytest

from core.lockfiles import LOCKFILE_PATH_ENDINGS, is_lockfile


@pytest.mark.parametrize("ending", LOCKFILE_PATH_ENDINGS)
def test_exact_match(ending):
    assert is_lockfile(ending) is True


@pytest.mark.parametrize("ending", LOCKFILE_PATH_ENDINGS)
def test_nested_match(ending):
    assert is_lockfile(f"packages/web/{ending}") is True


@pytest.mark.parametrize("ending", LOCKFILE_PATH_ENDINGS)
def test_windows_separators_are_normalized(ending):
    path = "packages\\web\\" + ending.replace("/", "\\")
    assert is_lockfile(path) is True


@pytest.mark.parametrize("ending", LOCKFILE_PATH_ENDINGS)
def test_prefixed_name_does_not_match(ending):
    assert is_lockfile(f"my-{ending}") is False


@pytest.mark.parametrize("ending", LOCKFILE_PATH_ENDINGS)
def test_suffixed_name_does_not_match(ending):
    assert is_lockfile(f"{ending}.bak") is False


@pytest.mark.parametrize("path", [
    "my-package-lock.json.bak",
    "not-package-lock.json",
    "src/yarn.lock/README.md",
    "docs/poetry.lock.md",
    "Cargo.lock.orig",
    "config",
    "bundle/config",
    "src/main.py",
    "",
])
def test_non_lockfiles(path):
    assert is_lockfile(path) is False


def test_endings_are_unique():
    assert len(set(LOCKFILE_PATH_ENDINGS)) == len(LOCKFILE_PATH_ENDINGS)


@pytest.mark.parametrize("path", [
    "frontend/.bundle/config",
    "elm-stuff/exact-dependencies.json",
    "app/vendor/vendor.json",
    "infra/.terraform.lock.hcl",
])
def test_multi_segment_endings(path):
    assert is_lockfile(path) is True

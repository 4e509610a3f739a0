"""
Resolution of context options.

Every option is resolved the same way: the call-site value wins, then the
process-wide configuration, then a hard-coded default. Each option has its
own small function so the precedence can be tested in isolation.
"""
from typing import Optional, Protocol, TypeVar

from config.manager import ConfigKeys
from core.contracts.models import DEFAULT_RECENT_COMMITS, ContextOptions, ResolvedContextOptions

T = TypeVar("T")

DEFAULT_PREFER_STAGED = True
DEFAULT_ALLOW_UNSTAGED_FALLBACK = True
DEFAULT_INCLUDE_REPO_CONTEXT = True
DEFAULT_EXCLUDE_LOCKFILES = True
DEFAULT_MAX_DIFF_CHARS = 0


class ConfigProvider(Protocol):
    def get_config(self, key: str, default: Optional[T] = None) -> Optional[T]:
        ...


def first_set(override: Optional[T], configured: Optional[T], default: T) -> T:
    if override is not None:
        return override
    if configured is not None:
        return configured
    return default


def resolve_prefer_staged(override: Optional[bool]) -> bool:
    return first_set(override, None, DEFAULT_PREFER_STAGED)


def resolve_allow_unstaged_fallback(override: Optional[bool]) -> bool:
    return first_set(override, None, DEFAULT_ALLOW_UNSTAGED_FALLBACK)


def resolve_include_repo_context(override: Optional[bool], configured: Optional[bool]) -> bool:
    return first_set(override, configured, DEFAULT_INCLUDE_REPO_CONTEXT)


def resolve_exclude_lockfiles(override: Optional[bool], configured: Optional[bool]) -> bool:
    return first_set(override, configured, DEFAULT_EXCLUDE_LOCKFILES)


def resolve_max_diff_chars(override: Optional[int], configured: Optional[int]) -> int:
    return max(0, first_set(override, configured, DEFAULT_MAX_DIFF_CHARS))


def resolve_additional_context(override: Optional[str]) -> str:
    return (override or "").strip()


def resolve_options(options: Optional[ContextOptions], config: ConfigProvider) -> ResolvedContextOptions:
    options = options or ContextOptions()
    return ResolvedContextOptions(
        prefer_staged=resolve_prefer_staged(options.prefer_staged),
        allow_unstaged_fallback=resolve_allow_unstaged_fallback(options.allow_unstaged_fallback),
        include_repo_context=resolve_include_repo_context(
            options.include_repo_context, config.get_config(ConfigKeys.INCLUDE_REPO_CONTEXT)
        ),
        exclude_lockfiles=resolve_exclude_lockfiles(
            options.exclude_lockfiles, config.get_config(ConfigKeys.EXCLUDE_LOCKFILES)
        ),
        max_diff_chars=resolve_max_diff_chars(
            options.max_diff_chars, config.get_config(ConfigKeys.MAX_DIFF_CHARS)
        ),
        additional_context=resolve_additional_context(options.additional_context),
        recent_commits=first_set(None, config.get_config(ConfigKeys.RECENT_COMMITS), DEFAULT_RECENT_COMMITS),
    )

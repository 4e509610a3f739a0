from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Commits listed in the repository context when nothing else is configured.
DEFAULT_RECENT_COMMITS = 5


class ChangeStatus(str, Enum):
    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UPDATED = "U"
    UNTRACKED = "?"
    UNKNOWN = "Unknown"

    @property
    def readable(self) -> str:
        """Human readable label used in the change summary."""
        return _READABLE_STATUS[self]


_READABLE_STATUS = {
    ChangeStatus.MODIFIED: "Modified",
    ChangeStatus.ADDED: "Added",
    ChangeStatus.DELETED: "Deleted",
    ChangeStatus.RENAMED: "Renamed",
    ChangeStatus.COPIED: "Copied",
    ChangeStatus.UPDATED: "Updated",
    ChangeStatus.UNTRACKED: "Untracked",
    ChangeStatus.UNKNOWN: "Unknown",
}


class GitChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_path: str
    status: ChangeStatus
    staged: bool

    @field_validator("file_path")
    @classmethod
    def _normalize_separators(cls, value: str) -> str:
        return value.replace("\\", "/")

    @property
    def summary_line(self) -> str:
        scope = "staged" if self.staged else "unstaged"
        return f"{self.status.readable} ({scope}): {self.file_path}"


class CommitSummary(BaseModel):
    hash: str
    message: str

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


class RepositoryMetadata(BaseModel):
    branch: Optional[str] = None
    recent_commits: Optional[str] = None


class TruncatedDiff(BaseModel):
    text: str
    was_truncated: bool = False


class ContextOptions(BaseModel):
    """Call-site options. ``None`` means "not set by the caller"."""
    prefer_staged: Optional[bool] = None
    allow_unstaged_fallback: Optional[bool] = None
    include_repo_context: Optional[bool] = None
    exclude_lockfiles: Optional[bool] = None
    max_diff_chars: Optional[int] = Field(None, ge=0)
    additional_context: Optional[str] = None


class ResolvedContextOptions(BaseModel):
    prefer_staged: bool
    allow_unstaged_fallback: bool
    include_repo_context: bool
    exclude_lockfiles: bool
    max_diff_chars: int = Field(ge=0)
    additional_context: str
    recent_commits: int = Field(DEFAULT_RECENT_COMMITS, gt=0)


class CommitContextResult(BaseModel):
    context: str
    used_staged: bool
    changes: List[GitChange] = Field(default_factory=list)

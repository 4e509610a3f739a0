"""
Defines custom exception classes for the application.
"""
from typing import Optional, Sequence


class CommitContextException(Exception):
    """Base exception class for commitctx application."""
    pass

class CollectorError(CommitContextException):
    """Raised when an error occurs during change collection."""
    pass

class FormatterError(CommitContextException):
    """Raised when an error occurs while rendering the context document."""
    pass

class ConfigError(CommitContextException):
    """Raised when there is a configuration error."""
    pass

class VCSError(CommitContextException):
    """Raised when the version-control backend cannot answer a query."""
    pass

class RepositoryNotFoundError(VCSError):
    """Raised when the repository root is missing or is not a git repository."""
    pass

class GitCommandError(VCSError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: Optional[int], stderr: str = ""):
        self.git_args = list(args)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Git command failed: git {' '.join(self.git_args)}"
        if stderr:
            message += f"\n{stderr}"
        super().__init__(message)

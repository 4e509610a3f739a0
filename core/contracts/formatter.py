from typing import TYPE_CHECKING, Optional, Protocol, Sequence

from .models import GitChange, RepositoryMetadata

if TYPE_CHECKING:
    from core.modes import ChangeMode


class Formatter(Protocol):
    def format(
        self,
        mode: "ChangeMode",
        diff: str,
        changes: Sequence[GitChange],
        additional_context: str = "",
        metadata: Optional[RepositoryMetadata] = None,
    ) -> str:
        ...

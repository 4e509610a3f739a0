from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from core.contracts.formatter import Formatter
from core.contracts.models import GitChange, RepositoryMetadata
from core.modes import ChangeMode
from utils.errors import FormatterError

DEFAULT_TEMPLATE_NAME = "commit_context.md.j2"


class ContextFormatter(Formatter):
    """
    Renders the commit context document from its sections.

    The section headers, fences and placeholders are what downstream prompt
    templates rely on, so custom templates should keep them.
    """

    def __init__(
        self,
        template_dir: Optional[str] = None,
        template_name: str = DEFAULT_TEMPLATE_NAME,
    ):
        if template_dir is None:
            # Default template directory relative to this file
            template_dir = str(Path(__file__).parent / "templates")

        self.template_dir = template_dir
        self.template_name = template_name
        try:
            self.env = Environment(
                loader=FileSystemLoader(self.template_dir),
                trim_blocks=True,
                lstrip_blocks=True,
                keep_trailing_newline=True,
                undefined=StrictUndefined,
            )
        except Exception as e:
            raise FormatterError(f"Failed to initialize Jinja2 environment: {e}") from e

    def format(
        self,
        mode: ChangeMode,
        diff: str,
        changes: Sequence[GitChange],
        additional_context: str = "",
        metadata: Optional[RepositoryMetadata] = None,
    ) -> str:
        """
        Args:
            mode: The mode the changes were collected in.
            diff: The (possibly truncated) diff text; empty renders a placeholder.
            changes: The changes listed in the summary section.
            additional_context: Caller supplied text; blank omits the section.
            metadata: Repository details; None omits the repository section.
        """
        try:
            template = self.env.get_template(self.template_name)
            return template.render(
                mode_title=mode.title,
                diff=diff,
                changes=list(changes),
                additional_context=additional_context.strip(),
                metadata=metadata,
            )
        except Exception as e:
            raise FormatterError(f"Failed to render template {self.template_name}: {e}") from e

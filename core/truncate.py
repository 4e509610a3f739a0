from typing import Optional

from core.contracts.models import TruncatedDiff

TRUNCATION_MARKER = "\n\n... (diff truncated to {max_chars} chars)"


def truncate_diff(diff: str, max_chars: Optional[int]) -> TruncatedDiff:
    """
    Cuts ``diff`` to at most ``max_chars`` characters and appends a marker.

    The cut is a plain character count and may land mid-line. A missing or
    non-positive ``max_chars`` disables truncation.
    """
    if not max_chars or max_chars <= 0 or len(diff) <= max_chars:
        return TruncatedDiff(text=diff, was_truncated=False)
    return TruncatedDiff(
        text=diff[:max_chars] + TRUNCATION_MARKER.format(max_chars=max_chars),
        was_truncated=True,
    )

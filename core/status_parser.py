"""
Parsers for the two line formats git uses to report changed files.

- name-status (``git diff --name-status --cached``): ``<code>\\t<path>``
- porcelain (``git status --porcelain``): ``XY <path>`` where X is the
  index column and Y the working tree column

Malformed lines are not errors; the parsers return None and the caller
skips them.
"""
from typing import NamedTuple, Optional

from core.contracts.models import ChangeStatus

_KNOWN_CODES = {status.value for status in ChangeStatus if status is not ChangeStatus.UNKNOWN}


class ParsedStatus(NamedTuple):
    status_code: str
    file_path: str


def parse_name_status_line(line: str) -> Optional[ParsedStatus]:
    tab_index = line.find("\t")
    if tab_index <= 0:
        return None
    status_code = line[:tab_index].strip()
    file_path = line[tab_index + 1:].strip()
    if not status_code or not file_path:
        return None
    return ParsedStatus(status_code, file_path)


def parse_porcelain_line(line: str) -> Optional[ParsedStatus]:
    # " M file.txt" | "M  file.txt" | "?? file.txt" | "A  file.txt"
    if not line or len(line) < 3:
        return None
    index_status = line[0]
    working_status = line[1]
    file_path = line[2:].strip()
    if not file_path:
        return None

    if index_status == "?" and working_status == "?":
        return ParsedStatus("?", file_path)

    status_code = working_status if working_status.strip() else index_status
    if not status_code.strip():
        return None
    return ParsedStatus(status_code, file_path)


def to_change_status(code: str) -> ChangeStatus:
    """Maps a raw single-letter git code to a ChangeStatus; anything else is UNKNOWN."""
    if code in _KNOWN_CODES:
        return ChangeStatus(code)
    return ChangeStatus.UNKNOWN

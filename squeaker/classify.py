# squeaker/classify.py
from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from .contracts import Command
from .errors import StructureError


# Greedy: the speaker label runs up to the LAST colon on the line.
_HEADER_RE = re.compile(r"^(.*):(.*)$", re.DOTALL)
_FACT_RE = re.compile(r"^\s*-\s*(.*)$", re.DOTALL)
_BLANK_RE = re.compile(r"^\s*$")

# predicate [id]? (argument)?  -- predicate may not contain "(" or "["
_COMMAND_RE = re.compile(
    r"\s*(?P<pred>[^(\[]*)\s*"
    r"(?:\[(?P<id>[^\]]*)\])?\s*"
    r"(?:\((?P<arg>[^)]*)\))?"
)


def match_header(line: str) -> Tuple[str, str]:
    """
    Split a speaker header into (speaker, text after the colon).

    Raises StructureError if the line has no colon.
    """
    m = _HEADER_RE.match(line)
    if not m:
        raise StructureError(f"Invalid speaker header (missing ':'): {line!r}", token=line)
    return m.group(1).strip(), m.group(2)


def match_fact(line: str) -> Optional[str]:
    """Return the command text of a fact-marker line, or None if the line is not one."""
    m = _FACT_RE.match(line)
    if not m:
        return None
    return m.group(1)


def is_blank(line: str) -> bool:
    return _BLANK_RE.match(line) is not None


def _or_none(s: Optional[str]) -> Optional[str]:
    # "[]" and "()" are treated as absent
    return s if s else None


def iter_commands(line: str) -> Iterator[Command]:
    pos = 0
    while pos <= len(line):
        m = _COMMAND_RE.match(line, pos)
        pred = m.group("pred")
        if not pred:
            return
        yield Command(
            predicate=pred.strip(),
            id=_or_none(m.group("id")),
            argument=_or_none(m.group("arg")),
        )
        pos = m.end()


def extract_commands(line: str) -> List[Command]:
    """
    Extract every command token from one fact or continuation line.

    `- claim[sky](the sky's color) quote(sky is blue)` yields two commands.
    A line may carry zero commands.
    """
    return list(iter_commands(line))

# squeaker/interpret.py
from __future__ import annotations

import re
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .contracts import Command, FactBuilder, FactRef, RawUtterance, Span, UtteranceBuilder
from .errors import ReferenceLookupError, ValidationError


_ELLIPSIS_RE = re.compile(r"\s*\.{3}\s*")


def split_quote(quote: str) -> List[str]:
    """Split a quote argument on "..." into ordered, independently located parts."""
    return _ELLIPSIS_RE.split(quote)


def locate_parts(text: str, parts: Sequence[str]) -> Optional[List[Span]]:
    """
    Find every part, in order, inside `text`.

    Each part is searched only after the previous part's match. A span is
    widened by one character when it is directly followed by whitespace.
    Returns None if any part is missing.
    """
    spans: List[Span] = []
    offset = 0
    for part in parts:
        start = text.find(part, offset)
        if start == -1:
            return None
        end = start + len(part)
        offset = end
        if end < len(text) and text[end].isspace():
            end += 1
        spans.append((start, end))
    return spans


def match_quote(document: Sequence[UtteranceBuilder], quote: str) -> List[Span]:
    """
    Resolve a quote against the most recent utterance containing all its parts.

    The matched spans are pooled on that utterance for later partitioning.
    """
    parts = split_quote(quote)
    for utterance in reversed(document):
        spans = locate_parts(utterance.original_text, parts)
        if spans is None:
            continue
        utterance.evidence.extend(spans)
        return spans
    raise ReferenceLookupError(f"Failed to find quote: {quote!r}", token=quote)


def lookup_id(document: Sequence[UtteranceBuilder], fact_id: str) -> FactRef:
    """Return a reference to the latest fact declared with `fact_id`."""
    for u_idx in range(len(document) - 1, -1, -1):
        facts = document[u_idx].facts
        for f_idx in range(len(facts) - 1, -1, -1):
            if facts[f_idx].internal_id == fact_id:
                return FactRef(utterance_index=u_idx, fact_index=f_idx)
    raise ReferenceLookupError(f"Id lookup failed: {fact_id!r}", token=fact_id)


# -------------------- predicate handlers --------------------

Handler = Callable[[FactBuilder, Sequence[UtteranceBuilder], Command], None]


def _require_argument(cmd: Command) -> str:
    if not cmd.argument:
        raise ValidationError(f"{cmd.predicate} requires an argument", token=cmd.predicate)
    return cmd.argument


def _require_id(cmd: Command) -> str:
    if not cmd.id:
        raise ValidationError(f"{cmd.predicate} requires an id", token=cmd.predicate)
    return cmd.id


def _forbid_id(cmd: Command) -> None:
    if cmd.id:
        raise ValidationError(f"{cmd.predicate} does not take an id (got {cmd.id!r})", token=cmd.id)


def _forbid_argument(cmd: Command) -> None:
    if cmd.argument:
        raise ValidationError(
            f"{cmd.predicate} does not take an argument (got {cmd.argument!r})",
            token=cmd.argument,
        )


def _claim(fact: FactBuilder, document: Sequence[UtteranceBuilder], cmd: Command) -> None:
    fact.claim = _require_argument(cmd)
    fact.internal_id = cmd.id


def _quote(fact: FactBuilder, document: Sequence[UtteranceBuilder], cmd: Command) -> None:
    _forbid_id(cmd)
    arg = _require_argument(cmd)
    fact.proof_spans = match_quote(document, arg)


def _summary(fact: FactBuilder, document: Sequence[UtteranceBuilder], cmd: Command) -> None:
    _forbid_id(cmd)
    fact.summary = _require_argument(cmd)


def _redacts(fact: FactBuilder, document: Sequence[UtteranceBuilder], cmd: Command) -> None:
    fact_id = _require_id(cmd)
    _forbid_argument(cmd)
    fact.redacts.append(lookup_id(document, fact_id))


def _inspiration(fact: FactBuilder, document: Sequence[UtteranceBuilder], cmd: Command) -> None:
    fact_id = _require_id(cmd)
    _forbid_argument(cmd)
    fact.inspiration.append(lookup_id(document, fact_id))


HANDLERS: Dict[str, Handler] = {
    "claim": _claim,
    "quote": _quote,
    "summary": _summary,
    "redacts": _redacts,
    "inspiration": _inspiration,
}


def apply_command(fact: FactBuilder, document: Sequence[UtteranceBuilder], cmd: Command) -> None:
    handler = HANDLERS.get(cmd.predicate)
    if handler is None:
        raise ValidationError(f"Unknown predicate {cmd.predicate!r}", token=cmd.predicate)
    handler(fact, document, cmd)


def interpret(raw_utterances: Iterable[RawUtterance]) -> List[UtteranceBuilder]:
    """
    Run every fact's commands in document order.

    An utterance joins the document before its own facts run, and a fact joins
    its utterance only after all of its commands ran, so lookups see earlier
    facts of the same utterance but never the fact itself.
    """
    document: List[UtteranceBuilder] = []
    for raw in raw_utterances:
        utterance = UtteranceBuilder(speaker=raw.speaker, original_text=raw.text)
        document.append(utterance)
        for commands in raw.facts:
            fact = FactBuilder()
            for cmd in commands:
                apply_command(fact, document, cmd)
            utterance.facts.append(fact)
    return document

# squeaker/contracts.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple


# ---- Canonical offsets ----
# Evidence spans are half-open [start, end) character offsets into an
# utterance's whitespace-collapsed original text.
Span = Tuple[int, int]


@dataclass(frozen=True)
class Command:
    """One `predicate[id](argument)` token taken from a fact line."""
    predicate: str
    id: Optional[str] = None
    argument: Optional[str] = None


@dataclass(frozen=True)
class RawUtterance:
    """A speaker turn as emitted by the transcript parser, commands still uninterpreted."""
    speaker: str
    text: str
    facts: Sequence[Sequence[Command]]


@dataclass(frozen=True)
class FactRef:
    """Pointer to an earlier fact: (utterance index, fact index within it)."""
    utterance_index: int
    fact_index: int


@dataclass
class FactBuilder:
    """
    In-progress fact, mutated by the predicate handlers.

    `proof_spans` stays None until a quote command is accepted; the spans are
    offsets into the text of the utterance the quote was found in.
    """
    internal_id: Optional[str] = None
    claim: Optional[str] = None
    summary: Optional[str] = None
    proof_spans: Optional[List[Span]] = None
    redacts: List[FactRef] = field(default_factory=list)
    inspiration: List[FactRef] = field(default_factory=list)


@dataclass
class UtteranceBuilder:
    """
    Utterance under construction during interpretation.

    `evidence` is the pooled span list: quote commands from this or any later
    utterance append to it. The span resolver consumes it once.
    """
    speaker: str
    original_text: str
    facts: List[FactBuilder] = field(default_factory=list)
    evidence: List[Span] = field(default_factory=list)

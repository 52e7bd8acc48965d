# squeaker/resolve.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .contracts import FactBuilder, Span, UtteranceBuilder
from .errors import ValidationError


@dataclass(frozen=True)
class Partition:
    """
    Non-overlapping cover of an utterance's text.

    `pairs[i]` is the untrimmed [start, end) range of `chunks[i]`.
    """
    pairs: Tuple[Span, ...]
    chunks: Tuple[str, ...]


@dataclass(frozen=True)
class ResolvedFact:
    fact: FactBuilder
    proof: Tuple[int, ...]


@dataclass(frozen=True)
class ResolvedUtterance:
    utterance: UtteranceBuilder
    partition: Partition
    facts: Tuple[ResolvedFact, ...]


def boundaries(length: int, spans: Iterable[Span]) -> List[int]:
    """Sorted, de-duplicated cut points: every span edge plus 0 and `length`."""
    cuts = {0, length}
    for start, end in spans:
        cuts.add(start)
        cuts.add(end)
    return sorted(cuts)


def pair_boundaries(cuts: Sequence[int]) -> List[Span]:
    return [(cuts[i - 1], cuts[i]) for i in range(1, len(cuts))]


def fill_gaps(length: int, pairs: Sequence[Span]) -> List[Span]:
    """
    Close any hole between consecutive pairs, and before/after them, so the
    result always covers [0, length].
    """
    if not pairs:
        return [(0, length)]
    out: List[Span] = []
    if pairs[0][0] > 0:
        out.append((0, pairs[0][0]))
    out.append(pairs[0])
    for prev, cur in zip(pairs, pairs[1:]):
        if cur[0] > prev[1]:
            out.append((prev[1], cur[0]))
        out.append(cur)
    if pairs[-1][1] < length:
        out.append((pairs[-1][1], length))
    return out


def partition_text(text: str, spans: Iterable[Span]) -> Partition:
    """
    Cut `text` at every evidence span edge.

    Empty text with no spans yields a single empty chunk.
    """
    cuts = boundaries(len(text), spans)
    pairs = fill_gaps(len(text), pair_boundaries(cuts))
    chunks = tuple(text[start:end].strip() for start, end in pairs)
    return Partition(pairs=tuple(pairs), chunks=chunks)


def map_proof(pairs: Sequence[Span], proof_spans: Iterable[Span]) -> Tuple[int, ...]:
    """
    Chunk indices fully contained in any of `proof_spans`.

    A chunk only partially covered by a span is never included.
    """
    indices = set()
    for start, end in proof_spans:
        for i, (c_start, c_end) in enumerate(pairs):
            if c_start >= start and c_end <= end:
                indices.add(i)
    return tuple(sorted(indices))


def resolve_utterance(u_idx: int, utterance: UtteranceBuilder) -> ResolvedUtterance:
    partition = partition_text(utterance.original_text, utterance.evidence)
    facts: List[ResolvedFact] = []
    for f_idx, fact in enumerate(utterance.facts):
        if fact.proof_spans is None:
            label = fact.claim or fact.summary or f"fact {f_idx}"
            raise ValidationError(
                f"Fact {u_idx}:{f_idx} ({label!r}) has no quote command; proof is undefined",
                token=label,
            )
        facts.append(ResolvedFact(fact=fact, proof=map_proof(partition.pairs, fact.proof_spans)))
    return ResolvedUtterance(utterance=utterance, partition=partition, facts=tuple(facts))


def resolve_document(document: Sequence[UtteranceBuilder]) -> List[ResolvedUtterance]:
    """Second pass: partition every utterance and finalize every fact's proof."""
    return [resolve_utterance(i, u) for i, u in enumerate(document)]

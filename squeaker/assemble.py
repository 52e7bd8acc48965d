# squeaker/assemble.py
from __future__ import annotations

from typing import List, Optional, Sequence

from schemas.schemas_document import Document, Fact, FactRef, Utterance

from .contracts import FactRef as RawFactRef
from .resolve import ResolvedFact, ResolvedUtterance


def _refs(refs: Sequence[RawFactRef]) -> Optional[List[FactRef]]:
    if not refs:
        return None
    return [FactRef(utterance=r.utterance_index, fact=r.fact_index) for r in refs]


def _fact(resolved: ResolvedFact) -> Fact:
    f = resolved.fact
    return Fact(
        claim=f.claim,
        summary=f.summary,
        proof=list(resolved.proof),
        redacts=_refs(f.redacts),
        inspiration=_refs(f.inspiration),
    )


def assemble_document(resolved: Sequence[ResolvedUtterance]) -> Document:
    return Document(
        utterances=[
            Utterance(
                speaker=r.utterance.speaker,
                chunks=list(r.partition.chunks),
                facts=[_fact(f) for f in r.facts],
                original_text=r.utterance.original_text,
            )
            for r in resolved
        ]
    )

# squeaker/validate_document.py
from __future__ import annotations

from typing import List, Optional

from schemas.schemas_document import Document, FactRef


class DocumentValidationError(ValueError):
    """Fail-closed check of an assembled document."""


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise DocumentValidationError(msg)


def _check_refs(doc: Document, u_idx: int, f_idx: int, refs: Optional[List[FactRef]], kind: str) -> None:
    for ref in refs or []:
        where = f"utterance {u_idx} fact {f_idx} {kind}"
        _require(
            (ref.utterance, ref.fact) < (u_idx, f_idx),
            f"{where} points forward or at itself: {ref.utterance}:{ref.fact}",
        )
        _require(ref.utterance < len(doc.utterances), f"{where} references missing utterance {ref.utterance}")
        _require(
            ref.fact < len(doc.utterances[ref.utterance].facts),
            f"{where} references missing fact {ref.utterance}:{ref.fact}",
        )


def validate_document(doc: Document) -> None:
    """
    Checks every proof is strictly ascending and indexes the owning
    utterance's chunks, and every reference points strictly earlier.
    """
    for u_idx, u in enumerate(doc.utterances):
        _require(len(u.chunks) > 0, f"Utterance {u_idx} has no chunks.")
        for f_idx, f in enumerate(u.facts):
            for a, b in zip(f.proof, f.proof[1:]):
                _require(a < b, f"Utterance {u_idx} fact {f_idx} proof is not strictly ascending: {f.proof}")
            for i in f.proof:
                _require(0 <= i < len(u.chunks), f"Utterance {u_idx} fact {f_idx} proof index out of range: {i}")
            _check_refs(doc, u_idx, f_idx, f.redacts, "redacts")
            _check_refs(doc, u_idx, f_idx, f.inspiration, "inspiration")

# squeaker/render_audit_md.py
from __future__ import annotations

from typing import List, Optional

from schemas.schemas_document import Document, Fact, FactRef


def _md_escape(s: str) -> str:
    return s.replace("\n", " ").strip()


def _ref_label(doc: Document, ref: FactRef) -> str:
    target = doc.utterances[ref.utterance].facts[ref.fact]
    label = target.claim or target.summary or ""
    return f"`{ref.utterance}:{ref.fact}` {_md_escape(label)}".rstrip()


def _render_refs(doc: Document, name: str, refs: Optional[List[FactRef]]) -> List[str]:
    if not refs:
        return []
    out = [f"- {name}:"]
    for ref in refs:
        out.append(f"  - {_ref_label(doc, ref)}")
    return out


def _render_fact(doc: Document, chunks: List[str], f_idx: int, fact: Fact) -> List[str]:
    md: List[str] = [f"#### Fact {f_idx}", ""]
    if fact.claim is not None:
        md.append(f"- claim: {_md_escape(fact.claim)}")
    if fact.summary is not None:
        md.append(f"- summary: {_md_escape(fact.summary)}")
    md.append(f"- proof: `{fact.proof}`")
    md.extend(_render_refs(doc, "redacts", fact.redacts))
    md.extend(_render_refs(doc, "inspiration", fact.inspiration))
    md.append("")
    if fact.proof:
        for i in fact.proof:
            md.append(f"> [{i}] {_md_escape(chunks[i])}")
    else:
        md.append("_No chunk fully covered by the quote._")
    md.append("")
    return md


def render_audit_markdown(doc: Document, title: str = "Transcript Audit Preview") -> str:
    md: List[str] = [f"# {title}", ""]
    md.append(f"- utterances: `{len(doc.utterances)}`")
    md.append(f"- facts: `{sum(len(u.facts) for u in doc.utterances)}`")
    md.append("")

    for u_idx, u in enumerate(doc.utterances):
        md.append(f"## Utterance {u_idx} (`{u.speaker}`)")
        md.append("")
        md.append("```text")
        for i, chunk in enumerate(u.chunks):
            md.append(f"{i:03d}: {chunk}")
        md.append("```")
        md.append("")
        if not u.facts:
            md.append("_No facts._")
            md.append("")
        for f_idx, fact in enumerate(u.facts):
            md.extend(_render_fact(doc, u.chunks, f_idx, fact))

    return "\n".join(md)

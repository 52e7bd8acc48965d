"""Tests for text partitioning and proof mapping."""

import pytest

from squeaker.contracts import FactBuilder, UtteranceBuilder
from squeaker.errors import ValidationError
from squeaker.resolve import (
    boundaries,
    fill_gaps,
    map_proof,
    partition_text,
    resolve_document,
    resolve_utterance,
)


def test_no_evidence_yields_single_trimmed_chunk() -> None:
    p = partition_text("  padded text ", [])
    assert p.chunks == ("padded text",)
    assert p.pairs == ((0, 14),)


def test_empty_text_yields_single_empty_chunk() -> None:
    p = partition_text("", [])
    assert p.chunks == ("",)
    assert p.pairs == ((0, 0),)


@pytest.mark.parametrize(
    "spans",
    [
        [],
        [(5, 17)],
        [(5, 17), (2, 9)],
        [(0, 22)],
        [(3, 3), (10, 15), (10, 15)],
    ],
)
def test_partition_reproduces_text(spans) -> None:
    text = " the sky is blue today"
    p = partition_text(text, spans)
    assert "".join(text[a:b] for a, b in p.pairs) == text
    assert len(p.chunks) == len(p.pairs)


def test_overlapping_spans_split_into_shared_chunks() -> None:
    p = partition_text("abc def ghi", [(0, 8), (4, 11)])
    assert p.chunks == ("abc", "def", "ghi")
    assert map_proof(p.pairs, [(0, 8)]) == (0, 1)
    assert map_proof(p.pairs, [(4, 11)]) == (1, 2)


def test_boundaries_are_unique_and_sorted() -> None:
    assert boundaries(10, [(4, 6), (2, 6), (0, 4)]) == [0, 2, 4, 6, 10]


def test_fill_gaps_closes_holes() -> None:
    assert fill_gaps(10, [(2, 4), (6, 8)]) == [(0, 2), (2, 4), (4, 6), (6, 8), (8, 10)]
    assert fill_gaps(5, []) == [(0, 5)]


def test_partial_overlap_is_excluded() -> None:
    pairs = [(0, 5), (5, 17), (17, 22)]
    assert map_proof(pairs, [(5, 17)]) == (1,)
    assert map_proof(pairs, [(3, 10)]) == ()
    assert map_proof(pairs, [(17, 22), (0, 5), (0, 5)]) == (0, 2)


def test_resolve_scenario() -> None:
    u = UtteranceBuilder(speaker="alice", original_text=" the sky is blue today")
    u.facts.append(FactBuilder(claim="the sky's color", proof_spans=[(5, 17)]))
    u.evidence.append((5, 17))
    r = resolve_utterance(0, u)
    assert r.partition.chunks == ("the", "sky is blue", "today")
    assert r.facts[0].proof == (1,)


def test_fact_without_quote_is_rejected() -> None:
    u = UtteranceBuilder(speaker="a", original_text=" x")
    u.facts.append(FactBuilder(claim="orphan"))
    with pytest.raises(ValidationError) as exc:
        resolve_document([u])
    assert exc.value.token == "orphan"

"""Tests for the transcript state machine."""

import pytest

from squeaker.contracts import Command
from squeaker.errors import StructureError
from squeaker.ingest import ParserState, TranscriptParser, parse_transcript


SCENARIO = "alice: the sky is blue today\n- claim(the sky's color)\n- quote(sky is blue)"


def test_scenario_without_trailing_blank_line() -> None:
    records = parse_transcript(SCENARIO)
    assert len(records) == 1
    r = records[0]
    assert r.speaker == "alice"
    assert r.text == " the sky is blue today"
    assert [list(f) for f in r.facts] == [
        [Command(predicate="claim", argument="the sky's color")],
        [Command(predicate="quote", argument="sky is blue")],
    ]


def test_input_is_case_folded() -> None:
    records = parse_transcript("ALICE: Hello World\n- Quote(HELLO)")
    assert records[0].speaker == "alice"
    assert records[0].text == " hello world"
    assert records[0].facts[0][0] == Command(predicate="quote", argument="hello")


def test_text_lines_join_without_separator_then_collapse() -> None:
    records = parse_transcript("bob:\nfirst  line \n second\n- quote(first)")
    assert records[0].text == "first line second"


def test_continuation_line_extends_current_fact() -> None:
    records = parse_transcript("a: x\n- claim(c)\nquote(x)\n- summary(s)\n")
    assert [[c.predicate for c in f] for f in records[0].facts] == [["claim", "quote"], ["summary"]]


def test_blank_line_closes_utterance() -> None:
    records = parse_transcript("a: one\n- quote(one)\n\nb: two\n- quote(two)\n")
    assert [r.speaker for r in records] == ["a", "b"]
    assert [r.text for r in records] == [" one", " two"]


def test_extra_blank_line_between_turns_is_fatal() -> None:
    with pytest.raises(StructureError):
        parse_transcript("a: x\n- quote(x)\n\n\nb: y\n- quote(y)")


def test_leading_blank_line_is_fatal() -> None:
    with pytest.raises(StructureError):
        parse_transcript("\na: x\n- quote(x)")
    with pytest.raises(StructureError):
        parse_transcript("")


def test_missing_header_colon_is_fatal() -> None:
    with pytest.raises(StructureError):
        parse_transcript("a: x\n- quote(x)\n\nnot a header\n")


def test_text_without_facts_is_emitted_at_end() -> None:
    records = parse_transcript("a: just   talk")
    assert len(records) == 1
    assert records[0].text == " just talk"
    assert list(records[0].facts) == []


def test_empty_text_emits_nothing() -> None:
    assert parse_transcript("a:") == []


def test_feed_returns_utterance_only_on_blank() -> None:
    parser = TranscriptParser()
    assert parser.feed("a: hi") is None
    assert parser.state == ParserState.ACCUMULATING_UTTERANCE
    assert parser.feed("- quote(hi)") is None
    assert parser.state == ParserState.ACCUMULATING_FACTS
    done = parser.feed("")
    assert done is not None and done.speaker == "a"
    assert parser.state == ParserState.AWAITING_PLAYER
    assert parser.finish() is None


def test_crlf_line_endings() -> None:
    records = parse_transcript("a: x y\r\n- quote(x)\r\n\r\nb: z\r\n- quote(z)")
    assert [r.text for r in records] == [" x y", " z"]

"""Tests for line classification and command-token extraction."""

import pytest

from squeaker.classify import extract_commands, is_blank, match_fact, match_header
from squeaker.contracts import Command
from squeaker.errors import StructureError


def test_header_splits_speaker_and_text() -> None:
    assert match_header("alice: hello there") == ("alice", " hello there")


def test_header_label_is_trimmed() -> None:
    assert match_header("  bob  :") == ("bob", "")


def test_header_is_greedy_up_to_last_colon() -> None:
    assert match_header("a: b: c") == ("a: b", " c")


def test_header_without_colon_fails() -> None:
    with pytest.raises(StructureError) as exc:
        match_header("no colon here")
    assert exc.value.token == "no colon here"
    assert exc.value.kind == "StructureError"


def test_fact_marker() -> None:
    assert match_fact("  -  claim(x)") == "claim(x)"
    assert match_fact("-") == ""
    assert match_fact("claim(x)") is None


def test_blank() -> None:
    assert is_blank("")
    assert is_blank(" \t ")
    assert not is_blank(" x ")


def test_several_commands_on_one_line() -> None:
    cmds = extract_commands("claim[sky](the sky's color) quote(sky is blue)")
    assert cmds == [
        Command(predicate="claim", id="sky", argument="the sky's color"),
        Command(predicate="quote", id=None, argument="sky is blue"),
    ]


def test_id_only_command() -> None:
    assert extract_commands("redacts[x]") == [Command(predicate="redacts", id="x", argument=None)]


def test_whitespace_around_predicate_is_ignored() -> None:
    assert extract_commands("  claim  (x)  ") == [Command(predicate="claim", id=None, argument="x")]


def test_empty_brackets_count_as_absent() -> None:
    assert extract_commands("quote()") == [Command(predicate="quote", id=None, argument=None)]
    assert extract_commands("redacts[]") == [Command(predicate="redacts", id=None, argument=None)]


def test_line_without_commands() -> None:
    assert extract_commands("") == []
    assert extract_commands("   ") == []

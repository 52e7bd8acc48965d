# squeaker/ingest.py
from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from .classify import extract_commands, is_blank, match_fact, match_header
from .contracts import Command, RawUtterance


_WS_RE = re.compile(r"\s+")
_NEWLINE_RE = re.compile(r"\r?\n")


class ParserState(str, Enum):
    AWAITING_PLAYER = "awaiting_player"
    ACCUMULATING_UTTERANCE = "accumulating_utterance"
    ACCUMULATING_FACTS = "accumulating_facts"


class TranscriptParser:
    """
    Single-pass line scanner for squeaker transcripts.

    Feed one (already lowercased) line at a time; each call returns the
    utterance it completed, or None. Call finish() once at end of input to
    flush the utterance still in progress.
    """

    def __init__(self) -> None:
        self.state = ParserState.AWAITING_PLAYER
        self._reset()

    def _reset(self) -> None:
        self._speaker = ""
        self._text = ""
        self._facts: List[List[Command]] = []

    def _emit(self) -> RawUtterance:
        out = RawUtterance(
            speaker=self._speaker,
            text=self._text,
            facts=tuple(tuple(f) for f in self._facts),
        )
        self._reset()
        self.state = ParserState.AWAITING_PLAYER
        return out

    def _start_fact(self, command_text: str) -> None:
        self._facts.append(extract_commands(command_text))

    def feed(self, line: str) -> Optional[RawUtterance]:
        if self.state == ParserState.AWAITING_PLAYER:
            # only the blank line closing a fact block may separate turns
            self._speaker, self._text = match_header(line)
            self.state = ParserState.ACCUMULATING_UTTERANCE
            return None

        if self.state == ParserState.ACCUMULATING_UTTERANCE:
            command_text = match_fact(line)
            if command_text is None:
                self._text += line
                return None
            self._text = _WS_RE.sub(" ", self._text)
            self._start_fact(command_text)
            self.state = ParserState.ACCUMULATING_FACTS
            return None

        # ACCUMULATING_FACTS
        if is_blank(line):
            return self._emit()
        command_text = match_fact(line)
        if command_text is not None:
            self._start_fact(command_text)
        else:
            # continuation line: extracted on its own, not joined to the previous line
            self._facts[-1].extend(extract_commands(line))
        return None

    def finish(self) -> Optional[RawUtterance]:
        if self.state == ParserState.AWAITING_PLAYER:
            return None
        if self.state == ParserState.ACCUMULATING_UTTERANCE:
            # no fact marker arrived, so the text was never collapsed
            self._text = _WS_RE.sub(" ", self._text)
        if not self._text:
            self._reset()
            self.state = ParserState.AWAITING_PLAYER
            return None
        return self._emit()


def split_lines(text: str) -> List[str]:
    """Split raw transcript text into case-folded lines."""
    return [line.lower() for line in _NEWLINE_RE.split(text)]


def parse_transcript(text: str) -> List[RawUtterance]:
    """
    Deterministically parse a whole transcript into raw utterance records.

    Fails closed with StructureError on the first header line lacking a colon.
    """
    parser = TranscriptParser()
    out: List[RawUtterance] = []
    for line in split_lines(text):
        utterance = parser.feed(line)
        if utterance is not None:
            out.append(utterance)
    last = parser.finish()
    if last is not None:
        out.append(last)
    return out

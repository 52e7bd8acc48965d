# squeaker/run.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

from schemas.schemas_document import Document

from .assemble import assemble_document
from .contracts import RawUtterance
from .errors import SqueakerError
from .ingest import parse_transcript
from .interpret import interpret
from .io_utils import read_text, raw_utterances_to_dicts, write_json, write_text
from .render_audit_md import render_audit_markdown
from .resolve import resolve_document
from .validate_document import DocumentValidationError, validate_document


@dataclass(frozen=True)
class RunConfig:
    """
    One conversion run. Paths set to None (or "-") mean stdin / stdout.
    """
    input_path: Optional[str] = None
    output_path: Optional[str] = None
    parsed_path: Optional[str] = None
    audit_md_path: Optional[str] = None
    indent: Optional[int] = None
    check: bool = True


def convert_records(records: Sequence[RawUtterance], check: bool = True) -> Document:
    resolved = resolve_document(interpret(records))
    doc = assemble_document(resolved)

    # Final schema round-trip check (fail closed)
    Document.model_validate(doc.model_dump())
    if check:
        validate_document(doc)
    return doc


def convert(text: str, check: bool = True) -> Document:
    """Parse, interpret and resolve a whole transcript in memory."""
    return convert_records(parse_transcript(text), check=check)


def _status(msg: str) -> None:
    # stdout may carry the document itself
    print(msg, file=sys.stderr)


def run(cfg: RunConfig) -> Document:
    text = read_text(cfg.input_path)
    records = parse_transcript(text)
    # nothing is written unless the whole conversion succeeds
    doc = convert_records(records, check=cfg.check)

    if cfg.parsed_path:
        write_json(cfg.parsed_path, raw_utterances_to_dicts(records), indent=cfg.indent)
        _status(f"[OK] Wrote: {cfg.parsed_path}")

    write_json(cfg.output_path, doc.to_records(), indent=cfg.indent)

    n_facts = sum(len(u.facts) for u in doc.utterances)
    _status(f"[OK] Utterances: {len(doc.utterances)}  Facts: {n_facts}")
    if cfg.output_path and cfg.output_path != "-":
        _status(f"[OK] Wrote: {cfg.output_path}")

    if cfg.audit_md_path:
        write_text(cfg.audit_md_path, render_audit_markdown(doc) + "\n")
        _status(f"[OK] Wrote: {cfg.audit_md_path}")
    return doc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert a squeaker transcript into a JSON evidence document (fail-closed).")
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Transcript file (defaults to standard input).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Where to write the JSON document (defaults to standard output).",
    )
    parser.add_argument(
        "--parsed",
        default=None,
        help="Also write the parsed, uninterpreted utterance records to this path.",
    )
    parser.add_argument(
        "--audit-md",
        default=None,
        help="Also write a markdown audit preview to this path.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indent the JSON output (compact by default).",
    )
    parser.add_argument(
        "--no-check",
        action="store_true",
        help="Skip the post-assembly document check.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = RunConfig(
        input_path=args.input,
        output_path=args.output,
        parsed_path=args.parsed,
        audit_md_path=args.audit_md,
        indent=args.indent,
        check=(not args.no_check),
    )
    try:
        run(cfg)
    except SqueakerError as e:
        _status(f"[FAIL] {e.kind}: {e.message}")
        return 1
    except DocumentValidationError as e:
        _status(f"[FAIL] DocumentValidationError: {e}")
        return 1
    except FileNotFoundError as e:
        _status(f"[FAIL] FileNotFoundError: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

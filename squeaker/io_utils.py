# squeaker/io_utils.py
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .contracts import RawUtterance


PathLike = Union[str, Path]


def read_text(path: Optional[PathLike]) -> str:
    """
    Read a whole transcript. None or "-" means standard input.
    """
    if path is None or str(path) == "-":
        return sys.stdin.read()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Transcript file not found: {p}")
    return p.read_text(encoding="utf-8")


def dumps_json(obj: Any, indent: Optional[int] = 2) -> str:
    return json.dumps(obj, indent=indent, ensure_ascii=False)


def write_text(path: Optional[PathLike], text: str) -> None:
    if path is None or str(path) == "-":
        sys.stdout.write(text)
        return
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


def write_json(path: Optional[PathLike], obj: Any, indent: Optional[int] = 2) -> None:
    write_text(path, dumps_json(obj, indent=indent) + "\n")


def raw_utterances_to_dicts(records: Sequence[RawUtterance]) -> List[Dict[str, Any]]:
    return [
        {
            "speaker": r.speaker,
            "text": r.text,
            "facts": [
                [{"predicate": c.predicate, "id": c.id, "argument": c.argument} for c in fact]
                for fact in r.facts
            ],
        }
        for r in records
    ]

# schemas/schemas_document.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FactRef(BaseModel):
    model_config = ConfigDict(extra="forbid")

    utterance: int = Field(..., ge=0, description="Index of the referenced utterance")
    fact: int = Field(..., ge=0, description="Index of the fact within that utterance")


class Fact(BaseModel):
    model_config = ConfigDict(extra="forbid")

    claim: Optional[str] = None
    summary: Optional[str] = None

    # Indices into the owning utterance's chunks; always present.
    proof: List[int]

    # Omitted on output when the fact has none.
    redacts: Optional[List[FactRef]] = None
    inspiration: Optional[List[FactRef]] = None


class Utterance(BaseModel):
    model_config = ConfigDict(extra="forbid")

    speaker: str
    chunks: List[str] = Field(..., min_length=1)
    facts: List[Fact] = Field(default_factory=list)

    # Kept for audit rendering and checks, never serialized.
    original_text: str = Field(default="", exclude=True)


class Document(BaseModel):
    model_config = ConfigDict(extra="forbid")

    utterances: List[Utterance] = Field(default_factory=list)

    def to_records(self) -> List[Dict[str, Any]]:
        """Serializable form: one record per utterance, absent optionals dropped."""
        return [u.model_dump(mode="json", exclude_none=True) for u in self.utterances]

"""Business rules for the Concept domain — presence and trim validation only."""
from __future__ import annotations
from typing import Optional

from frayer.domain.common.result import Result
from frayer.domain.concept.models import ConceptRecord, fold_name

# Form / interchange column order
CONCEPT_FIELDS = ("name", "definition", "characteristics", "examples", "non_examples")


def validate_concept_content(data: dict) -> Result[ConceptRecord]:
    """
    Trims every field of a submitted form and requires a non-empty name.
    Returns Result.ok(record) or Result.fail(reason).
    """
    cleaned = {f: (data.get(f) or "").strip() for f in CONCEPT_FIELDS}
    if not cleaned["name"]:
        return Result.fail("Concept 'name' is required and cannot be empty.")
    return Result.ok(ConceptRecord(**cleaned))


def validate_record(record: ConceptRecord) -> Result[ConceptRecord]:
    """Same rules for an already-built record."""
    if not isinstance(record, ConceptRecord):
        return Result.fail(f"Expected a ConceptRecord, got {type(record).__name__}.")
    return validate_concept_content({f: getattr(record, f) for f in CONCEPT_FIELDS})


def is_same_identity(name: str, other: Optional[str]) -> bool:
    return other is not None and fold_name(name) == fold_name(other)

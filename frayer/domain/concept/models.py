"""Concept domain models — pure Python, no I/O or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


def fold_name(name: str) -> str:
    """Case-insensitive identity of a concept name."""
    return name.casefold()


@dataclass(frozen=True)
class ConceptRecord:
    name: str
    definition: str = ""
    characteristics: str = ""
    examples: str = ""
    non_examples: str = ""

    @property
    def key(self) -> str:
        return fold_name(self.name)

    def fields(self) -> tuple[str, str, str, str, str]:
        """The five columns in interchange order."""
        return (self.name, self.definition, self.characteristics, self.examples, self.non_examples)


@dataclass(frozen=True)
class SaveProposal:
    token: str
    record: ConceptRecord
    original_name: Optional[str] = None
    collision: Optional[ConceptRecord] = None  # a *different* record already holding the name

    @property
    def needs_confirmation(self) -> bool:
        return self.collision is not None


@dataclass(frozen=True)
class SaveOutcome:
    saved: bool
    selected_name: Optional[str]
    record: Optional[ConceptRecord] = None
    replaced: Optional[ConceptRecord] = None
    collision: Optional[ConceptRecord] = None


@dataclass(frozen=True)
class ImportOutcome:
    added: int
    skipped_lines: int = 0
    duplicates: int = 0


@dataclass(frozen=True)
class ExportPayload:
    filename: str
    content: str
    record_count: int = 0


@dataclass
class ParsedBatch:
    delimiter: str
    has_header: bool
    records: List[ConceptRecord] = field(default_factory=list)
    skipped: int = 0

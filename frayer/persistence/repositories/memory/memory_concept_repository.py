"""In-memory implementation of ConceptRepository — lives for the session only."""
from __future__ import annotations
from typing import Iterable, List, Optional

from frayer.domain.concept.models import ConceptRecord
from frayer.domain.concept.service import find_by_name
from frayer.persistence.interfaces.concept_repository import ConceptRepository


class InMemoryConceptRepository(ConceptRepository):

    def __init__(self, records: Iterable[ConceptRecord] = ()):
        self._records: tuple[ConceptRecord, ...] = tuple(records)

    def list_all(self) -> List[ConceptRecord]:
        return list(self._records)

    def get_by_name(self, name: str) -> Optional[ConceptRecord]:
        return find_by_name(self._records, name)

    def replace_all(self, records: List[ConceptRecord]) -> None:
        self._records = tuple(records)

    def count(self) -> int:
        return len(self._records)

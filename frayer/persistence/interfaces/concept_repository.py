"""Abstract repository interface for the ordered concept collection."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from frayer.domain.concept.models import ConceptRecord


class ConceptRepository(ABC):

    @abstractmethod
    def list_all(self) -> List[ConceptRecord]:
        """Return a snapshot of all records in stored (sorted) order."""
        ...

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[ConceptRecord]:
        """Case-insensitive lookup, or None."""
        ...

    @abstractmethod
    def replace_all(self, records: List[ConceptRecord]) -> None:
        """Commit a complete next state in one step — never patch records in place."""
        ...

    @abstractmethod
    def count(self) -> int:
        ...

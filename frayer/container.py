"""Dependency injection container — wires implementations to interfaces."""
from __future__ import annotations
from functools import lru_cache

from frayer.persistence.repositories.memory.memory_concept_repository import InMemoryConceptRepository
from frayer.application.concept_store import ConceptStore


@lru_cache(maxsize=1)
def get_concept_repo() -> InMemoryConceptRepository:
    return InMemoryConceptRepository()


@lru_cache(maxsize=1)
def get_concept_store() -> ConceptStore:
    return ConceptStore(repo=get_concept_repo())

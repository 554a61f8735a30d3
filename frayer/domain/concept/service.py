"""Domain service — pure list logic for saving, merging and removing concepts."""
from __future__ import annotations
from typing import List, Optional, Sequence

from frayer.domain.common.result import Result
from frayer.domain.concept.collation import sort_records
from frayer.domain.concept.models import ConceptRecord, SaveOutcome, fold_name
from frayer.domain.concept.rules import is_same_identity, validate_record


def find_by_name(records: Sequence[ConceptRecord], name: str) -> Optional[ConceptRecord]:
    key = fold_name(name)
    return next((r for r in records if r.key == key), None)


def without(records: Sequence[ConceptRecord], name: Optional[str]) -> List[ConceptRecord]:
    if name is None:
        return list(records)
    key = fold_name(name)
    return [r for r in records if r.key != key]


class ConceptDomainService:
    """
    Pure domain operations — no I/O, no state. Every mutating method takes the
    current list and returns the complete next list, already sorted, so the
    store can commit it in a single step.
    """

    def find_collision(
        self,
        records: Sequence[ConceptRecord],
        record: ConceptRecord,
        original_name: Optional[str] = None,
    ) -> Optional[ConceptRecord]:
        """
        The record that would be overwritten by saving `record`, unless that
        record is the one being edited (same folded name as `original_name`).
        """
        existing = find_by_name(records, record.name)
        if existing is None:
            return None
        if is_same_identity(existing.name, original_name):
            return None
        return existing

    def save(
        self,
        records: Sequence[ConceptRecord],
        record: ConceptRecord,
        original_name: Optional[str] = None,
    ) -> Result[tuple[List[ConceptRecord], SaveOutcome]]:
        """Remove old identity, remove any collision, insert, re-sort."""
        validation = validate_record(record)
        if not validation.is_success:
            return Result.fail(validation.error)
        record = validation.value

        replaced = find_by_name(records, record.name)
        remaining = without(without(records, original_name), record.name)
        remaining.append(record)

        outcome = SaveOutcome(
            saved=True,
            selected_name=record.name,
            record=record,
            replaced=replaced if replaced is not None and not is_same_identity(replaced.name, original_name) else None,
        )
        return Result.ok((sort_records(remaining), outcome))

    def upsert(self, records: Sequence[ConceptRecord], record: ConceptRecord) -> Result[tuple[List[ConceptRecord], SaveOutcome]]:
        """Plain create: replace a case-equal record in place, otherwise append."""
        validation = validate_record(record)
        if not validation.is_success:
            return Result.fail(validation.error)
        record = validation.value

        replaced = find_by_name(records, record.name)
        if replaced is None:
            updated = list(records) + [record]
        else:
            updated = [record if r.key == record.key else r for r in records]
        outcome = SaveOutcome(saved=True, selected_name=record.name, record=record, replaced=replaced)
        return Result.ok((sort_records(updated), outcome))

    def remove(self, records: Sequence[ConceptRecord], name: str) -> Result[List[ConceptRecord]]:
        if find_by_name(records, name) is None:
            return Result.fail(f"Concept '{name}' not found.")
        return Result.ok(without(records, name))

    def merge(
        self,
        records: Sequence[ConceptRecord],
        incoming: Sequence[ConceptRecord],
    ) -> tuple[List[ConceptRecord], int, int]:
        """
        Sequential import merge: each incoming record is added only if its
        folded name is not present *at that moment*, so the first of two
        same-named lines in one file wins. Never overwrites.
        Returns (sorted list, added, duplicates).
        """
        merged = list(records)
        seen = {r.key for r in merged}
        added = duplicates = 0
        for record in incoming:
            if record.key in seen:
                duplicates += 1
                continue
            merged.append(record)
            seen.add(record.key)
            added += 1
        return sort_records(merged), added, duplicates

    def search(self, records: Sequence[ConceptRecord], filter_text: str = "") -> List[ConceptRecord]:
        needle = fold_name(filter_text)
        return [r for r in records if needle in r.key]

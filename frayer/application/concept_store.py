"""Application service — the concept store: validate → domain op → commit."""
from __future__ import annotations
import logging
import uuid
from typing import Dict, List, Optional

from frayer.core import config
from frayer.domain.common.result import Result
from frayer.domain.concept.collation import sort_records
from frayer.domain.concept.models import (
    ConceptRecord,
    ExportPayload,
    ImportOutcome,
    SaveOutcome,
    SaveProposal,
    fold_name,
)
from frayer.domain.concept.rules import validate_record
from frayer.domain.concept.service import ConceptDomainService
from frayer.interchange.parser import parse_batch
from frayer.interchange.serializer import serialize
from frayer.persistence.interfaces.concept_repository import ConceptRepository

logger = logging.getLogger(__name__)


def _proposal_identity(proposal: SaveProposal) -> str:
    if proposal.original_name is not None:
        return fold_name(proposal.original_name)
    return proposal.record.key


class ConceptStore:
    """
    Owns the canonical, sorted, unique-by-name concept list for one session.

    Every mutation is computed on a copy by the domain service and committed
    with a single `replace_all`, so a failed or declined operation leaves the
    repository untouched. Successful mutations raise the unsaved-changes flag;
    only `acknowledge_export` (or an explicit `set_unsaved_changes`) lowers it.
    """

    # unconfirmed proposals kept at most; the oldest is dropped first
    MAX_PENDING_PROPOSALS = 32

    def __init__(self, repo: ConceptRepository):
        self._repo = repo
        self._domain = ConceptDomainService()
        self._pending: Dict[str, SaveProposal] = {}
        self._unsaved = False

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def find_by_name(self, name: str) -> Optional[ConceptRecord]:
        return self._repo.get_by_name(name)

    def list_concepts(self) -> List[ConceptRecord]:
        return self._repo.list_all()

    def search(self, filter_text: str = "") -> List[ConceptRecord]:
        return self._domain.search(self._repo.list_all(), filter_text)

    # ------------------------------------------------------------------
    # UNSAVED-CHANGES FLAG
    # ------------------------------------------------------------------
    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved

    def set_unsaved_changes(self, value: bool) -> None:
        self._unsaved = bool(value)

    def acknowledge_export(self) -> None:
        self._unsaved = False

    def _commit(self, records: List[ConceptRecord]) -> None:
        self._repo.replace_all(records)
        self._unsaved = True

    # ------------------------------------------------------------------
    # SORT
    # ------------------------------------------------------------------
    def sort(self) -> None:
        self._repo.replace_all(sort_records(self._repo.list_all()))

    # ------------------------------------------------------------------
    # CREATE
    # ------------------------------------------------------------------
    def create(self, record: ConceptRecord) -> Result[SaveOutcome]:
        """Upsert; a case-equal record is replaced (collision already resolved by the caller)."""
        result = self._domain.upsert(self._repo.list_all(), record)
        if not result.is_success:
            return Result.fail(result.error)
        records, outcome = result.value
        self._commit(records)
        logger.info("Created concept %r (replaced=%s)", outcome.selected_name, outcome.replaced is not None)
        return Result.ok(outcome)

    # ------------------------------------------------------------------
    # SAVE (create or edit-with-rename), two phases
    # ------------------------------------------------------------------
    def propose_save(self, record: ConceptRecord, original_name: Optional[str] = None) -> Result[SaveProposal]:
        """Validate and report the collision, if any. Does not mutate."""
        validation = validate_record(record)
        if not validation.is_success:
            return Result.fail(validation.error)
        record = validation.value

        collision = self._domain.find_collision(self._repo.list_all(), record, original_name)
        proposal = SaveProposal(
            token=str(uuid.uuid4()),
            record=record,
            original_name=original_name,
            collision=collision,
        )
        self._remember(proposal)
        return Result.ok(proposal)

    def _remember(self, proposal: SaveProposal) -> None:
        """One pending proposal per edited identity, bounded overall."""
        identity = _proposal_identity(proposal)
        for token, pending in list(self._pending.items()):
            if _proposal_identity(pending) == identity:
                del self._pending[token]
        self._pending[proposal.token] = proposal
        while len(self._pending) > self.MAX_PENDING_PROPOSALS:
            del self._pending[next(iter(self._pending))]

    @property
    def pending_proposals(self) -> int:
        return len(self._pending)

    def confirm_save(self, token: str, accept: bool) -> Result[SaveOutcome]:
        """
        Apply or abandon a proposal. Declining never mutates and keeps the
        selection on the record being edited so the caller can retry.
        """
        proposal = self._pending.pop(token, None)
        if proposal is None:
            return Result.fail(f"Save proposal '{token}' not found.")

        current = self._repo.list_all()
        collision = self._domain.find_collision(current, proposal.record, proposal.original_name)
        if collision != proposal.collision:
            return Result.fail("The concept list changed since the save was proposed. Please try again.")

        if not accept:
            logger.info("Save of %r declined", proposal.record.name)
            return Result.ok(SaveOutcome(
                saved=False,
                selected_name=proposal.original_name,
                collision=collision,
            ))

        result = self._domain.save(current, proposal.record, proposal.original_name)
        if not result.is_success:
            return Result.fail(result.error)
        records, outcome = result.value
        self._commit(records)
        logger.info(
            "Saved concept %r (was %r, overwrote=%r)",
            outcome.selected_name,
            proposal.original_name,
            outcome.replaced.name if outcome.replaced else None,
        )
        return Result.ok(outcome)

    def save(
        self,
        record: ConceptRecord,
        original_name: Optional[str] = None,
        overwrite: bool = False,
    ) -> Result[SaveOutcome]:
        """Propose and confirm in one call; a collision is accepted only with `overwrite`."""
        return self.propose_save(record, original_name).then(
            lambda proposal: self.confirm_save(
                proposal.token, accept=overwrite or not proposal.needs_confirmation
            )
        )

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------
    def delete(self, name: str) -> Result[bool]:
        result = self._domain.remove(self._repo.list_all(), name)
        if not result.is_success:
            return Result.fail(result.error)
        self._commit(result.value)
        logger.info("Deleted concept %r", name)
        return Result.ok(True)

    # ------------------------------------------------------------------
    # IMPORT / EXPORT
    # ------------------------------------------------------------------
    def import_text(self, text: str) -> Result[ImportOutcome]:
        batch = parse_batch(text)
        records, added, duplicates = self._domain.merge(self._repo.list_all(), batch.records)
        logger.info(
            "Import: %d added, %d duplicate(s), %d malformed line(s), delimiter %r",
            added, duplicates, batch.skipped, batch.delimiter,
        )
        if added == 0:
            return Result.fail("No new concepts could be imported.")
        self._commit(records)
        return Result.ok(ImportOutcome(added=added, skipped_lines=batch.skipped, duplicates=duplicates))

    def export_text(self) -> Result[ExportPayload]:
        if self._repo.count() == 0:
            return Result.fail("There is nothing to export.")
        records = self._repo.list_all()
        logger.info("Export: %d concept(s) to %s", len(records), config.EXPORT_FILENAME)
        return Result.ok(ExportPayload(
            filename=config.EXPORT_FILENAME,
            content=serialize(records),
            record_count=len(records),
        ))

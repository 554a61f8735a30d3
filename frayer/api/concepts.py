"""Concept store API endpoints for the single-page UI."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from frayer.application.concept_store import ConceptStore
from frayer.container import get_concept_store
from frayer.domain.concept.models import ConceptRecord, SaveOutcome, SaveProposal
from frayer.domain.concept.rules import validate_concept_content

router = APIRouter(tags=["concepts"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class ConceptBody(BaseModel):
    name: str
    definition: str = ""
    characteristics: str = ""
    examples: str = ""
    non_examples: str = ""


class ProposalBody(ConceptBody):
    original_name: Optional[str] = None


class SaveBody(ProposalBody):
    overwrite: bool = False


class DecisionBody(BaseModel):
    accept: bool


class ImportBody(BaseModel):
    text: str


class UnsavedBody(BaseModel):
    unsaved: bool


# ------------------------------------------------------------------
# Serializers
# ------------------------------------------------------------------
def _serialize_record(r: Optional[ConceptRecord]) -> Optional[dict]:
    if r is None:
        return None
    return {
        "name": r.name,
        "definition": r.definition,
        "characteristics": r.characteristics,
        "examples": r.examples,
        "non_examples": r.non_examples,
    }


def _serialize_proposal(p: SaveProposal) -> dict:
    return {
        "token": p.token,
        "record": _serialize_record(p.record),
        "original_name": p.original_name,
        "collision": _serialize_record(p.collision),
    }


def _serialize_outcome(o: SaveOutcome, store: ConceptStore) -> dict:
    return {
        "saved": o.saved,
        "selected_name": o.selected_name,
        "record": _serialize_record(o.record),
        "replaced": _serialize_record(o.replaced),
        "collision": _serialize_record(o.collision),
        "unsaved": store.has_unsaved_changes,
    }


def _record_from_body(body: ConceptBody) -> ConceptRecord:
    result = validate_concept_content(body.model_dump())
    if not result.is_success:
        raise HTTPException(status_code=400, detail=result.error)
    return result.value


# ------------------------------------------------------------------
# Health check
# ------------------------------------------------------------------
@router.get("/health")
def health():
    return {"status": "ok"}


# ------------------------------------------------------------------
# Unsaved-changes flag
# ------------------------------------------------------------------
@router.get("/state/unsaved")
def get_unsaved(store: ConceptStore = Depends(get_concept_store)):
    return {"unsaved": store.has_unsaved_changes}


@router.put("/state/unsaved")
def set_unsaved(body: UnsavedBody, store: ConceptStore = Depends(get_concept_store)):
    store.set_unsaved_changes(body.unsaved)
    return {"unsaved": store.has_unsaved_changes}


# ------------------------------------------------------------------
# Import / export
# ------------------------------------------------------------------
@router.post("/import")
def import_concepts(body: ImportBody, store: ConceptStore = Depends(get_concept_store)):
    result = store.import_text(body.text)
    if not result.is_success:
        raise HTTPException(status_code=400, detail=result.error)
    outcome = result.value
    return {
        "added": outcome.added,
        "duplicates": outcome.duplicates,
        "skipped_lines": outcome.skipped_lines,
        "unsaved": store.has_unsaved_changes,
    }


@router.get("/export")
def export_concepts(store: ConceptStore = Depends(get_concept_store)):
    result = store.export_text()
    if not result.is_success:
        raise HTTPException(status_code=400, detail=result.error)
    payload = result.value
    return Response(
        content=payload.content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{payload.filename}"'},
    )


@router.post("/export/ack")
def acknowledge_export(store: ConceptStore = Depends(get_concept_store)):
    store.acknowledge_export()
    return {"unsaved": store.has_unsaved_changes}


# ------------------------------------------------------------------
# Save protocol
# ------------------------------------------------------------------
@router.post("/concepts/proposals", status_code=status.HTTP_201_CREATED)
def propose_save(body: ProposalBody, store: ConceptStore = Depends(get_concept_store)):
    result = store.propose_save(_record_from_body(body), original_name=body.original_name)
    if not result.is_success:
        raise HTTPException(status_code=400, detail=result.error)
    return _serialize_proposal(result.value)


@router.post("/concepts/proposals/{token}")
def confirm_save(token: str, body: DecisionBody, store: ConceptStore = Depends(get_concept_store)):
    result = store.confirm_save(token, accept=body.accept)
    if not result.is_success:
        raise HTTPException(status_code=400, detail=result.error)
    return _serialize_outcome(result.value, store)


@router.put("/concepts/")
def save_concept(body: SaveBody, store: ConceptStore = Depends(get_concept_store)):
    result = store.save(_record_from_body(body), original_name=body.original_name, overwrite=body.overwrite)
    if not result.is_success:
        raise HTTPException(status_code=400, detail=result.error)
    return _serialize_outcome(result.value, store)


# ------------------------------------------------------------------
# Concept endpoints
# ------------------------------------------------------------------
@router.get("/concepts/")
def list_concepts(q: str = "", store: ConceptStore = Depends(get_concept_store)):
    return [_serialize_record(r) for r in store.search(q)]


@router.get("/concepts/{name:path}")
def get_concept(name: str, store: ConceptStore = Depends(get_concept_store)):
    record = store.find_by_name(name)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Concept '{name}' not found")
    return _serialize_record(record)


@router.delete("/concepts/{name:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_concept(name: str, store: ConceptStore = Depends(get_concept_store)):
    result = store.delete(name)
    if not result.is_success:
        raise HTTPException(status_code=404, detail=result.error)

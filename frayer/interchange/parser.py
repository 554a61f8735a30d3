"""Record parser — delimited text blob to concept records."""
from __future__ import annotations
import logging
import re
from typing import List, Optional, Sequence, Tuple

from frayer.core import config
from frayer.domain.concept.models import ConceptRecord, ParsedBatch
from frayer.domain.concept.service import ConceptDomainService
from frayer.interchange.tokenizer import split_records, tokenize

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")
_COLUMNS = 5


def detect_delimiter(first_line: str) -> str:
    return ";" if ";" in first_line else ","


def has_header(first_line: str, keyword: Optional[str] = None) -> bool:
    return (keyword or config.HEADER_KEYWORD).lower() in first_line.lower()


def record_from_fields(fields: Sequence[str], placeholder: Optional[str] = None) -> ConceptRecord:
    values = [f.strip() for f in fields[:_COLUMNS]]
    values += [""] * (_COLUMNS - len(values))
    name, definition, characteristics, examples, non_examples = values
    return ConceptRecord(
        name=name or (placeholder or config.UNNAMED_PLACEHOLDER),
        definition=definition,
        characteristics=characteristics,
        examples=examples,
        non_examples=non_examples,
    )


def parse_batch(text: str) -> ParsedBatch:
    """
    Parse a whole import file. The delimiter and header are decided from the
    first physical line only; records are then split with quoted line breaks
    kept inside their field. Records with fewer than two fields are skipped.
    No deduplication happens here; see `parse` for the merge.
    """
    if text.startswith(config.BYTE_ORDER_MARK):
        text = text[len(config.BYTE_ORDER_MARK):]
    first_line = _LINE_BREAK.split(text, maxsplit=1)[0]

    batch = ParsedBatch(delimiter=detect_delimiter(first_line), has_header=has_header(first_line))
    lines = split_records(text, batch.delimiter)
    start = 1 if batch.has_header else 0

    for number, raw in enumerate(lines[start:], start=start + 1):
        line = raw.strip()
        if not line:
            continue
        fields = tokenize(line, batch.delimiter)
        if len(fields) < 2:
            logger.debug("Skipping malformed record %d: %d field(s)", number, len(fields))
            batch.skipped += 1
            continue
        batch.records.append(record_from_fields(fields))

    return batch


def parse_records(text: str) -> List[ConceptRecord]:
    return parse_batch(text).records


def parse(text: str, existing: Sequence[ConceptRecord] = ()) -> Tuple[List[ConceptRecord], int]:
    """Parse `text` and merge it into `existing`; returns (sorted records, imported count)."""
    merged, added, _ = ConceptDomainService().merge(existing, parse_records(text))
    return merged, added

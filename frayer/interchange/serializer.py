"""Record serializer — concept records to semicolon-delimited export text."""
from __future__ import annotations
from typing import Iterable

from frayer.core import config
from frayer.domain.concept.models import ConceptRecord


def escape_field(value: str, delimiter: str = config.EXPORT_DELIMITER) -> str:
    """Quote a field only when it holds the delimiter or a newline."""
    if delimiter in value or "\n" in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def serialize_record(record: ConceptRecord) -> str:
    if not isinstance(record, ConceptRecord):
        raise TypeError(f"Expected ConceptRecord, got {type(record).__name__}")
    return config.EXPORT_DELIMITER.join(escape_field(f) for f in record.fields())


def serialize(records: Iterable[ConceptRecord]) -> str:
    """BOM, fixed header, then one line per record, each newline-terminated."""
    lines = [config.EXPORT_DELIMITER.join(config.HEADER_COLUMNS)]
    lines.extend(serialize_record(r) for r in records)
    return config.BYTE_ORDER_MARK + "".join(line + "\n" for line in lines)

"""Field tokenizer for one delimited line."""
from __future__ import annotations
from typing import List

QUOTE = '"'


def tokenize(line: str, delimiter: str) -> List[str]:
    """
    Split `line` on `delimiter`, honouring double-quoted fields and `""` escapes.

    An unterminated quote is not an error: the scan reaches the end still
    inside quotes and the accumulated text becomes the last field.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        char = line[i]
        if in_quotes:
            if char == QUOTE:
                if i + 1 < n and line[i + 1] == QUOTE:
                    current.append(QUOTE)
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(char)
        elif char == QUOTE:
            in_quotes = True
        elif char == delimiter:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields


def split_records(text: str, delimiter: str) -> List[str]:
    """
    Split `text` into record lines on `\\n` / `\\r\\n`, keeping line breaks that
    sit inside a quoted field.

    A quote opens a field only at the start of that field (leading blanks
    allowed), so a stray quote inside unquoted text cannot swallow the lines
    that follow. An unterminated quoted field runs to the end of the text.
    """
    records: List[str] = []
    current: List[str] = []
    in_quotes = False
    field_start = True
    i = 0
    n = len(text)

    while i < n:
        char = text[i]
        if in_quotes:
            if char == QUOTE:
                if i + 1 < n and text[i + 1] == QUOTE:
                    current.append(QUOTE)
                    i += 1
                else:
                    in_quotes = False
            current.append(char)
        elif char == "\n":
            if current and current[-1] == "\r":
                current.pop()
            records.append("".join(current))
            current = []
            field_start = True
        else:
            if char == QUOTE and field_start:
                in_quotes = True
            current.append(char)
            if char not in " \t":
                field_start = char == delimiter
        i += 1

    records.append("".join(current))
    return records

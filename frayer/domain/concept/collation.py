"""
Hungarian collation for concept names.

Three-level key in the usual collation sense:
  * primary   — the letter of the Hungarian alphabet (digraphs are single letters,
                ö/ő and ü/ű follow o/ó and u/ú),
  * secondary — accent (a < á, o < ó, ö < ő, ...),
  * tertiary  — case, lowercase first.
Whitespace sorts before punctuation, punctuation before digits, digits before letters.
"""
from __future__ import annotations
import unicodedata
from typing import Iterable, List, Tuple

from frayer.domain.concept.models import ConceptRecord

ALPHABET: Tuple[str, ...] = (
    "a", "b", "c", "cs", "d", "dz", "dzs", "e", "f", "g", "gy", "h", "i", "j", "k",
    "l", "ly", "m", "n", "ny", "o", "ö", "p", "q", "r", "s", "sz", "t", "ty", "u",
    "ü", "v", "w", "x", "y", "z", "zs",
)
_LETTER_RANK = {letter: rank for rank, letter in enumerate(ALPHABET)}

# accented vowel -> (base letter, secondary weight)
_VOWELS = {
    "á": ("a", 1),
    "é": ("e", 1),
    "í": ("i", 1),
    "ó": ("o", 1),
    "ö": ("ö", 0),
    "ő": ("ö", 1),
    "ú": ("u", 1),
    "ü": ("ü", 0),
    "ű": ("ü", 1),
}

# doubled long digraphs expand to two letters: "ssz" is sz + sz
_DOUBLED = {
    "ddzs": "dzs",
    "ccs": "cs",
    "ddz": "dz",
    "ggy": "gy",
    "lly": "ly",
    "nny": "ny",
    "ssz": "sz",
    "tty": "ty",
    "zzs": "zs",
}
_DIGRAPHS = ("dzs", "cs", "dz", "gy", "ly", "ny", "sz", "ty", "zs")

_SPACE, _PUNCT, _DIGIT, _LETTER, _FOREIGN = range(5)

Weight = Tuple[int, int]
SortKey = Tuple[Tuple[Weight, ...], Tuple[int, ...], Tuple[int, ...]]


def _units(text: str) -> List[Tuple[str, str]]:
    """Split text into (collation unit, original spelling) pairs."""
    units: List[Tuple[str, str]] = []
    i = 0
    while i < len(text):
        for pattern, letter in _DOUBLED.items():
            chunk = text[i:i + len(pattern)]
            if chunk.lower() == pattern:
                units.append((letter, chunk[0]))
                units.append((letter, chunk[1:]))
                i += len(pattern)
                break
        else:
            for digraph in _DIGRAPHS:
                chunk = text[i:i + len(digraph)]
                if chunk.lower() == digraph:
                    units.append((digraph, chunk))
                    i += len(digraph)
                    break
            else:
                units.append((text[i].lower(), text[i]))
                i += 1
    return units


def _weigh(unit: str, spelled: str) -> Tuple[Weight, int, int]:
    tertiary = 1 if spelled[:1].isupper() else 0

    if unit in _LETTER_RANK:
        return (_LETTER, _LETTER_RANK[unit]), 0, tertiary
    if unit in _VOWELS:
        base, secondary = _VOWELS[unit]
        return (_LETTER, _LETTER_RANK[base]), secondary, tertiary
    if unit.isspace():
        return (_SPACE, 0), 0, 0
    if unit.isdigit():
        return (_DIGIT, unicodedata.digit(unit, ord(unit))), 0, 0
    if unit.isalpha():
        base = unicodedata.normalize("NFD", unit)[0]
        if base in _LETTER_RANK:
            return (_LETTER, _LETTER_RANK[base]), 2, tertiary
        return (_FOREIGN, ord(base)), 0, tertiary
    return (_PUNCT, ord(unit[0])), 0, 0


def sort_key(name: str) -> SortKey:
    primary, secondary, tertiary = [], [], []
    for unit, spelled in _units(unicodedata.normalize("NFC", name)):
        p, s, t = _weigh(unit, spelled)
        primary.append(p)
        secondary.append(s)
        tertiary.append(t)
    return tuple(primary), tuple(secondary), tuple(tertiary)


def sort_records(records: Iterable[ConceptRecord]) -> List[ConceptRecord]:
    """Stable sort by Hungarian collation of the name."""
    return sorted(records, key=lambda r: sort_key(r.name))

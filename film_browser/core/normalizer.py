"""
Tolerant row normalisation.

Input files name their columns inconsistently ("Title" vs "film", "IMDb" vs
"score", ...) and format numbers with currency symbols and thousands
separators. `normalize` reconciles all of that into a canonical `Record`.
It never raises: malformed values become NaN / None.
"""
from __future__ import annotations

import math
import re
from typing import Dict, Iterable, List, Optional, Tuple

from .record import RawRow, RawValue, Record

# Priority-ordered aliases per canonical field. Case-sensitive; the first
# alias holding a non-empty value wins and later aliases are not consulted.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "title": ("title", "Title", "name", "Name", "film", "Film"),
    "year": ("year", "Year", "release_year", "ReleaseYear"),
    "director": ("director", "Director", "dir", "Dir"),
    "rating": ("imdb_rating", "IMDb", "imdb", "rating", "Rating", "score", "Score"),
    "runtime": (
        "runtime", "Runtime", "running_time", "RunningTime",
        "minutes", "Minutes", "duration", "Duration",
    ),
    "gross": ("gross", "Gross", "box_office", "BoxOffice", "revenue", "Revenue"),
}

# Thousands separator, dollar, full-width and half-width yen.
_STRIP_CHARS = re.compile(r"[,$￥¥]")
_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def pick(row: RawRow, keys: Iterable[str]) -> RawValue:
    """Return the first value under `keys` that is present and non-blank."""
    for key in keys:
        value = row.get(key)
        if value is None:
            continue
        if str(value).strip() == "":
            continue
        return value
    return None


def to_number(value: RawValue) -> float:
    """
    Coerce a cell to float.

    "$1,234" -> 1234.0, "￥500" -> 500.0, "abc" -> nan, None -> nan.
    Non-finite results (overflow, "inf", "nan") are reported as nan.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    text = _STRIP_CHARS.sub("", str(value)).strip()
    if not _DECIMAL.match(text):
        return math.nan
    number = float(text)
    return number if math.isfinite(number) else math.nan


def _to_text(value: RawValue) -> Optional[str]:
    return None if value is None else str(value)


def normalize(row: RawRow) -> Record:
    return Record(
        title=_to_text(pick(row, FIELD_ALIASES["title"])),
        year=to_number(pick(row, FIELD_ALIASES["year"])),
        director=_to_text(pick(row, FIELD_ALIASES["director"])),
        rating=to_number(pick(row, FIELD_ALIASES["rating"])),
        runtime=to_number(pick(row, FIELD_ALIASES["runtime"])),
        gross=to_number(pick(row, FIELD_ALIASES["gross"])),
        raw=row,
    )


def normalize_rows(rows: Iterable[RawRow]) -> List[Record]:
    return [normalize(row) for row in rows]

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from .exceptions import DataLoadError

logger = logging.getLogger(__name__)

_SEPARATORS = {".csv": ",", ".tsv": "\t", ".txt": None}


def read_rows(path: Path | str) -> List[Dict[str, str]]:
    """
    Read a delimited text file into an ordered list of column -> string rows.

    Every cell is kept as text (no dtype inference, no NA conversion) so the
    normaliser sees exactly what the file holds; blank cells stay "".

    :raises DataLoadError: if the file is missing or cannot be parsed.
    """
    path = Path(path)
    if not path.is_file():
        raise DataLoadError(f"Data file not found: {path}")

    sep = _SEPARATORS.get(path.suffix.lower(), ",")

    logger.info("Reading rows", extra={"path": str(path)})
    try:
        frame = pd.read_csv(
            path,
            sep=sep,
            engine="python" if sep is None else "c",
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataLoadError(f"Could not parse {path.name}: {e}") from e

    rows = frame.to_dict(orient="records")
    logger.info("Read rows", extra={"path": str(path), "n_rows": len(rows)})
    return rows

"""Shared CSV reading for DB2 table exports."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=BaseModel)


def iter_rows(csv_text: str, row_model: type[RowT], table: str) -> Iterator[RowT]:
    """Yield validated rows of a DB2 CSV export.

    Rows that fail validation are logged and skipped; a table export
    routinely contains a handful of rows with empty or non-numeric cells.
    """
    reader = csv.DictReader(io.StringIO(csv_text))
    skipped = 0
    for line_no, raw in enumerate(reader, start=2):
        try:
            yield row_model.model_validate(raw)
        except ValidationError as exc:
            skipped += 1
            logger.debug(
                "%s: skipping malformed row at line %d: %s",
                table,
                line_no,
                exc.errors()[0]["msg"] if exc.errors() else exc,
            )
    if skipped:
        logger.warning("%s: skipped %d malformed rows", table, skipped)


def read_table(path: str | Path) -> str:
    """Read a CSV export from disk."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"DB2 table not found: {path}")
    return path.read_text(encoding="utf-8")

"""The ItemSparse DB2 table."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .base import iter_rows, read_table

DEFAULT_ITEM_LEVEL = 1


class Db2ItemSparse(BaseModel):
    id: int = Field(alias="ID")
    item_level: int = Field(alias="ItemLevel")

    model_config = ConfigDict(populate_by_name=True)


class Db2ItemSparseTable:
    """Item ids mapped to their base item level."""

    def __init__(self, base_item_levels: dict[int, int] | None = None) -> None:
        self.base_item_levels = base_item_levels or {}

    @classmethod
    def from_csv(cls, csv_text: str) -> Db2ItemSparseTable:
        base_item_levels = {
            row.id: row.item_level
            for row in iter_rows(csv_text, Db2ItemSparse, "ItemSparse")
        }
        return cls(base_item_levels)

    @classmethod
    def from_file(cls, path: str | Path) -> Db2ItemSparseTable:
        return cls.from_csv(read_table(path))

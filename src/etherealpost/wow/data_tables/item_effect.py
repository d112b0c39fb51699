"""The ItemEffect DB2 table."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .base import iter_rows, read_table

logger = logging.getLogger(__name__)

LEARN_TRIGGER_TYPE = 6


class Db2ItemEffect(BaseModel):
    id: int = Field(alias="ID")
    spell_id: int = Field(alias="SpellID")
    # What activates the spell; 6 means "learn".
    trigger_type: int = Field(alias="TriggerType")
    parent_item_id: int = Field(alias="ParentItemID")

    model_config = ConfigDict(populate_by_name=True)


class Db2ItemEffects:
    """Item ids mapped to the spell they teach when used.

    Cross referenced with the BattlePetSpecies table this maps pet items
    to the species they teach.
    """

    def __init__(self, item_to_spell_learn: dict[int, int] | None = None) -> None:
        self.item_to_spell_learn = item_to_spell_learn or {}

    @classmethod
    def from_csv(cls, csv_text: str) -> Db2ItemEffects:
        item_to_spell_learn: dict[int, int] = {}
        for row in iter_rows(csv_text, Db2ItemEffect, "ItemEffect"):
            if row.trigger_type != LEARN_TRIGGER_TYPE:
                continue
            if row.parent_item_id in item_to_spell_learn:
                logger.debug(
                    "Item %d has several learn spells; keeping %d, ignoring %d",
                    row.parent_item_id,
                    item_to_spell_learn[row.parent_item_id],
                    row.spell_id,
                )
                continue
            item_to_spell_learn[row.parent_item_id] = row.spell_id
        return cls(item_to_spell_learn)

    @classmethod
    def from_file(cls, path: str | Path) -> Db2ItemEffects:
        return cls.from_csv(read_table(path))

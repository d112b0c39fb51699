"""The BattlePetSpecies DB2 table."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .base import iter_rows, read_table

logger = logging.getLogger(__name__)


class Db2BattlePetSpecies(BaseModel):
    id: int = Field(alias="ID")
    # Spell that summons the pet; used to reverse-lookup uncaged pet items.
    summon_spell_id: int = Field(alias="SummonSpellID")

    model_config = ConfigDict(populate_by_name=True)


class Db2BattlePetSpeciesTable:
    """Summon spell ids mapped to battle pet species ids."""

    def __init__(self, spell_to_species: dict[int, int] | None = None) -> None:
        self.spell_to_species = spell_to_species or {}

    @classmethod
    def from_csv(cls, csv_text: str) -> Db2BattlePetSpeciesTable:
        spell_to_species: dict[int, int] = {}
        for row in iter_rows(csv_text, Db2BattlePetSpecies, "BattlePetSpecies"):
            # Species without a summon spell cannot be caged or sold.
            if row.summon_spell_id == 0:
                continue

            # First species wins on a shared spell (15048, 25162, 53082, ...).
            if row.summon_spell_id in spell_to_species:
                logger.debug(
                    "Summon spell %d already maps to species %d; ignoring species %d",
                    row.summon_spell_id,
                    spell_to_species[row.summon_spell_id],
                    row.id,
                )
                continue

            spell_to_species[row.summon_spell_id] = row.id

        return cls(spell_to_species)

    @classmethod
    def from_file(cls, path: str | Path) -> Db2BattlePetSpeciesTable:
        return cls.from_csv(read_table(path))

    def species_for_spell(self, spell_id: int) -> int | None:
        return self.spell_to_species.get(spell_id)

"""Static game data needed to summarize auctions.

Loads the DB2 table exports once and precomputes the lookups the
summary needs:

- curve id -> item level curve
- item id -> base item level
- item id -> battle pet species, for pet items that are not caged
- the set of equippable item ids
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..common.config import DataTablesSettings
from ..parse.item_level import ItemLevelCurve, ItemLevelCurvePoints
from .data_tables import (
    Db2BattlePetSpeciesTable,
    Db2CurvePoints,
    Db2ItemBonuses,
    Db2ItemEffects,
    Db2Items,
    Db2ItemSparseTable,
)

logger = logging.getLogger(__name__)


def map_items_to_pets(
    items: Db2Items,
    effects: Db2ItemEffects,
    species: Db2BattlePetSpeciesTable,
) -> dict[int, int]:
    """Map companion pet items to the species their learn spell summons."""
    item_to_pet: dict[int, int] = {}
    for item_id in items.pet_item_ids:
        spell_id = effects.item_to_spell_learn.get(item_id)
        if spell_id is None:
            continue
        species_id = species.species_for_spell(spell_id)
        if species_id is None:
            logger.debug("Pet item %d teaches unknown spell %d", item_id, spell_id)
            continue
        item_to_pet[item_id] = species_id
    return item_to_pet


class GameData:
    """Precomputed lookups built from the DB2 tables."""

    def __init__(
        self,
        bonuses: Db2ItemBonuses,
        curve_points: ItemLevelCurvePoints,
        base_ilvls: dict[int, int],
        item_to_pet: dict[int, int],
        equippable_items: set[int],
    ) -> None:
        self.bonuses = bonuses
        self.curve_points = curve_points
        self.base_ilvls = base_ilvls
        self.item_to_pet = item_to_pet
        self.equippable_items = equippable_items

    @classmethod
    def from_tables(
        cls,
        items: Db2Items,
        bonuses: Db2ItemBonuses,
        curves: Db2CurvePoints,
        species: Db2BattlePetSpeciesTable,
        effects: Db2ItemEffects,
        sparse: Db2ItemSparseTable,
    ) -> GameData:
        return cls(
            bonuses=bonuses,
            curve_points=ItemLevelCurve.for_whole_table(curves),
            base_ilvls=dict(sparse.base_item_levels),
            item_to_pet=map_items_to_pets(items, effects, species),
            equippable_items=set(items.equippable_item_ids),
        )

    @classmethod
    def from_directory(
        cls,
        data_dir: str | Path | None = None,
        tables: DataTablesSettings | None = None,
    ) -> GameData:
        """Load every table from ``data_dir``.

        Raises:
            FileNotFoundError: If a table export is missing.
        """
        tables = tables or DataTablesSettings()
        root = Path(data_dir or tables.data_dir)
        logger.info("Loading game data tables from %s", root)

        game_data = cls.from_tables(
            items=Db2Items.from_file(root / tables.item_file),
            bonuses=Db2ItemBonuses.from_file(root / tables.item_bonus_file),
            curves=Db2CurvePoints.from_file(root / tables.curve_point_file),
            species=Db2BattlePetSpeciesTable.from_file(root / tables.battle_pet_species_file),
            effects=Db2ItemEffects.from_file(root / tables.item_effect_file),
            sparse=Db2ItemSparseTable.from_file(root / tables.item_sparse_file),
        )
        logger.info(
            "Game data loaded: %d curves, %d base item levels, %d pet items, %d equippable items",
            len(game_data.curve_points),
            len(game_data.base_ilvls),
            len(game_data.item_to_pet),
            len(game_data.equippable_items),
        )
        return game_data

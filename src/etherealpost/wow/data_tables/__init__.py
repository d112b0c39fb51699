"""Parsers for World of Warcraft DB2 tables exported to CSV."""

from .battle_pet_species import Db2BattlePetSpecies, Db2BattlePetSpeciesTable
from .curve_points import Db2CurvePoint, Db2CurvePoints
from .item import Db2Item, Db2Items
from .item_bonus import Db2ItemBonus, Db2ItemBonuses
from .item_effect import Db2ItemEffect, Db2ItemEffects
from .item_sparse import Db2ItemSparse, Db2ItemSparseTable

__all__ = [
    "Db2BattlePetSpecies",
    "Db2BattlePetSpeciesTable",
    "Db2CurvePoint",
    "Db2CurvePoints",
    "Db2Item",
    "Db2Items",
    "Db2ItemBonus",
    "Db2ItemBonuses",
    "Db2ItemEffect",
    "Db2ItemEffects",
    "Db2ItemSparse",
    "Db2ItemSparseTable",
]

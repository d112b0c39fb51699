"""The ItemBonus DB2 table and item level bonus resolution."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .base import iter_rows, read_table

# Bonus types which change an item's level.
ITEM_LEVEL_BONUS_TYPE = 1
SCALING_STAT_DISTRIBUTION_TYPE = 11
SCALING_STAT_DISTRIBUTION_FIXED_TYPE = 13
CURVE_BONUS_TYPES = (SCALING_STAT_DISTRIBUTION_TYPE, SCALING_STAT_DISTRIBUTION_FIXED_TYPE)


class Db2ItemBonus(BaseModel):
    """A single row of the ItemBonus table.

    ``parent_item_bonus_list_id`` is the number that appears in an
    auction item's ``bonus_lists``. For type 1 ``value0`` holds the
    item level adjustment; for types 11 and 13 ``value3`` holds the
    curve id.
    """
    id: int = Field(alias="ID")
    value0: int = Field(alias="Value[0]")
    value1: int = Field(alias="Value[1]")
    value2: int = Field(alias="Value[2]")
    value3: int = Field(alias="Value[3]")
    parent_item_bonus_list_id: int = Field(alias="ParentItemBonusListID")
    type_id: int = Field(alias="Type")
    order_index: int = Field(alias="OrderIndex")

    model_config = ConfigDict(populate_by_name=True)


class Db2ItemBonuses:
    """Bonus ids mapped to curve ids and item level adjustments.

    An item can carry several bonus ids that map to curves and/or
    adjustments. Priority when resolving its level:

    1. Exactly one curve bonus: that curve applies to the drop level.
    2. Several curve bonuses: the highest curve *id* applies.
    3. One or more level adjustments: their sum applies to the base level.
    4. Otherwise the base level is used.

    For example ``[6885, 6908]`` map to curves 19995 and 17967, so 19995
    is used; ``[1520, 5852]`` map to +48 and +7, so +55 is applied.
    """

    def __init__(
        self,
        curve_ids: dict[int, int] | None = None,
        ilvl_adjustments: dict[int, int] | None = None,
    ) -> None:
        self._curve_ids = curve_ids or {}
        self._ilvl_adjustments = ilvl_adjustments or {}

    @classmethod
    def from_csv(cls, csv_text: str) -> Db2ItemBonuses:
        curve_ids: dict[int, int] = {}
        ilvl_adjustments: dict[int, int] = {}

        for bonus in iter_rows(csv_text, Db2ItemBonus, "ItemBonus"):
            if bonus.type_id == ITEM_LEVEL_BONUS_TYPE:
                ilvl_adjustments[bonus.parent_item_bonus_list_id] = bonus.value0
            elif bonus.type_id in CURVE_BONUS_TYPES:
                curve_ids[bonus.parent_item_bonus_list_id] = bonus.value3

        return cls(curve_ids, ilvl_adjustments)

    @classmethod
    def from_file(cls, path: str | Path) -> Db2ItemBonuses:
        return cls.from_csv(read_table(path))

    def ilvl_adjustment(self, bonus_id: int) -> int | None:
        """Level adjustment of a single bonus id.

        Use ``resolve_ilvl_adjustment`` for an item's full bonus list.
        """
        return self._ilvl_adjustments.get(bonus_id)

    def resolve_ilvl_adjustment(self, bonus_ids: Iterable[int]) -> int | None:
        """Sum of every level adjustment in ``bonus_ids``; None if there are none."""
        adjustment: int | None = None
        for bonus_id in bonus_ids:
            diff = self._ilvl_adjustments.get(bonus_id)
            if diff is not None:
                adjustment = (adjustment or 0) + diff
        return adjustment

    def curve_id(self, bonus_id: int) -> int | None:
        """Curve id of a single bonus id.

        Use ``resolve_curve_id`` for an item's full bonus list.
        """
        return self._curve_ids.get(bonus_id)

    def resolve_curve_id(self, bonus_ids: Iterable[int]) -> int | None:
        """Highest curve id referenced by ``bonus_ids``; None if there are none."""
        highest = 0
        for bonus_id in bonus_ids:
            curve_id = self._curve_ids.get(bonus_id)
            if curve_id is not None and curve_id > highest:
                highest = curve_id
        return highest or None

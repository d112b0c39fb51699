"""The Item DB2 table."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .base import iter_rows, read_table

WEAPON_CLASS_ID = 2
ARMOR_CLASS_ID = 4
MISC_CLASS_ID = 15
PET_SUBCLASS_ID = 2


class Db2Item(BaseModel):
    """A single row of the Item table (only the columns used here)."""
    id: int = Field(alias="ID")
    class_id: int = Field(alias="ClassID")
    # Subclasses are only unique within their class.
    subclass_id: int = Field(alias="SubclassID")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_pet(self) -> bool:
        return self.class_id == MISC_CLASS_ID and self.subclass_id == PET_SUBCLASS_ID

    @property
    def is_equippable(self) -> bool:
        return self.class_id in (WEAPON_CLASS_ID, ARMOR_CLASS_ID)


class Db2Items:
    """Pet and equippable item ids extracted from the Item table.

    ``pet_item_ids`` (Miscellaneous / Companion Pet) is not perfectly
    accurate on its own: some companion pet items are toys such as pet
    beds. Cross reference with the ItemEffect and BattlePetSpecies
    tables to find items that actually teach a pet.
    """

    def __init__(
        self,
        pet_item_ids: list[int] | None = None,
        equippable_item_ids: set[int] | None = None,
    ) -> None:
        self.pet_item_ids = pet_item_ids or []
        self.equippable_item_ids = equippable_item_ids or set()

    @classmethod
    def from_csv(cls, csv_text: str) -> Db2Items:
        pet_item_ids: list[int] = []
        equippable: set[int] = set()
        for row in iter_rows(csv_text, Db2Item, "Item"):
            if row.is_pet:
                pet_item_ids.append(row.id)
            elif row.is_equippable:
                equippable.add(row.id)
        return cls(pet_item_ids, equippable)

    @classmethod
    def from_file(cls, path: str | Path) -> Db2Items:
        return cls.from_csv(read_table(path))

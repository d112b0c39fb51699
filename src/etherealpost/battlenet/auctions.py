"""Pydantic models for the Battle.net Auction House API payload.

A raw Auctions resource is returned by Blizzard's Game Data API for a
single Connected Realm (or region-wide for commodities). Only the
``auctions`` key matters here; the ``_links`` and ``connected_realm``
keys are discarded.

There are three price fields on an auction: ``unit_price``, ``buyout``
and ``bid``. Only these combinations occur:

1. ``unit_price`` only (commodities)
2. ``buyout`` only
3. ``bid`` only
4. ``bid`` and ``buyout``
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Modifier type holding the player's level when the item was looted.
DROP_LEVEL_MODIFIER = 9


class TimeLeft(str, Enum):
    """Time remaining on an auction."""
    VERY_LONG = "VERY_LONG"  # more than 12 hours
    LONG = "LONG"  # 2 to 12 hours
    MEDIUM = "MEDIUM"  # 30 minutes to 2 hours
    SHORT = "SHORT"  # less than 30 minutes


class ItemModifier(BaseModel):
    """An auction item modifier.

    Blizzard does not document these. Type ``9`` is the player's level
    when the item dropped, which feeds item level curves.
    """
    modifier_type: int = Field(alias="type")
    value: int

    model_config = ConfigDict(populate_by_name=True)


class AuctionPet(BaseModel):
    """Pet metadata for an item which is a caged battle pet."""
    breed: int
    quality: int
    species: int
    level: int


class AuctionItem(BaseModel):
    """The item being auctioned."""
    id: int
    # Creation context (raid difficulty, etc.). Rarely useful on the AH.
    context: int | None = None
    bonus_lists: list[int] | None = None
    modifiers: list[ItemModifier] | None = None
    pet_breed_id: int | None = None
    pet_level: int | None = None
    pet_quality_id: int | None = None
    pet_species_id: int | None = None

    def pet(self) -> AuctionPet | None:
        """Return the caged pet, if every pet field is present."""
        if (
            self.pet_breed_id is None
            or self.pet_level is None
            or self.pet_quality_id is None
            or self.pet_species_id is None
        ):
            return None
        return AuctionPet(
            breed=self.pet_breed_id,
            quality=self.pet_quality_id,
            species=self.pet_species_id,
            level=self.pet_level,
        )

    def drop_level(self) -> int | None:
        """Player level when the item was looted, if recorded."""
        for modifier in self.modifiers or []:
            if modifier.modifier_type == DROP_LEVEL_MODIFIER:
                return modifier.value
        return None


class Auction(BaseModel):
    """A single auction currently on the Auction House.

    ``id`` is unique per connected realm only.
    """
    id: int
    quantity: int = Field(ge=0)
    item: AuctionItem
    unit_price: int | None = Field(default=None, ge=0)
    buyout: int | None = Field(default=None, ge=0)
    bid: int | None = Field(default=None, ge=0)
    time_left: TimeLeft

    @property
    def is_buyable(self) -> bool:
        """Whether the auction can be bought out (i.e. is not bid-only)."""
        return self.buyout is not None or self.unit_price is not None

    @property
    def price(self) -> int | None:
        """Buyout price, falling back to unit price."""
        if self.buyout is not None:
            return self.buyout
        return self.unit_price


class AuctionFile(BaseModel):
    """All auctions for a connected realm (or the commodities market)."""
    auctions: list[Auction] = []

    @classmethod
    def from_json(cls, text: str | bytes) -> AuctionFile:
        """Deserialize an auctions payload.

        Raises:
            pydantic.ValidationError: On malformed JSON or schema mismatch.
        """
        return cls.model_validate_json(text)

    @classmethod
    def from_file(cls, path: str | Path) -> AuctionFile:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Auction file not found: {path}")
        return cls.from_json(path.read_bytes())

    def __len__(self) -> int:
        return len(self.auctions)

"""Summaries of an Auction House snapshot.

An ``AuctionsSummary`` turns a raw ``AuctionFile`` into statistics and
pre-computed groupings that are enough to persist the snapshot or to
analyze it ad hoc:

- item id -> every buyable auction of that item
- item id -> item level -> auctions, so a "transmog" price can be told
  apart from a "buying it for the stats" price
- battle pet species -> auctions, combining pet cages with the
  uncaged items that teach the same pet
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from ..battlenet.auctions import Auction, AuctionFile, AuctionItem
from ..stats.prices import PricePair, normalized_market_price_with_qty, std_dev_amount_qty
from ..wow.data_tables.item_bonus import Db2ItemBonuses
from ..wow.data_tables.item_sparse import DEFAULT_ITEM_LEVEL
from .item_level import ItemLevelCurvePoints

if TYPE_CHECKING:
    from ..wow.game_data import GameData

logger = logging.getLogger(__name__)

KeyT = TypeVar("KeyT", bound=Hashable)


@dataclass
class ItemSummary:
    """Statistics for a group of auctions (an item, item level, or pet species)."""

    # Normalized, quantity-weighted market price.
    market_price: int
    # Population standard deviation of every unit's price.
    std_dev: float
    min_buyout: int
    # Units available, e.g. stacks of 20 and 40 cloth count as 60.
    total_qty: int
    num_auctions: int

    @classmethod
    def from_prices(cls, prices: list[PricePair]) -> ItemSummary | None:
        """Summarize ``(price, quantity)`` pairs, one per auction."""
        market_price = normalized_market_price_with_qty(prices)
        if market_price is None:
            return None
        return cls(
            market_price=market_price,
            std_dev=std_dev_amount_qty(prices, True) or 0.0,
            min_buyout=min(price for price, _ in prices),
            total_qty=sum(qty for _, qty in prices),
            num_auctions=len(prices),
        )

    def to_dict(self) -> dict:
        return {
            "market_price": self.market_price,
            "std_dev": round(self.std_dev, 4),
            "min_buyout": self.min_buyout,
            "total_qty": self.total_qty,
            "num_auctions": self.num_auctions,
        }


@dataclass
class AuctionsSummary:
    """Statistics and groupings for every buyable auction in a snapshot."""

    item_auctions: dict[int, list[Auction]] = field(default_factory=dict)
    item_summaries: dict[int, ItemSummary] = field(default_factory=dict)
    # Every non-pet item, keyed item id -> effective item level.
    item_level_auctions: dict[int, dict[int, list[Auction]]] = field(default_factory=dict)
    item_level_summaries: dict[int, dict[int, ItemSummary]] = field(default_factory=dict)
    pet_auctions: dict[int, list[Auction]] = field(default_factory=dict)
    pet_summaries: dict[int, ItemSummary] = field(default_factory=dict)
    auction_count: int = 0
    skipped_auctions: int = 0

    @classmethod
    def from_game_data(cls, auction_file: AuctionFile, game_data: GameData) -> AuctionsSummary:
        return cls.from_auction_file(
            auction_file,
            curve_points=game_data.curve_points,
            bonuses=game_data.bonuses,
            base_ilvls=game_data.base_ilvls,
            item_to_pet=game_data.item_to_pet,
            equippable_items=game_data.equippable_items,
        )

    @classmethod
    def from_auction_file(
        cls,
        auction_file: AuctionFile,
        curve_points: ItemLevelCurvePoints,
        bonuses: Db2ItemBonuses,
        base_ilvls: dict[int, int],
        item_to_pet: dict[int, int],
        equippable_items: set[int],
    ) -> AuctionsSummary:
        """Build a summary from a parsed auctions file.

        Args:
            auction_file: Snapshot downloaded from the Battle.net API.
            curve_points: Curve id -> item level curve.
            bonuses: Bonus ids -> curve ids and level adjustments.
            base_ilvls: Item id -> base item level.
            item_to_pet: Item id -> pet species it teaches.
            equippable_items: Ids of equippable items.
        """
        summary = cls(auction_count=len(auction_file.auctions))

        item_prices: dict[int, list[PricePair]] = {}
        ilvl_prices: dict[tuple[int, int], list[PricePair]] = {}
        pet_prices: dict[int, list[PricePair]] = {}

        for auction in auction_file.auctions:
            if not auction.is_buyable:
                summary.skipped_auctions += 1
                continue

            price = auction.price
            assert price is not None
            entry = (price, auction.quantity)
            item_id = auction.item.id

            item_prices.setdefault(item_id, []).append(entry)
            summary.item_auctions.setdefault(item_id, []).append(auction)

            pet = auction.item.pet()
            species_id = pet.species if pet else item_to_pet.get(item_id)
            if species_id is not None:
                pet_prices.setdefault(species_id, []).append(entry)
                summary.pet_auctions.setdefault(species_id, []).append(auction)
                continue

            item_level = cls.resolve_item_level(
                auction.item,
                item_id in equippable_items,
                bonuses,
                base_ilvls,
                curve_points,
            )
            ilvl_prices.setdefault((item_id, item_level), []).append(entry)
            summary.item_level_auctions.setdefault(item_id, {}).setdefault(
                item_level, []
            ).append(auction)

        summary.item_summaries = _summarize(item_prices)
        summary.pet_summaries = _summarize(pet_prices)
        for (item_id, item_level), item_summary in _summarize(ilvl_prices).items():
            summary.item_level_summaries.setdefault(item_id, {})[item_level] = item_summary

        logger.info(
            "Summarized %d auctions (%d bid-only skipped): %d items, %d pet species",
            summary.auction_count,
            summary.skipped_auctions,
            len(summary.item_summaries),
            len(summary.pet_summaries),
        )
        return summary

    @staticmethod
    def resolve_item_level(
        item: AuctionItem,
        is_equippable: bool,
        bonuses: Db2ItemBonuses,
        base_ilvls: dict[int, int],
        curve_points: ItemLevelCurvePoints,
    ) -> int:
        """Actual item level of ``item`` from its bonuses, curves and drop level.

        A curve bonus wins over plain level adjustments. A curve needs
        both the drop level and a known curve, otherwise the base level
        is used.
        """
        base_level = base_ilvls.get(item.id)
        if base_level is None:
            logger.debug(
                "No base item level for item %d; using %d", item.id, DEFAULT_ITEM_LEVEL
            )
            base_level = DEFAULT_ITEM_LEVEL
        if not is_equippable or not item.bonus_lists:
            return base_level

        curve_id = bonuses.resolve_curve_id(item.bonus_lists)
        if curve_id is not None:
            drop_level = item.drop_level()
            curve = curve_points.get(curve_id)
            if drop_level is None or curve is None:
                return base_level
            return curve.calc_ilvl(drop_level)

        adjustment = bonuses.resolve_ilvl_adjustment(item.bonus_lists)
        if adjustment is None:
            return base_level
        return base_level + adjustment

    def top_items(self, count: int = 10) -> list[tuple[int, ItemSummary]]:
        """Items with the most auctions, most listed first."""
        ranked = sorted(
            self.item_summaries.items(),
            key=lambda kv: (-kv[1].num_auctions, kv[0]),
        )
        return ranked[:count]

    def to_dict(self) -> dict:
        return {
            "auction_count": self.auction_count,
            "skipped_auctions": self.skipped_auctions,
            "items": {
                str(item_id): s.to_dict()
                for item_id, s in sorted(self.item_summaries.items())
            },
            "item_levels": {
                str(item_id): {
                    str(level): s.to_dict() for level, s in sorted(levels.items())
                }
                for item_id, levels in sorted(self.item_level_summaries.items())
            },
            "pets": {
                str(species_id): s.to_dict()
                for species_id, s in sorted(self.pet_summaries.items())
            },
        }


def _summarize(prices: dict[KeyT, list[PricePair]]) -> dict[KeyT, ItemSummary]:
    summaries: dict[KeyT, ItemSummary] = {}
    for key, entries in prices.items():
        item_summary = ItemSummary.from_prices(entries)
        if item_summary is not None:
            summaries[key] = item_summary
    return summaries

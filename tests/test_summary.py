"""Tests for auction snapshot summaries."""

from __future__ import annotations

import logging

from etherealpost.battlenet.auctions import AuctionFile, AuctionItem, ItemModifier
from etherealpost.parse.item_level import ItemLevelCurve
from etherealpost.parse.summary import AuctionsSummary, ItemSummary
from etherealpost.wow.data_tables import Db2ItemBonuses
from etherealpost.wow.game_data import GameData


class TestItemSummary:
    def test_from_prices(self):
        summary = ItemSummary.from_prices([(50000, 20), (60000, 5), (40000, 1)])
        assert summary is not None
        assert summary.market_price == 50000
        assert summary.min_buyout == 40000
        assert summary.total_qty == 26
        assert summary.num_auctions == 3
        assert summary.std_dev > 0

    def test_single_unit_has_zero_std_dev(self):
        summary = ItemSummary.from_prices([(900000, 1)])
        assert summary.market_price == 900000
        assert summary.std_dev == 0.0

    def test_no_prices(self):
        assert ItemSummary.from_prices([]) is None

    def test_to_dict_rounds_std_dev(self):
        summary = ItemSummary(
            market_price=10, std_dev=1.234567, min_buyout=5, total_qty=3, num_auctions=2
        )
        assert summary.to_dict() == {
            "market_price": 10,
            "std_dev": 1.2346,
            "min_buyout": 5,
            "total_qty": 3,
            "num_auctions": 2,
        }


class TestResolveItemLevel:
    BONUSES = Db2ItemBonuses(
        curve_ids={6654: 1748, 6908: 17967},
        ilvl_adjustments={1520: 48, 5852: 7},
    )
    CURVES = {1748: ItemLevelCurve.from_points([(32, 39), (39, 46)])}
    BASE_ILVLS = {183421: 190}

    def _resolve(self, item: AuctionItem, is_equippable: bool = True) -> int:
        return AuctionsSummary.resolve_item_level(
            item, is_equippable, self.BONUSES, self.BASE_ILVLS, self.CURVES
        )

    def test_adjustments_are_summed(self):
        assert self._resolve(AuctionItem(id=183421, bonus_lists=[1520, 5852])) == 245

    def test_curve_wins_over_adjustment(self):
        item = AuctionItem(
            id=183421,
            bonus_lists=[1520, 6654],
            modifiers=[ItemModifier(type=9, value=37)],
        )
        assert self._resolve(item) == 44

    def test_curve_without_drop_level_uses_base(self):
        assert self._resolve(AuctionItem(id=183421, bonus_lists=[6654])) == 190

    def test_unknown_curve_uses_base(self):
        item = AuctionItem(
            id=183421,
            bonus_lists=[6908],
            modifiers=[ItemModifier(type=9, value=37)],
        )
        assert self._resolve(item) == 190

    def test_no_bonuses_uses_base(self):
        assert self._resolve(AuctionItem(id=183421)) == 190
        assert self._resolve(AuctionItem(id=183421, bonus_lists=[12345])) == 190

    def test_unknown_item_defaults_to_one(self):
        assert self._resolve(AuctionItem(id=5)) == 1

    def test_unknown_item_logs_default(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="etherealpost.parse.summary"):
            assert self._resolve(AuctionItem(id=5)) == 1
        assert "No base item level for item 5" in caplog.text

    def test_known_item_does_not_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="etherealpost.parse.summary"):
            self._resolve(AuctionItem(id=183421))
        assert "No base item level" not in caplog.text

    def test_non_equippable_ignores_bonuses(self):
        item = AuctionItem(id=183421, bonus_lists=[1520])
        assert self._resolve(item, is_equippable=False) == 190


class TestAuctionsSummary:
    def test_counts(self, auction_file: AuctionFile, game_data: GameData):
        summary = AuctionsSummary.from_game_data(auction_file, game_data)
        assert summary.auction_count == 15
        assert summary.skipped_auctions == 1

    def test_item_summaries(self, auction_file: AuctionFile, game_data: GameData):
        summary = AuctionsSummary.from_game_data(auction_file, game_data)
        assert set(summary.item_summaries) == {171276, 183421, 178926, 82800, 94208, 89139}

        flask = summary.item_summaries[171276]
        assert flask.market_price == 50000
        assert flask.min_buyout == 40000
        assert flask.total_qty == 26
        assert flask.num_auctions == 3

        # the bid-only auction is left out
        boots = summary.item_summaries[183421]
        assert boots.num_auctions == 3
        assert boots.market_price == 900000
        assert len(summary.item_auctions[183421]) == 3

    def test_item_level_buckets(self, auction_file: AuctionFile, game_data: GameData):
        summary = AuctionsSummary.from_game_data(auction_file, game_data)

        assert set(summary.item_level_summaries[183421]) == {245, 238, 190}
        assert summary.item_level_summaries[183421][238].market_price == 1500000

        weapon_levels = summary.item_level_summaries[178926]
        assert set(weapon_levels) == {44, 104, 155}
        assert weapon_levels[155].num_auctions == 2
        assert weapon_levels[155].min_buyout == 300000
        assert [a.id for a in summary.item_level_auctions[178926][155]] == [10, 11]

        # items that are not equippable sit at their base level
        assert set(summary.item_level_summaries[171276]) == {1}
        assert set(summary.item_level_summaries[89139]) == {1}

    def test_pets_have_no_item_level_bucket(self, auction_file: AuctionFile, game_data: GameData):
        summary = AuctionsSummary.from_game_data(auction_file, game_data)
        assert 82800 not in summary.item_level_summaries
        assert 94208 not in summary.item_level_summaries
        assert 82800 not in summary.item_level_auctions

    def test_pet_summaries(self, auction_file: AuctionFile, game_data: GameData):
        summary = AuctionsSummary.from_game_data(auction_file, game_data)
        assert set(summary.pet_summaries) == {85, 1300}
        assert summary.pet_summaries[85].market_price == 1000000

        # caged and uncaged auctions of the same species are combined
        pet = summary.pet_summaries[1300]
        assert pet.num_auctions == 2
        assert pet.min_buyout == 250000
        assert sorted(a.id for a in summary.pet_auctions[1300]) == [13, 14]

    def test_top_items(self, auction_file: AuctionFile, game_data: GameData):
        summary = AuctionsSummary.from_game_data(auction_file, game_data)
        top = summary.top_items(3)
        assert [item_id for item_id, _ in top] == [178926, 171276, 183421]

    def test_to_dict(self, auction_file: AuctionFile, game_data: GameData):
        data = AuctionsSummary.from_game_data(auction_file, game_data).to_dict()
        assert data["auction_count"] == 15
        assert data["skipped_auctions"] == 1
        assert list(data["items"]) == ["82800", "89139", "94208", "171276", "178926", "183421"]
        assert data["items"]["171276"]["market_price"] == 50000
        assert list(data["item_levels"]["178926"]) == ["44", "104", "155"]
        assert data["pets"]["1300"]["num_auctions"] == 2

    def test_empty_auction_file(self):
        summary = AuctionsSummary.from_auction_file(
            AuctionFile(),
            curve_points={},
            bonuses=Db2ItemBonuses(),
            base_ilvls={},
            item_to_pet={},
            equippable_items=set(),
        )
        assert summary.auction_count == 0
        assert summary.item_summaries == {}
        assert summary.top_items() == []

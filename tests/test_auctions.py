"""Tests for the Battle.net auction payload models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from etherealpost.battlenet.auctions import (
    Auction,
    AuctionFile,
    AuctionItem,
    AuctionPet,
    ItemModifier,
    TimeLeft,
)


class TestAuctionItem:
    def test_caged_pet(self):
        item = AuctionItem(
            id=82800,
            pet_breed_id=5,
            pet_level=1,
            pet_quality_id=3,
            pet_species_id=85,
        )
        assert item.pet() == AuctionPet(breed=5, quality=3, species=85, level=1)

    def test_partial_pet_fields_is_not_a_pet(self):
        item = AuctionItem(id=82800, pet_species_id=85, pet_level=1)
        assert item.pet() is None

    def test_regular_item_is_not_a_pet(self):
        assert AuctionItem(id=171276).pet() is None

    def test_drop_level(self):
        item = AuctionItem(
            id=178926,
            modifiers=[ItemModifier(type=28, value=1337), ItemModifier(type=9, value=52)],
        )
        assert item.drop_level() == 52

    def test_drop_level_missing(self):
        assert AuctionItem(id=178926).drop_level() is None
        item = AuctionItem(id=178926, modifiers=[ItemModifier(type=28, value=1337)])
        assert item.drop_level() is None

    def test_modifier_populates_by_name(self):
        modifier = ItemModifier(modifier_type=9, value=40)
        assert modifier.modifier_type == 9


class TestAuction:
    def _auction(self, time_left: str = "LONG", **kwargs) -> Auction:
        return Auction(id=1, quantity=1, item=AuctionItem(id=1), time_left=time_left, **kwargs)

    def test_buyout_price(self):
        auction = self._auction(buyout=1500000, bid=1200000)
        assert auction.is_buyable
        assert auction.price == 1500000

    def test_unit_price_fallback(self):
        auction = self._auction(unit_price=50000)
        assert auction.is_buyable
        assert auction.price == 50000

    def test_bid_only_not_buyable(self):
        auction = self._auction(bid=100000)
        assert not auction.is_buyable
        assert auction.price is None

    def test_time_left_enum(self):
        assert self._auction(buyout=1).time_left is TimeLeft.LONG

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Auction(id=1, quantity=-1, item=AuctionItem(id=1), buyout=5, time_left="LONG")

    def test_unknown_time_left_rejected(self):
        with pytest.raises(ValidationError):
            self._auction(buyout=1, time_left="FOREVER")


class TestAuctionFile:
    def test_from_file(self, auction_file: AuctionFile):
        assert len(auction_file) == 15
        first = auction_file.auctions[0]
        assert first.item.id == 171276
        assert first.quantity == 20
        assert first.unit_price == 50000
        assert first.time_left is TimeLeft.VERY_LONG

    def test_nested_item_fields(self, auction_file: AuctionFile):
        by_id = {a.id: a for a in auction_file.auctions}
        assert by_id[4].item.bonus_lists == [1520, 5852]
        assert by_id[4].item.context == 3
        assert by_id[9].item.drop_level() == 52
        assert by_id[12].item.pet().species == 85

    def test_from_json_minimal(self):
        payload = (
            '{"auctions": [{"id": 7, "item": {"id": 2589}, "quantity": 200, '
            '"unit_price": 1250, "time_left": "SHORT"}]}'
        )
        auction_file = AuctionFile.from_json(payload)
        assert auction_file.auctions[0].price == 1250

    def test_from_json_without_auctions(self):
        assert len(AuctionFile.from_json("{}")) == 0

    def test_from_json_malformed(self):
        with pytest.raises(ValidationError):
            AuctionFile.from_json("{not json")

    def test_from_json_schema_mismatch(self):
        with pytest.raises(ValidationError):
            AuctionFile.from_json('{"auctions": [{"id": "abc"}]}')

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AuctionFile.from_file(tmp_path / "missing.json")

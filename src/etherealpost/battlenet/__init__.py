"""Battle.net Game Data API - auction payload models and client."""

from .auctions import (
    DROP_LEVEL_MODIFIER,
    Auction,
    AuctionFile,
    AuctionItem,
    AuctionPet,
    ItemModifier,
    TimeLeft,
)
from .client import BattleNetClient

__all__ = [
    "DROP_LEVEL_MODIFIER",
    "Auction",
    "AuctionFile",
    "AuctionItem",
    "AuctionPet",
    "BattleNetClient",
    "ItemModifier",
    "TimeLeft",
]

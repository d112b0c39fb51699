"""Ethereal Post - World of Warcraft Auction House statistics and analytics."""

from .battlenet.auctions import Auction, AuctionFile
from .parse.summary import AuctionsSummary, ItemSummary
from .stats.prices import market_price, normalized_market_price

__version__ = "0.1.0"

__all__ = [
    "Auction",
    "AuctionFile",
    "AuctionsSummary",
    "ItemSummary",
    "market_price",
    "normalized_market_price",
]

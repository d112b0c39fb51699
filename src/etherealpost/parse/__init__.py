"""Parsing of auction snapshots into item levels and summaries."""

from .item_level import CurvePoint, ItemLevelCurve, ItemLevelCurvePoints
from .summary import AuctionsSummary, ItemSummary

__all__ = [
    "AuctionsSummary",
    "CurvePoint",
    "ItemLevelCurve",
    "ItemLevelCurvePoints",
    "ItemSummary",
]

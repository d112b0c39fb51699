"""Item level curves.

An item level curve loosely corresponds to a curve in the CurvePoint DB2
table. Its points are ``(x, y)`` coordinates where ``x`` is the player's
level and ``y`` the item level. Linear interpolation between the points
gives the effective item level for the level at which an item dropped
(modifier type ``9`` on an auction item).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..wow.data_tables.curve_points import Db2CurvePoints

# Player levels closer than this to a curve point use the point as-is.
LEVEL_ERROR_MARGIN = 0.01


@dataclass(frozen=True)
class CurvePoint:
    player_level: float
    item_level: float


class ItemLevelCurve:
    """Maps a looted-at player level to an effective item level."""

    def __init__(self, points: list[CurvePoint]) -> None:
        if not points:
            raise ValueError("An item level curve needs at least one point")
        self.points = sorted(points, key=lambda p: p.player_level)

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> ItemLevelCurve:
        """Create a curve from unsorted ``(player_level, item_level)`` pairs."""
        return cls([CurvePoint(float(x), float(y)) for x, y in points])

    @classmethod
    def for_whole_table(cls, table: Db2CurvePoints) -> dict[int, ItemLevelCurve]:
        """Every curve of a CurvePoint table, keyed by curve id."""
        return {
            curve_id: cls.from_points(points)
            for curve_id, points in table.curve_ids.items()
            if points
        }

    @classmethod
    def from_table(cls, curve_id: int, table: Db2CurvePoints) -> ItemLevelCurve | None:
        points = table.points(curve_id)
        if not points:
            return None
        return cls.from_points(points)

    def calc_ilvl(self, looted_level: int) -> int:
        """Effective item level for an item looted at ``looted_level``.

        Uses ``y = y0 + (x - x0) * ((y1 - y0) / (x1 - x0))`` where
        ``(x0, y0)`` and ``(x1, y1)`` are the points around ``x``. With
        curve 1748 (9.0.5) and ``x = 37``::

            y = 39 + (37 - 32) * ((46 - 39) / (39 - 32)) = 44

        A level equal to a point's level returns that point's item level.
        Levels past the last point return the last item level and levels
        before the first point return the first item level.
        """
        x = float(looted_level)
        prev = self.points[0]

        for point in self.points:
            if abs(x - point.player_level) < LEVEL_ERROR_MARGIN:
                return int(point.item_level)
            if x < point.player_level:
                if point is prev:
                    return int(point.item_level)
                slope = (point.item_level - prev.item_level) / (
                    point.player_level - prev.player_level
                )
                return int(prev.item_level + (x - prev.player_level) * slope)
            prev = point

        return int(prev.item_level)


ItemLevelCurvePoints = dict[int, ItemLevelCurve]

"""The CurvePoint DB2 table."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .base import iter_rows, read_table


class Db2CurvePoint(BaseModel):
    """A single ``(x, y)`` point of a curve: player level to item level."""
    id: int = Field(alias="ID")
    x: float = Field(alias="Pos[0]")
    y: float = Field(alias="Pos[1]")
    # Coordinates prior to the patch 9.0 item level squish.
    x_pre_squish: float = Field(alias="PosPreSquish[0]")
    y_pre_squish: float = Field(alias="PosPreSquish[1]")
    # Tied to bonus ids through the ItemBonus table.
    curve_id: int = Field(alias="CurveID")
    order_index: int = Field(alias="OrderIndex")

    model_config = ConfigDict(populate_by_name=True)


class Db2CurvePoints:
    """Curve ids mapped to all of their ``(x, y)`` points, in table order."""

    def __init__(self, curve_ids: dict[int, list[tuple[float, float]]] | None = None) -> None:
        self.curve_ids = curve_ids or {}

    @classmethod
    def from_csv(cls, csv_text: str) -> Db2CurvePoints:
        curve_ids: dict[int, list[tuple[float, float]]] = {}
        for point in iter_rows(csv_text, Db2CurvePoint, "CurvePoint"):
            curve_ids.setdefault(point.curve_id, []).append((point.x, point.y))
        return cls(curve_ids)

    @classmethod
    def from_file(cls, path: str | Path) -> Db2CurvePoints:
        return cls.from_csv(read_table(path))

    def points(self, curve_id: int) -> list[tuple[float, float]] | None:
        return self.curve_ids.get(curve_id)

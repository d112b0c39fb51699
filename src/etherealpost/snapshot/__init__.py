"""Snapshot persistence - SQLite storage and JSON export."""

from .exporter import build_export, export_summary
from .storage import SnapshotStore

__all__ = ["SnapshotStore", "build_export", "export_summary"]

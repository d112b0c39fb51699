"""JSON export of snapshot summaries."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from ..parse.summary import AuctionsSummary

logger = logging.getLogger(__name__)


def build_export(
    summary: AuctionsSummary,
    source: str,
    collected_at: datetime | None = None,
) -> dict:
    """Export document for a summary."""
    collected_at = collected_at or datetime.now(timezone.utc)
    return {
        "source": source,
        "collected_at": collected_at.isoformat(),
        **summary.to_dict(),
    }


def export_summary(
    summary: AuctionsSummary,
    output_path: str | Path,
    source: str,
    collected_at: datetime | None = None,
) -> dict:
    """Write a summary to ``output_path`` as JSON and return the document."""
    export = build_export(summary, source, collected_at)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(export, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    logger.info("Exported %d item summaries to %s", len(summary.item_summaries), output_path)
    return export

"""Adapter for the page-extraction JSON export."""

import json
import logging
from pathlib import Path
from typing import Any

from prestamype_analyzer.models.raw import RawOpportunity

from .base import BaseAdapter

logger = logging.getLogger(__name__)


def extract_rows(payload: Any) -> list[dict[str, Any]]:
    """
    Accept either a bare list of rows or the extractor's response envelope
    {"success": bool, "data": [...], "error": str}.
    """
    if isinstance(payload, dict):
        if payload.get("success") is False:
            raise ValueError(f"Extraction failed: {payload.get('error') or 'unknown error'}")
        payload = payload.get("data") or []
    if not isinstance(payload, list):
        raise ValueError("Expected a list of opportunities or a {'data': [...]} envelope")
    rows = [row for row in payload if isinstance(row, dict)]
    if len(rows) != len(payload):
        logger.warning("Ignored %d non-object rows", len(payload) - len(rows))
    return rows


class JsonExportAdapter(BaseAdapter):
    """Reads opportunities from a JSON file written by the page extractor."""

    source_id = "json"

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> list[RawOpportunity]:
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        rows = extract_rows(payload)
        logger.info("[%s] Loaded %d rows from %s", self.source_id, len(rows), self.path)
        return [RawOpportunity(index=i, data=row) for i, row in enumerate(rows)]

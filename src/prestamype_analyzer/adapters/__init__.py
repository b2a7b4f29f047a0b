"""Adapters turning scraped rows into opportunity records."""

from prestamype_analyzer.adapters.base import BaseAdapter
from prestamype_analyzer.adapters.json_export import JsonExportAdapter, extract_rows

__all__ = ["BaseAdapter", "JsonExportAdapter", "extract_rows"]

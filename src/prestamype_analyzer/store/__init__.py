"""Local storage for the user config and analysis history."""

from prestamype_analyzer.store.analysis_store import AnalysisSnapshot, AnalysisStore
from prestamype_analyzer.store.config_store import ConfigStore

__all__ = [
    "AnalysisSnapshot",
    "AnalysisStore",
    "ConfigStore",
]

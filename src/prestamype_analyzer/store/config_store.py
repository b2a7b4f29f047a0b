"""YAML-backed persistence for the analyzer config."""

import logging
from pathlib import Path
from typing import Any

import yaml

from prestamype_analyzer.models.config import CONFIG_KEY, UserConfig, load_yaml_mapping

logger = logging.getLogger(__name__)


class ConfigStore:
    """
    Key-value config file holding one UserConfig under `analyzer_config`.
    Defaults apply until load() finds stored values; save() merges and writes back.
    """

    def __init__(self, path: str | Path = "prestamype_analyzer.yaml"):
        self._path = Path(path)
        self._config = UserConfig()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        return load_yaml_mapping(self._path)

    def load(self) -> UserConfig:
        """
        Merge stored values over the defaults.
        Invalid stored values raise ValidationError; a non-mapping file raises ValueError.
        """
        if self._path.exists():
            self._config = UserConfig.from_yaml(self._path)
        else:
            logger.debug("No stored config at %s; using defaults", self._path)
        return self._config

    def save(self, changes: dict[str, Any]) -> UserConfig:
        """Apply `changes` over the current config, validate, and persist."""
        new_config = self._config.merged(changes)
        document = self._read()
        document[CONFIG_KEY] = new_config.model_dump()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        self._config = new_config
        logger.info("Saved config to %s", self._path)
        return new_config

    def get(self) -> UserConfig:
        """Current snapshot (immutable)."""
        return self._config

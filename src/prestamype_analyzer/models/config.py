"""User investment preferences."""

from pathlib import Path
from typing import Any, Literal

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for config loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, ConfigDict, Field, field_validator

from prestamype_analyzer.models.opportunity import RiskGrade

CONFIG_KEY = "analyzer_config"

DEFAULT_CONFIG: dict[str, Any] = {
    "budget": 200,
    "min_return": 8,
    "max_risk": "B",
    "currency": "PEN",
}


def load_yaml_mapping(path: str | Path) -> dict[str, Any]:
    """Read a YAML file whose top level must be a mapping (empty file -> {})."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


class UserConfig(BaseModel):
    """
    Snapshot of the user's preferences. Frozen: engines receive a value, not a live reference.
    Accepts the extension's camelCase keys (minReturn, maxRisk) as well as snake_case.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    budget: float = Field(default=DEFAULT_CONFIG["budget"], gt=0, description="In `currency` units")
    min_return: float = Field(default=DEFAULT_CONFIG["min_return"], ge=0, alias="minReturn")
    max_risk: RiskGrade = Field(default=DEFAULT_CONFIG["max_risk"], alias="maxRisk")
    currency: Literal["PEN", "USD"] = DEFAULT_CONFIG["currency"]

    @field_validator("max_risk", "currency", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    def merged(self, changes: dict[str, Any]) -> "UserConfig":
        """Return a new validated config with `changes` applied over this one."""
        data = self.model_dump()
        for key, value in changes.items():
            if value is None:
                continue
            data[_FIELD_BY_KEY.get(key, key)] = value
        return UserConfig.model_validate(data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "UserConfig":
        """Load config from YAML file. Supports nested (analyzer_config) or flat structure."""
        data = load_yaml_mapping(path)
        nested = data.get(CONFIG_KEY)
        if isinstance(nested, dict):
            data = nested
        return cls().merged(data)


_FIELD_BY_KEY = {
    "minReturn": "min_return",
    "maxRisk": "max_risk",
}

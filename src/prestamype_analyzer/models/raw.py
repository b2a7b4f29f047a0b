"""Raw scraped row before normalization."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawOpportunity(BaseModel):
    """
    Flexible raw record from a scraping export.
    Adapters populate this from the page-extraction payload and normalize it later.
    """

    model_config = ConfigDict(extra="allow")

    index: int = 0
    data: dict[str, Any] = Field(default_factory=dict)

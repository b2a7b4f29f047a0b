"""Abstract base class for scraping-export adapters."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import ValidationError

from prestamype_analyzer.models.opportunity import OpportunityRecord
from prestamype_analyzer.models.raw import RawOpportunity

logger = logging.getLogger(__name__)


class BaseAdapter(ABC):
    """
    Standard interface for sources of opportunity rows.
    Adapters load raw rows and normalize them into OpportunityRecord.
    """

    source_id: str = ""

    @abstractmethod
    def load(self) -> list[RawOpportunity]:
        """
        Return raw rows in page order.
        """
        pass

    def normalize(self, raw: RawOpportunity) -> Optional[OpportunityRecord]:
        """
        Convert a raw row to OpportunityRecord.
        Rows with no title, amount nor return carry nothing to score and are dropped (None).
        """
        data = dict(raw.data)
        if not (data.get("title") or data.get("amount") or data.get("return")):
            logger.warning("[%s] Dropping row %d: no title, amount or return", self.source_id, raw.index)
            return None
        if not data.get("id"):
            data["id"] = f"row-{raw.index}"
        try:
            return OpportunityRecord.model_validate(data)
        except ValidationError as e:
            logger.warning("[%s] Dropping row %d: %s", self.source_id, raw.index, e)
            return None

    def fetch_all(self) -> list[OpportunityRecord]:
        """
        Load and normalize every row, skipping rows that cannot be normalized.
        """
        records: list[OpportunityRecord] = []
        for raw in self.load():
            record = self.normalize(raw)
            if record is not None:
                records.append(record)
        return records

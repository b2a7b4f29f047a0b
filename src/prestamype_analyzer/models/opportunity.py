"""Normalized opportunity record produced by the scraping adapters."""

import logging
import math
import re
from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

RiskGrade = Literal["A", "B", "C", "D", "E"]

_RISK_GRADES = ("A", "B", "C", "D", "E")
_DEFAULT_MIN_INVESTMENT = 50.0
# Currency prefixes the page prints next to amounts
_CURRENCY_MARKERS = re.compile(r"S/\.?|US\$|\$|\b(?:PEN|USD)\b", re.IGNORECASE)


def coerce_number(value: Any) -> Optional[float]:
    """
    Best-effort numeric coercion for scraped values.
    Accepts numbers and strings like "12.5%", "S/ 1,500" or "8,5"; None if nothing usable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None
    text = _CURRENCY_MARKERS.sub("", value).replace("%", "")
    if any(ch.isalpha() for ch in text):
        return None
    text = "".join(ch for ch in text if ch.isdigit() or ch in ".,-")
    if not text:
        return None
    if "," in text and "." not in text and text.count(",") == 1 and len(text.split(",")[1]) != 3:
        # Decimal comma: "8,5"
        text = text.replace(",", ".")
    else:
        text = text.replace(",", "")
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_iso(value: Any) -> Optional[date]:
    """Parse an ISO date or datetime; None for anything else (localized strings stay with the scraper)."""
    if isinstance(value, (date, datetime)):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable date %r", value)
        return None


class OpportunityRecord(BaseModel):
    """
    One investable listing. Accepts the scraper's camelCase keys
    (minInvestment, raisedAmount, ...) and "return" for the nominal annual return.
    Malformed numeric fields are coerced to documented defaults instead of failing.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique listing identifier")
    title: str = ""

    amount: float = Field(default=0.0, description="Total size of the opportunity")
    return_rate: Optional[float] = Field(
        default=None,
        alias="return",
        description="Nominal annualized return, percent",
    )
    risk: Optional[RiskGrade] = None
    term: Optional[float] = Field(default=None, description="Duration in months")
    term_days: Optional[int] = Field(default=None, alias="termDays")
    progress: Optional[float] = Field(default=None, description="Percent already funded")
    min_investment: float = Field(default=_DEFAULT_MIN_INVESTMENT, alias="minInvestment")
    currency: Optional[str] = None
    category: str = "general"

    raised_amount: Optional[float] = Field(default=None, alias="raisedAmount")
    remaining_amount: Optional[float] = Field(default=None, alias="remainingAmount")
    total_investors: Optional[int] = Field(default=None, alias="totalInvestors")
    max_investment: Optional[float] = Field(default=None, alias="maxInvestment")
    monthly_return: Optional[float] = Field(default=None, alias="monthlyReturn")
    payment_guaranteed: bool = Field(default=False, alias="paymentGuaranteed")
    estimated_payment: Optional[date] = Field(default=None, alias="estimatedPayment")
    auction_close: Optional[datetime] = Field(default=None, alias="auctionClose")
    remaining_time: Optional[str] = Field(default=None, alias="remainingTime")
    auction_code: Optional[str] = Field(default=None, alias="auctionCode")

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, (int, float)) else v

    @field_validator("title", mode="before")
    @classmethod
    def _title_or_empty(cls, v: Any) -> str:
        return str(v).strip() if v is not None else ""

    @field_validator("amount", mode="before")
    @classmethod
    def _non_negative_amount(cls, v: Any) -> float:
        number = coerce_number(v)
        return max(0.0, number) if number is not None else 0.0

    @field_validator(
        "return_rate",
        "term",
        "raised_amount",
        "remaining_amount",
        "max_investment",
        "monthly_return",
        mode="before",
    )
    @classmethod
    def _optional_number(cls, v: Any) -> Optional[float]:
        return coerce_number(v)

    @field_validator("term_days", "total_investors", mode="before")
    @classmethod
    def _optional_int(cls, v: Any) -> Optional[int]:
        number = coerce_number(v)
        return int(number) if number is not None and number >= 0 else None

    @field_validator("progress", mode="before")
    @classmethod
    def _clamped_progress(cls, v: Any) -> Optional[float]:
        number = coerce_number(v)
        if number is None:
            return None
        return max(0.0, min(100.0, number))

    @field_validator("min_investment", mode="before")
    @classmethod
    def _min_investment_default(cls, v: Any) -> float:
        number = coerce_number(v)
        if number is None or number <= 0:
            return _DEFAULT_MIN_INVESTMENT
        return number

    @field_validator("risk", mode="before")
    @classmethod
    def _risk_letter(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        letter = str(v).strip().upper()
        if letter not in _RISK_GRADES:
            if letter:
                logger.warning("Ignoring unknown risk grade %r", v)
            return None
        return letter

    @field_validator("category", mode="before")
    @classmethod
    def _category_lower(cls, v: Any) -> str:
        text = str(v).strip().lower() if v is not None else ""
        return text or "general"

    @field_validator("currency", mode="before")
    @classmethod
    def _currency_upper(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v).strip().upper() or None

    @field_validator("payment_guaranteed", mode="before")
    @classmethod
    def _guaranteed_flag(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("true", "yes", "si", "sí", "1")
        return bool(v)

    @field_validator("estimated_payment", mode="before")
    @classmethod
    def _optional_date(cls, v: Any) -> Optional[date]:
        parsed = _parse_iso(v)
        if isinstance(parsed, datetime):
            return parsed.date()
        return parsed

    @field_validator("auction_close", mode="before")
    @classmethod
    def _optional_datetime(cls, v: Any) -> Optional[datetime]:
        parsed = _parse_iso(v)
        if parsed is not None and not isinstance(parsed, datetime):
            return datetime(parsed.year, parsed.month, parsed.day)
        return parsed

    @field_validator("remaining_time", "auction_code", mode="before")
    @classmethod
    def _optional_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

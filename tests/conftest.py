"""Pytest fixtures for prestamype-analyzer tests."""

import json
from pathlib import Path

import pytest

from prestamype_analyzer.models.config import UserConfig


@pytest.fixture
def default_config() -> UserConfig:
    """Documented defaults: budget 200 PEN, min return 8, max risk B."""
    return UserConfig()


@pytest.fixture
def roomy_config() -> UserConfig:
    """Config with room for several tickets."""
    return UserConfig(budget=1000, min_return=8, max_risk="B", currency="PEN")


@pytest.fixture
def sample_rows() -> list[dict]:
    """Rows as exported by the page extractor (camelCase keys, some malformed values)."""
    return [
        {
            "id": "op-1",
            "title": "Factura Comercial SAC",
            "amount": 10000,
            "return": 12,
            "risk": "A",
            "term": 6,
            "progress": 0,
            "minInvestment": 100,
            "currency": "PEN",
            "category": "factoring",
        },
        {
            "id": "op-2",
            "title": "Depa Miraflores",
            "amount": "S/ 25,000",
            "return": "14.5%",
            "risk": "b",
            "term": 18,
            "progress": 45,
            "minInvestment": 500,
            "category": "Inmobiliario",
            "estimatedPayment": "2026-06-30",
        },
        {
            "id": "op-3",
            "title": "Prestamo Personal",
            "amount": 3000,
            "return": 5,
            "risk": "D",
            "term": 48,
            "progress": "n/a",
            "minInvestment": None,
        },
        {
            "title": "",
            "amount": None,
            "return": None,
        },
    ]


@pytest.fixture
def export_file(tmp_path: Path, sample_rows: list[dict]) -> Path:
    """JSON export wrapped in the extractor's response envelope."""
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"success": True, "data": sample_rows}), encoding="utf-8")
    return path

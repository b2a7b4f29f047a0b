"""SQLite store for snapshots of past analyses."""

import json
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from prestamype_analyzer.models.config import UserConfig
from prestamype_analyzer.models.scored import ScoredOpportunity

# Only the best listings are kept per snapshot
SNAPSHOT_TOP_N = 10


@dataclass
class AnalysisSnapshot:
    """Stored summary of one analysis run."""

    id: int
    created_at: datetime
    config: UserConfig
    total: int
    recommended: int
    within_budget: int
    opportunities: list[ScoredOpportunity]


class AnalysisStore:
    """SQLite store for analysis snapshots (latest first)."""

    def __init__(self, db_path: str | Path = "prestamype_analyzer.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def save(
        self,
        scored: list[ScoredOpportunity],
        config: UserConfig,
        *,
        recommended_threshold: int = 60,
    ) -> AnalysisSnapshot:
        """Persist counts for the whole set and the top listings by score."""
        ranked = sorted(scored, key=lambda o: o.score, reverse=True)
        top = ranked[:SNAPSHOT_TOP_N]
        total = len(scored)
        recommended = sum(1 for o in scored if o.score >= recommended_threshold)
        within_budget = sum(1 for o in scored if o.fits_budget)
        now = datetime.now(timezone.utc)
        with self._connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO analyses (created_at, config, total, recommended, within_budget, opportunities)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    now.isoformat(),
                    config.model_dump_json(),
                    total,
                    recommended,
                    within_budget,
                    json.dumps([o.model_dump(mode="json") for o in top]),
                ),
            )
            conn.commit()
            row_id = cursor.lastrowid or 0
        return AnalysisSnapshot(
            id=row_id,
            created_at=now,
            config=config,
            total=total,
            recommended=recommended,
            within_budget=within_budget,
            opportunities=top,
        )

    def latest(self) -> Optional[AnalysisSnapshot]:
        """Most recent snapshot, or None when nothing was saved yet."""
        recent = self.list_recent(limit=1)
        return recent[0] if recent else None

    def list_recent(self, limit: int = 10) -> list[AnalysisSnapshot]:
        """Snapshots, newest first."""
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT * FROM analyses ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_snapshot(r) for r in rows]

    def _row_to_snapshot(self, row: sqlite3.Row) -> AnalysisSnapshot:
        return AnalysisSnapshot(
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            config=UserConfig.model_validate_json(row["config"]),
            total=row["total"],
            recommended=row["recommended"],
            within_budget=row["within_budget"],
            opportunities=[
                ScoredOpportunity.model_validate(o) for o in json.loads(row["opportunities"])
            ],
        )

"""
Detection storage (sqlite).

Four append-only tables keyed by a generated detection id:

  ai_detections         one summary row per analysis
  detection_indicators  one row per indicator
  text_sections         one row per flagged section
  uploaded_files        one row for analyses that started from a document

All rows of an analysis are written in a single transaction, so a failed
save leaves nothing behind.
"""

import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from plume_cli.errors import StorageError
from plume_cli.log import get_logger
from plume_cli.models import (
    AgentAttribution,
    AnalysisResult,
    AnalysisType,
    Indicator,
    Section,
    SuspicionLevel,
    UploadedFile,
)

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS ai_detections (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    original_text TEXT NOT NULL,
    analysis_type TEXT NOT NULL,
    ai_probability REAL NOT NULL,
    overall_score REAL NOT NULL,
    suspected_ai_agent TEXT,
    agent_indicator TEXT,
    agent_threshold REAL,
    agent_score REAL
);
CREATE TABLE IF NOT EXISTS detection_indicators (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    detection_id TEXT NOT NULL REFERENCES ai_detections(id),
    position INTEGER NOT NULL,
    indicator_name TEXT NOT NULL,
    score REAL NOT NULL,
    description TEXT,
    weight REAL NOT NULL
);
CREATE TABLE IF NOT EXISTS text_sections (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    detection_id TEXT NOT NULL REFERENCES ai_detections(id),
    section_text TEXT NOT NULL,
    start_position INTEGER NOT NULL,
    end_position INTEGER NOT NULL,
    suspicion_level TEXT NOT NULL,
    ai_probability INTEGER NOT NULL,
    reasoning TEXT
);
CREATE TABLE IF NOT EXISTS uploaded_files (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    detection_id TEXT NOT NULL REFERENCES ai_detections(id),
    created_at TEXT NOT NULL,
    filename TEXT NOT NULL,
    file_type TEXT NOT NULL,
    file_size INTEGER NOT NULL,
    extracted_text TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_indicators_detection ON detection_indicators(detection_id);
CREATE INDEX IF NOT EXISTS idx_sections_detection ON text_sections(detection_id);
"""


class DetectionStore:
    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_tables(self) -> None:
        try:
            conn = self._connect()
            try:
                conn.executescript(SCHEMA)
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(f"Cannot initialise {self.db_path}: {exc}") from exc

    def save(self, result: AnalysisResult, uploaded: Optional[UploadedFile] = None) -> str:
        """Persist one analysis; returns the new detection id."""
        detection_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc).isoformat()
        attribution = result.attribution

        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO ai_detections (id, created_at, original_text, analysis_type,
                            ai_probability, overall_score, suspected_ai_agent,
                            agent_indicator, agent_threshold, agent_score)
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            detection_id, now, result.original_text, result.analysis_type.value,
                            result.ai_probability, result.ai_probability, result.suspected_agent,
                            attribution.indicator_name if attribution else None,
                            attribution.threshold if attribution else None,
                            attribution.score if attribution else None,
                        ),
                    )
                    conn.executemany(
                        """
                        INSERT INTO detection_indicators (detection_id, position, indicator_name,
                            score, description, weight)
                        VALUES (?, ?, ?, ?, ?, ?)
                        """,
                        [
                            (detection_id, pos, i.name, i.score, i.description, i.weight)
                            for pos, i in enumerate(result.indicators)
                        ],
                    )
                    conn.executemany(
                        """
                        INSERT INTO text_sections (detection_id, section_text, start_position,
                            end_position, suspicion_level, ai_probability, reasoning)
                        VALUES (?, ?, ?, ?, ?, ?, ?)
                        """,
                        [
                            (detection_id, s.text, s.start_position, s.end_position,
                             s.suspicion_level.value, s.ai_probability, s.reasoning)
                            for s in result.sections
                        ],
                    )
                    if uploaded is not None:
                        conn.execute(
                            """
                            INSERT INTO uploaded_files (detection_id, created_at, filename,
                                file_type, file_size, extracted_text)
                            VALUES (?, ?, ?, ?, ?, ?)
                            """,
                            (detection_id, now, uploaded.filename, uploaded.mime_type,
                             uploaded.size, uploaded.extracted_text),
                        )
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(f"Cannot save detection: {exc}") from exc

        logger.info("detection_saved", detection_id=detection_id,
                    indicators=len(result.indicators), sections=len(result.sections),
                    with_file=uploaded is not None)
        return detection_id

    def list_detections(self, limit: int = 20) -> List[Dict]:
        """Most recent detection summaries, newest first."""
        try:
            conn = self._connect()
            try:
                rows = conn.execute(
                    """
                    SELECT d.id, d.created_at, d.analysis_type, d.ai_probability,
                           d.suspected_ai_agent, length(d.original_text) AS characters,
                           f.filename
                    FROM ai_detections d
                    LEFT JOIN uploaded_files f ON f.detection_id = d.id
                    ORDER BY d.created_at DESC
                    LIMIT ?
                    """,
                    (limit,),
                ).fetchall()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(f"Cannot read detections: {exc}") from exc

        return [
            {
                "id": r["id"],
                "createdAt": r["created_at"],
                "analysisType": r["analysis_type"],
                "aiProbability": r["ai_probability"],
                "suspectedAgent": r["suspected_ai_agent"],
                "characters": r["characters"],
                "fileName": r["filename"],
            }
            for r in rows
        ]

    def get_detection(self, detection_id: str) -> Optional[AnalysisResult]:
        try:
            conn = self._connect()
            try:
                row = conn.execute(
                    "SELECT * FROM ai_detections WHERE id = ?", (detection_id,)
                ).fetchone()
                if row is None:
                    return None
                indicator_rows = conn.execute(
                    "SELECT * FROM detection_indicators WHERE detection_id = ? ORDER BY position",
                    (detection_id,),
                ).fetchall()
                section_rows = conn.execute(
                    "SELECT * FROM text_sections WHERE detection_id = ? ORDER BY start_position",
                    (detection_id,),
                ).fetchall()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(f"Cannot read detection {detection_id}: {exc}") from exc

        attribution = None
        if row["suspected_ai_agent"]:
            attribution = AgentAttribution(
                label=row["suspected_ai_agent"],
                indicator_name=row["agent_indicator"] or "",
                threshold=row["agent_threshold"] or 0.0,
                score=row["agent_score"] or 0.0,
            )
        return AnalysisResult(
            id=row["id"],
            ai_probability=row["ai_probability"],
            indicators=tuple(
                Indicator(r["indicator_name"], r["score"], r["description"] or "", r["weight"])
                for r in indicator_rows
            ),
            sections=tuple(
                Section(
                    text=r["section_text"],
                    start_position=r["start_position"],
                    end_position=r["end_position"],
                    suspicion_level=SuspicionLevel(r["suspicion_level"]),
                    ai_probability=r["ai_probability"],
                    reasoning=r["reasoning"] or "",
                )
                for r in section_rows
            ),
            original_text=row["original_text"],
            analysis_type=AnalysisType(row["analysis_type"]),
            attribution=attribution,
        )

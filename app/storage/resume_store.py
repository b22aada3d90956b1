from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any

from app.core.config import settings
from app.schemas.analysis import AnalysisResult, ATSCompatibilityResult
from app.schemas.resumes import HistoryEntry, ResumeRecord, ResumeSummary

_LIST_COLUMNS = ("strengths", "weaknesses", "suggestions", "key_skills", "matched_keywords", "missing_keywords")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _dump(values: list[str] | None) -> str:
    return json.dumps(list(values or []), ensure_ascii=False)


def _load(raw: str | None) -> list[str]:
    if not raw:
        return []
    value = json.loads(raw)
    return [str(item) for item in value] if isinstance(value, list) else []


def _record(row: sqlite3.Row) -> ResumeRecord:
    data: dict[str, Any] = dict(row)
    for column in _LIST_COLUMNS:
        data[column] = _load(data.pop(f"{column}_json", None))
    return ResumeRecord(**data)


class ResumeStore:
    """SQLite persistence for resumes and their ATS score history."""

    def __init__(self, db_path: str | Path):
        self._db_path = Path(db_path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._db_path, timeout=5)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS resumes (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_id TEXT NOT NULL,
                    file_name TEXT NOT NULL,
                    file_url TEXT NOT NULL,
                    blob_id TEXT NOT NULL,
                    file_type TEXT NOT NULL,
                    file_size INTEGER NOT NULL,
                    original_text TEXT NOT NULL,
                    overall_score INTEGER,
                    strengths_json TEXT,
                    weaknesses_json TEXT,
                    suggestions_json TEXT,
                    key_skills_json TEXT,
                    summary TEXT NOT NULL DEFAULT '',
                    ats_score INTEGER,
                    matched_keywords_json TEXT,
                    missing_keywords_json TEXT,
                    uploaded_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_resumes_owner
                ON resumes (owner_id, uploaded_at)
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS analysis_history (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    resume_id INTEGER NOT NULL,
                    score INTEGER NOT NULL,
                    analyzed_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_analysis_history_resume
                ON analysis_history (resume_id, analyzed_at)
                """
            )

    def create_resume(
        self,
        *,
        owner_id: str,
        file_name: str,
        file_url: str,
        blob_id: str,
        file_type: str,
        file_size: int,
        original_text: str,
        analysis: AnalysisResult,
    ) -> ResumeRecord:
        now = _utc_now()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO resumes (
                    owner_id, file_name, file_url, blob_id, file_type, file_size, original_text,
                    overall_score, strengths_json, weaknesses_json, suggestions_json, key_skills_json,
                    summary, uploaded_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    owner_id,
                    file_name,
                    file_url,
                    blob_id,
                    file_type,
                    file_size,
                    original_text,
                    analysis.overall_score,
                    _dump(analysis.strengths),
                    _dump(analysis.weaknesses),
                    _dump(analysis.suggestions),
                    _dump(analysis.key_skills),
                    analysis.summary,
                    now,
                    now,
                ),
            )
            resume_id = int(cursor.lastrowid)
        record = self.get_resume(resume_id, owner_id)
        if record is None:
            raise RuntimeError(f"Resume {resume_id} vanished right after insert.")
        return record

    def list_resumes(self, owner_id: str) -> list[ResumeSummary]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, file_name, file_url, file_size, overall_score, ats_score, summary, uploaded_at
                FROM resumes
                WHERE owner_id = ?
                ORDER BY uploaded_at DESC, id DESC
                """,
                (owner_id,),
            ).fetchall()
        return [ResumeSummary(**dict(row)) for row in rows]

    def get_resume(self, resume_id: int, owner_id: str) -> ResumeRecord | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM resumes WHERE id = ? AND owner_id = ?",
                (resume_id, owner_id),
            ).fetchone()
        return _record(row) if row is not None else None

    def delete_resume(self, resume_id: int) -> bool:
        with self._connect() as conn:
            conn.execute("DELETE FROM analysis_history WHERE resume_id = ?", (resume_id,))
            cursor = conn.execute("DELETE FROM resumes WHERE id = ?", (resume_id,))
            return cursor.rowcount > 0

    def update_analysis(self, resume_id: int, analysis: AnalysisResult) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                UPDATE resumes
                SET overall_score = ?, strengths_json = ?, weaknesses_json = ?, suggestions_json = ?,
                    key_skills_json = ?, summary = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    analysis.overall_score,
                    _dump(analysis.strengths),
                    _dump(analysis.weaknesses),
                    _dump(analysis.suggestions),
                    _dump(analysis.key_skills),
                    analysis.summary,
                    _utc_now(),
                    resume_id,
                ),
            )

    def update_ats_result(self, resume_id: int, result: ATSCompatibilityResult) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                UPDATE resumes
                SET ats_score = ?, matched_keywords_json = ?, missing_keywords_json = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    result.ats_score,
                    _dump(result.matched_keywords),
                    _dump(result.missing_keywords),
                    _utc_now(),
                    resume_id,
                ),
            )

    def add_history(self, resume_id: int, score: int) -> HistoryEntry:
        analyzed_at = _utc_now()
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO analysis_history (resume_id, score, analyzed_at) VALUES (?, ?, ?)",
                (resume_id, score, analyzed_at),
            )
            entry_id = int(cursor.lastrowid)
        return HistoryEntry(id=entry_id, resume_id=resume_id, score=score, analyzed_at=analyzed_at)

    def list_history(self, resume_id: int) -> list[HistoryEntry]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, resume_id, score, analyzed_at
                FROM analysis_history
                WHERE resume_id = ?
                ORDER BY analyzed_at DESC, id DESC
                """,
                (resume_id,),
            ).fetchall()
        return [HistoryEntry(**dict(row)) for row in rows]


@lru_cache(maxsize=1)
def get_resume_store() -> ResumeStore:
    store = ResumeStore(settings.resume_db_path)
    store.init_db()
    return store

from __future__ import annotations

import os
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class Database:
    """SQLite store for mood entries and crisis events.

    Conversation text is never written here; crisis rows keep only the
    keyword that triggered the flag.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()
        if path != ":memory:" and os.path.dirname(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._init_schema()

    def _init_schema(self) -> None:
        with self._lock:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS mood_entries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    user_id TEXT,
                    emoji TEXT NOT NULL,
                    emotion TEXT NOT NULL,
                    intensity INTEGER NOT NULL,
                    journal_note TEXT
                )
                """
            )
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS crisis_logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    user_id TEXT,
                    trigger_phrase TEXT,
                    severity TEXT NOT NULL
                )
                """
            )
            self._conn.commit()

    @staticmethod
    def _utc_now_iso() -> str:
        return datetime.now(timezone.utc).isoformat()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def log_mood(
        self,
        emoji: str,
        emotion: str,
        intensity: int,
        journal_note: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> str:
        timestamp = self._utc_now_iso()
        with self._lock:
            self._conn.execute(
                "INSERT INTO mood_entries (timestamp, user_id, emoji, emotion, intensity, journal_note) VALUES (?, ?, ?, ?, ?, ?)",
                (timestamp, user_id, emoji, emotion, intensity, journal_note),
            )
            self._conn.commit()
        return timestamp

    def get_mood_history(self, user_id: Optional[str] = None, last_n: Optional[int] = None) -> List[Dict[str, Any]]:
        query = "SELECT timestamp, emoji, emotion, intensity, journal_note, user_id FROM mood_entries"
        params: tuple = ()
        if user_id:
            query += " WHERE user_id = ?"
            params = (user_id,)
        query += " ORDER BY id ASC"
        with self._lock:
            rows = self._conn.execute(query, params).fetchall()
        if last_n is not None:
            rows = rows[-last_n:]
        return [
            {
                "timestamp": r[0],
                "emoji": r[1],
                "emotion": r[2],
                "intensity": r[3],
                "journal_note": r[4],
                "user_id": r[5],
            }
            for r in rows
        ]

    def log_crisis(self, trigger_phrase: Optional[str], user_id: Optional[str] = None, severity: str = "high") -> str:
        timestamp = self._utc_now_iso()
        with self._lock:
            self._conn.execute(
                "INSERT INTO crisis_logs (timestamp, user_id, trigger_phrase, severity) VALUES (?, ?, ?, ?)",
                (timestamp, user_id, trigger_phrase, severity),
            )
            self._conn.commit()
        return timestamp

    def get_crisis_logs(self, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        query = "SELECT timestamp, user_id, trigger_phrase, severity FROM crisis_logs"
        params: tuple = ()
        if user_id:
            query += " WHERE user_id = ?"
            params = (user_id,)
        with self._lock:
            rows = self._conn.execute(query + " ORDER BY id ASC", params).fetchall()
        return [
            {"timestamp": r[0], "user_id": r[1], "trigger_phrase": r[2], "severity": r[3]}
            for r in rows
        ]

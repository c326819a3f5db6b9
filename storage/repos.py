# storage/repos.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import json
import logging
from typing import Optional

from domain.models import TimerSettings
from storage.db import Database

logger = logging.getLogger(__name__)

SETTINGS_KEY = "com.breaktime.settings"


class AppStateRepo:
    def __init__(self, db: Database):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.conn.execute(
            "SELECT value FROM app_state WHERE key=?",
            (key,),
        ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self.db.conn.execute(
            """
            INSERT INTO app_state(key, value) VALUES(?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            (key, value),
        )
        self.db.conn.commit()

    def delete(self, key: str) -> None:
        self.db.conn.execute("DELETE FROM app_state WHERE key=?", (key,))
        self.db.conn.commit()


class SettingsStore:
    """
    TimerSettings <-> JSON payload under a single app_state key.
    load() never fails: missing or malformed payloads give the defaults.
    """

    def __init__(self, state_repo: AppStateRepo, key: str = SETTINGS_KEY):
        self.state_repo = state_repo
        self.key = key

    def load(self) -> TimerSettings:
        raw = self.state_repo.get(self.key)
        if raw is None:
            return TimerSettings.DEFAULT
        try:
            return TimerSettings.from_payload(json.loads(raw))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning("stored settings are malformed (%s); using defaults", e)
            return TimerSettings.DEFAULT

    def save(self, settings: TimerSettings) -> None:
        self.state_repo.set(self.key, json.dumps(settings.to_payload()))
        logger.info("settings saved")

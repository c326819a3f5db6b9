#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import logging
import os
import tkinter as tk

from core.break_scheduler import BreakScheduler
from core.clock import TkClock
from services.login_item import LoginItemRegistrar
from services.session_orchestrator import SessionOrchestrator
from storage.db import Database
from storage.repos import AppStateRepo, SettingsStore
from ui.status_window import StatusWindow

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = logging.getLogger("breaktime")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="BreakTime work/break reminder")
    parser.add_argument(
        "--db",
        default=os.path.join(os.path.expanduser("~"), ".breaktime.db"),
        help="SQLite file holding the saved settings",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get("BREAKTIME_LOG_LEVEL", "INFO"),
        help="one of %(choices)s",
    )
    parser.add_argument(
        "--autostart",
        action="store_true",
        help="start a work timer right away (used by the login item)",
    )
    args = parser.parse_args(argv)
    # argparse does not check a default against choices
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid BREAKTIME_LOG_LEVEL {args.log_level!r} (choose from {LOG_LEVELS})")
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    db = Database(db_path=args.db)
    db.init_schema()

    settings_store = SettingsStore(AppStateRepo(db))
    settings = settings_store.load()

    login_items = LoginItemRegistrar()
    login_items.sync(settings.start_at_login)

    root = tk.Tk()
    scheduler = BreakScheduler(TkClock(root), settings=settings)
    orchestrator = SessionOrchestrator(
        scheduler, settings_store=settings_store, login_items=login_items
    )

    app = StatusWindow(root, orchestrator, settings_store)
    orchestrator.attach(app)

    if args.autostart:
        orchestrator.start_work()

    logger.info("BreakTime is running")
    try:
        root.mainloop()
    finally:
        orchestrator.close()
        db.close()


if __name__ == "__main__":
    main()

# -*- coding: utf-8 -*-

import logging
import os
import sys
from typing import Optional

logger = logging.getLogger(__name__)

DESKTOP_FILE = "breaktime.desktop"


def _default_autostart_dir() -> str:
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(
        os.path.expanduser("~"), ".config"
    )
    return os.path.join(base, "autostart")


def _default_command() -> str:
    app = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "app.py")
    return f'"{sys.executable}" "{app}" --autostart'


class LoginItemRegistrar:
    """
    Start-at-login via an XDG autostart entry.
    Failures are logged and reported as False, never raised.
    """

    def __init__(self, autostart_dir: Optional[str] = None, command: Optional[str] = None):
        self.autostart_dir = autostart_dir or _default_autostart_dir()
        self.command = command or _default_command()

    @property
    def path(self) -> str:
        return os.path.join(self.autostart_dir, DESKTOP_FILE)

    def is_enabled(self) -> bool:
        return os.path.isfile(self.path)

    def sync(self, enabled: bool) -> bool:
        """
        Make the autostart entry match `enabled`. Returns True on success.
        """
        try:
            if enabled and not self.is_enabled():
                os.makedirs(self.autostart_dir, exist_ok=True)
                with open(self.path, "w", encoding="utf-8") as f:
                    f.write(self._desktop_entry())
                logger.info("registered login item at %s", self.path)
            elif not enabled and self.is_enabled():
                os.remove(self.path)
                logger.info("removed login item %s", self.path)
            return True
        except OSError:
            logger.exception("could not update login item %s", self.path)
            return False

    def _desktop_entry(self) -> str:
        return "\n".join(
            [
                "[Desktop Entry]",
                "Type=Application",
                "Name=BreakTime",
                "Comment=Work/break reminder",
                f"Exec={self.command}",
                "X-GNOME-Autostart-enabled=true",
                "",
            ]
        )

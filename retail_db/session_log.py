"""
Session log — append-only, timestamped audit lines for one console/API session.

Line format: ``YYYY-MM-DD HH:MM:SS - message``. If the file can't be
written the line goes to the console instead.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable

from retail_db.config import LOG_FILE

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class SessionLog:
    def __init__(
        self,
        path: Path = LOG_FILE,
        clock: Callable[[], datetime] = datetime.now,
        announce: bool = True,
    ) -> None:
        self.path = Path(path)
        self._clock = clock
        if announce:
            self.log("Session started")

    def format(self, message: str) -> str:
        return f"{self._clock():{TIMESTAMP_FORMAT}} - {message}"

    def log(self, message: str) -> str:
        """Append one line; returns the line written."""
        line = self.format(message)
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError:
            print(f"Log: {line}")
        return line


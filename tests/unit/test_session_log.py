"""Unit tests for the session log."""

from __future__ import annotations

from pathlib import Path

from retail_db.session_log import SessionLog


class TestSessionLog:
    def test_announces_session_start(self, session_log: SessionLog) -> None:
        assert session_log.path.read_text(encoding="utf-8") == "2024-03-05 14:07:09 - Session started\n"

    def test_appends_lines(self, session_log: SessionLog) -> None:
        line = session_log.log("Deleted 1 record(s)")
        assert line == "2024-03-05 14:07:09 - Deleted 1 record(s)"
        lines = session_log.path.read_text(encoding="utf-8").splitlines()
        assert lines[-1] == line
        assert len(lines) == 2

    def test_keeps_existing_content(self, tmp_path: Path, fixed_clock) -> None:
        path = tmp_path / "log.txt"
        path.write_text("earlier\n", encoding="utf-8")
        SessionLog(path, clock=fixed_clock).log("again")
        assert path.read_text(encoding="utf-8").splitlines()[0] == "earlier"

    def test_quiet_start(self, tmp_path: Path, fixed_clock) -> None:
        log = SessionLog(tmp_path / "log.txt", clock=fixed_clock, announce=False)
        assert not log.path.exists()

    def test_unwritable_file_falls_back_to_console(self, tmp_path: Path, fixed_clock, capsys) -> None:
        log = SessionLog(tmp_path / "missing" / "log.txt", clock=fixed_clock, announce=False)
        line = log.log("still recorded")
        assert capsys.readouterr().out == f"Log: {line}\n"

    def test_non_ascii_messages(self, session_log: SessionLog) -> None:
        session_log.log("Категория «Радиоуправляемые игрушки 12+»")
        assert "«Радиоуправляемые" in session_log.path.read_text(encoding="utf-8")

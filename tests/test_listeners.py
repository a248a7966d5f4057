"""Tests for SessionLogger, MouseSupport and CommandHistory."""

import threading
from unittest.mock import patch

import pytest

from mudsettings.core.listeners import CommandHistory, MouseSupport, SessionLogger


# ---------------------------------------------------------------------------
# SessionLogger
# ---------------------------------------------------------------------------

class TestSessionLogger:

    @pytest.fixture
    def session_log(self, memory_store, tmp_path):
        log = SessionLogger(memory_store, tmp_path / "logs")
        memory_store.setting_changed.connect(log.on_setting_changed)
        yield log
        log.close()

    def test_disabled_by_default(self, session_log, tmp_path):
        assert session_log.write("look") is False
        assert not session_log.is_open
        assert not (tmp_path / "logs").exists()

    def test_writes_when_enabled(self, session_log, memory_store):
        memory_store.set("logging_enabled", True)
        assert session_log.write("look")
        assert session_log.write("north")
        session_log.close()
        assert session_log.log_path.read_text() == "look\nnorth\n"

    def test_toggle_observed_on_next_line(self, session_log, memory_store):
        memory_store.set("logging_enabled", True)
        session_log.write("kept")
        memory_store.set("logging_enabled", False)
        assert not session_log.is_open
        assert session_log.write("dropped") is False
        assert session_log.log_path.read_text() == "kept\n"

    def test_open_failure_does_not_raise(self, session_log, memory_store):
        memory_store.set("logging_enabled", True)
        with patch("builtins.open", side_effect=OSError("permission denied")):
            assert session_log.write("look") is False
        assert not session_log.is_open

    def test_write_after_external_close(self, session_log, memory_store):
        memory_store.set("logging_enabled", True)
        assert session_log.write("look")
        session_log._file.close()
        assert session_log.write("north") is False
        assert not session_log.is_open

    def test_toggle_from_other_thread_while_writing(self, session_log, memory_store):
        errors = []
        stop = threading.Event()

        def writer():
            try:
                while not stop.is_set():
                    session_log.write("look")
            except Exception as e:
                errors.append(e)

        t = threading.Thread(target=writer)
        t.start()
        try:
            for _ in range(100):
                memory_store.set("logging_enabled", True)
                memory_store.set("logging_enabled", False)
        finally:
            stop.set()
            t.join()
        assert errors == []
        assert not session_log.is_open

    def test_default_log_dir(self, memory_store, tmp_path, monkeypatch):
        monkeypatch.setattr("mudsettings.utils.logger.os.name", "posix")
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        log = SessionLogger(memory_store)
        assert log.log_dir == tmp_path / "mudsettings" / "logs"


# ---------------------------------------------------------------------------
# MouseSupport
# ---------------------------------------------------------------------------

class TestMouseSupport:

    def test_disabled_ignores_wheel(self, memory_store):
        mouse = MouseSupport(memory_store)
        assert mouse.on_wheel(1) is False
        assert mouse.scroll_offset == 0

    def test_enabled_scrolls(self, memory_store):
        memory_store.set("mouse_enabled", True)
        mouse = MouseSupport(memory_store)
        assert mouse.on_wheel(2)
        assert mouse.scroll_offset == 2 * MouseSupport.LINES_PER_NOTCH
        mouse.on_wheel(-10)
        assert mouse.scroll_offset == 0

    def test_runtime_toggle_needs_restart(self, memory_store):
        mouse = MouseSupport(memory_store)
        memory_store.set("mouse_enabled", True)
        assert mouse.enabled is False
        assert MouseSupport(memory_store).enabled is True

    def test_reset(self, memory_store):
        memory_store.set("mouse_enabled", True)
        mouse = MouseSupport(memory_store)
        mouse.on_wheel(3)
        mouse.reset()
        assert mouse.scroll_offset == 0


# ---------------------------------------------------------------------------
# CommandHistory
# ---------------------------------------------------------------------------

class TestCommandHistory:

    def test_add_skips_blanks_and_repeats(self, memory_store, tmp_path):
        history = CommandHistory(memory_store, tmp_path / "history")
        for line in ["look", "look", "", "  ", "north", "look"]:
            history.add(line)
        assert history.entries == ["look", "north", "look"]

    def test_max_entries(self, memory_store, tmp_path):
        history = CommandHistory(memory_store, tmp_path / "history", max_entries=2)
        for line in ["a", "b", "c"]:
            history.add(line)
        assert history.entries == ["b", "c"]

    def test_not_saved_when_disabled(self, memory_store, tmp_path):
        history = CommandHistory(memory_store, tmp_path / "history")
        history.add("look")
        history.save()
        assert not (tmp_path / "history").exists()

    def test_save_and_load_when_enabled(self, memory_store, tmp_path):
        memory_store.set("save_history", True)
        history = CommandHistory(memory_store, tmp_path / "history")
        history.add("look")
        history.add("north")
        history.save()

        again = CommandHistory(memory_store, tmp_path / "history")
        again.load()
        assert again.entries == ["look", "north"]

    def test_load_skipped_when_disabled(self, memory_store, tmp_path):
        (tmp_path / "history").write_text("look\n")
        history = CommandHistory(memory_store, tmp_path / "history")
        history.load()
        assert history.entries == []

"""Tests for window teardown; skipped where pyglet cannot load a window backend."""

from types import SimpleNamespace
from unittest import mock

import pytest


@pytest.fixture
def frontend():
    try:
        from chip8 import frontend
    except Exception as e:
        pytest.skip(f"pyglet window backend unavailable: {e}")
    return frontend


class TestShutdown:

    def test_releases_clock_and_audio_once(self, frontend, monkeypatch):
        unscheduled = []
        monkeypatch.setattr(frontend.pyglet.clock, "unschedule", unscheduled.append)
        window = SimpleNamespace(
            _shut_down=False,
            _frame=object(),
            _update_bench=object(),
            beeper=mock.Mock(),
        )

        frontend.Chip8Window.shutdown(window)
        frontend.Chip8Window.shutdown(window)

        assert unscheduled == [window._frame, window._update_bench]
        window.beeper.delete.assert_called_once_with()

    def test_close_shuts_down_first(self, frontend, monkeypatch):
        calls = []
        monkeypatch.setattr(frontend.Chip8Window, "shutdown", lambda self: calls.append("shutdown"))
        monkeypatch.setattr(frontend.pyglet.window.Window, "close", lambda self: calls.append("close"))

        # bare instance, no real window behind it
        window = frontend.Chip8Window.__new__(frontend.Chip8Window)
        window.close()

        assert calls == ["shutdown", "close"]

"""Tests for the last-keystroke-wins search debouncer."""

from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer
import pytest

from app.views.components.search_debouncer import SearchDebouncer


@pytest.fixture
def debouncer(qt_app):
    debouncer = SearchDebouncer(delay_ms=20)
    fired = []
    debouncer.triggered.connect(fired.append)
    debouncer.fired = fired
    yield debouncer
    debouncer.cancel()


def _wait(ms):
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()
    QCoreApplication.processEvents()


class TestSearchDebouncer:
    def test_delay(self, debouncer):
        assert debouncer.delay_ms == 20

    def test_last_text_wins(self, debouncer):
        for text in ("c", "ca", "cat"):
            debouncer.push(text)
        assert debouncer.is_pending
        _wait(100)
        assert debouncer.fired == ["cat"]
        assert not debouncer.is_pending

    def test_flush_emits_immediately(self, debouncer):
        debouncer.push("tabby")
        debouncer.flush()
        assert debouncer.fired == ["tabby"]
        _wait(60)
        assert debouncer.fired == ["tabby"]

    def test_cancel_discards(self, debouncer):
        debouncer.push("x")
        debouncer.cancel()
        _wait(60)
        assert debouncer.fired == []

    def test_flush_without_pending_is_noop(self, debouncer):
        debouncer.flush()
        assert debouncer.fired == []

"""Tests for the checkable category list model."""

from PySide6.QtCore import Qt

from app.views.category_model_builder import build_model
from app.views.constants import CATEGORY_NAME_ROLE
from core.models import CategoryEntry


class TestBuildModel:
    def test_rows_mirror_entries_and_selection(self, qt_app):
        entries = [CategoryEntry("Orange", 3), CategoryEntry("Black", 1)]
        model = build_model(entries, {"Black"})
        assert model.rowCount() == 2
        first, second = model.item(0), model.item(1)
        assert first.text() == "Orange (3)"
        assert first.data(CATEGORY_NAME_ROLE) == "Orange"
        assert first.checkState() == Qt.Unchecked
        assert second.checkState() == Qt.Checked
        assert first.isCheckable() and not first.isEditable()

    def test_empty(self, qt_app):
        assert build_model([], set()).rowCount() == 0

from __future__ import annotations

from collections.abc import Container, Iterable

from PySide6.QtCore import Qt
from PySide6.QtGui import QStandardItem, QStandardItemModel

from app.views.constants import CATEGORY_NAME_ROLE


def build_model(entries: Iterable[object], selected: Container[str]) -> QStandardItemModel:
    """Builds a checkable list model of ``name (count)`` rows.

    Check state mirrors `selected`; the raw name is kept under CATEGORY_NAME_ROLE.
    """
    model = QStandardItemModel()

    for entry in entries:
        name = str(getattr(entry, "name", "") or "")
        count = int(getattr(entry, "count", 0) or 0)
        item = QStandardItem(f"{name} ({count})")
        item.setEditable(False)
        item.setCheckable(True)
        item.setCheckState(Qt.Checked if name in selected else Qt.Unchecked)
        item.setData(name, CATEGORY_NAME_ROLE)
        model.appendRow(item)

    return model

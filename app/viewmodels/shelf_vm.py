from __future__ import annotations

from dataclasses import dataclass, field

from app.viewmodels.card_vm import CardVM


@dataclass
class ShelfVM:
    title: str
    cards: list[CardVM] = field(default_factory=list)
    error: str | None = None

    @property
    def is_visible(self) -> bool:
        return bool(self.cards) or self.error is not None

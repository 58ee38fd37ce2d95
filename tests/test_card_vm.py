"""Tests for card projection in grouped and per-item modes."""

from core.models import ViewMode
from core.services.media_resolver import resolve_media
from core.services.render_service import PLACEHOLDER_URL
from app.viewmodels.card_vm import CardVM, build_grouped_cards, build_item_cards

from conftest import image, make_record, video


def _records_with_media_counts(counts):
    return [
        make_record(str(i), media=[image(f"https://x/{i}-{j}.jpg") for j in range(n)])
        for i, n in enumerate(counts)
    ]


class TestBuildCards:
    """Card counts per view mode."""

    def test_grouped_one_card_per_record(self):
        cards = build_grouped_cards(_records_with_media_counts([1, 3, 2]))
        assert len(cards) == 3
        assert all(c.media_index == 0 for c in cards)

    def test_per_item_one_card_per_media(self):
        cards = build_item_cards(_records_with_media_counts([1, 3, 2]))
        assert len(cards) == 6
        assert [(c.record_id, c.media_index) for c in cards][:4] == [
            ("0", 0),
            ("1", 0),
            ("1", 1),
            ("1", 2),
        ]

    def test_per_item_skips_records_without_media(self):
        assert len(build_item_cards(_records_with_media_counts([0, 2]))) == 2

    def test_grouped_keeps_records_without_media(self):
        (card,) = build_grouped_cards(_records_with_media_counts([0]))
        assert not card.has_media
        assert card.media.url == PLACEHOLDER_URL


class TestCardVM:
    """Display properties of a single card."""

    def test_badge_only_in_grouped_mode(self):
        record = _records_with_media_counts([3])[0]
        assert CardVM(record).badge == "+2"
        assert CardVM(record, 1, ViewMode.PER_ITEM).badge is None
        assert CardVM(_records_with_media_counts([1])[0]).badge is None

    def test_grouped_title_falls_back_to_first_media(self):
        record = make_record(title=None, media=[image(title="Media title")])
        assert CardVM(record).title == "Media title"

    def test_per_item_prefers_media_text(self):
        record = make_record(
            title="Record",
            description="Record description",
            media=[image(title="Item", description="Item description"), image()],
        )
        first = CardVM(record, 0, ViewMode.PER_ITEM)
        second = CardVM(record, 1, ViewMode.PER_ITEM)
        assert (first.title, first.description) == ("Item", "Item description")
        assert (second.title, second.description) == ("Record", "Record description")

    def test_description_limits(self):
        record = make_record(description="d" * 100, media=[image()])
        assert CardVM(record).description == "d" * 80 + "..."
        assert CardVM(record, 0, ViewMode.PER_ITEM).description == "d" * 60 + "..."

    def test_chips(self):
        record = make_record(categories=["A", "B", "C"])
        card = CardVM(record)
        assert card.chips == ["A", "B"]
        assert card.overflow_chip == "+1"

    def test_video_card(self):
        assert CardVM(make_record(media=[video()])).is_video

    def test_video_url_declared_as_image_renders_as_video(self):
        row = {"image_data": [{"url": "https://x/clip.mp4", "type": "image"}]}
        record = make_record(media=resolve_media(row))
        assert build_grouped_cards([record])[0].is_video
        assert build_item_cards([record])[0].is_video

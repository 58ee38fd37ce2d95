"""Tests for normalizing store rows into canonical media lists."""

from core.models import MediaType
from core.services.media_resolver import is_video_url, resolve_media


class TestIsVideoUrl:
    """Video detection by extension and path segment."""

    def test_known_extensions(self):
        assert is_video_url("https://x/a.mp4")
        assert is_video_url("https://x/a.webm")
        assert is_video_url("https://x/a.mov")

    def test_case_insensitive(self):
        assert is_video_url("https://x/VIDEO/a.MP4")
        assert is_video_url("https://x/clip.MOV")

    def test_video_path_segment(self):
        assert is_video_url("https://cdn.example/video/12345")

    def test_query_string_and_fragment_ignored(self):
        assert is_video_url("https://x/a.mp4?token=abc")
        assert is_video_url("https://x/a.webm#t=10")

    def test_images_and_empty(self):
        assert not is_video_url("https://x/a.jpg")
        assert not is_video_url("https://x/mp4.png")
        assert not is_video_url("")
        assert not is_video_url(None)


class TestResolveMedia:
    """Structured media wins, legacy URLs are the fallback."""

    def test_structured_preferred_over_legacy(self):
        row = {
            "image_data": [{"url": "https://x/a.jpg", "type": "image", "title": "A"}],
            "image_urls": ["https://x/legacy.jpg"],
        }
        media = resolve_media(row)
        assert [m.url for m in media] == ["https://x/a.jpg"]
        assert media[0].title == "A"

    def test_structured_keeps_metadata_and_declared_type(self):
        row = {
            "image_data": [
                {
                    "url": "https://x/clip",
                    "type": "video",
                    "description": "Zoomies",
                    "categories": ["Playful"],
                }
            ]
        }
        (item,) = resolve_media(row)
        assert item.type is MediaType.VIDEO
        assert item.description == "Zoomies"
        assert item.categories == ["Playful"]

    def test_declared_image_with_video_url_plays_as_video(self):
        row = {"image_data": [{"url": "https://x/clip.mp4", "type": "image"}]}
        (item,) = resolve_media(row)
        assert item.type is MediaType.IMAGE
        assert item.is_video

    def test_declared_video_with_image_url_stays_video(self):
        row = {"image_data": [{"url": "https://x/still.jpg", "type": "video"}]}
        assert resolve_media(row)[0].is_video

    def test_structured_unknown_type_is_inferred(self):
        row = {"image_data": [{"url": "https://x/a.mp4", "type": "gif"}]}
        assert resolve_media(row)[0].type is MediaType.VIDEO

    def test_structured_entries_without_url_skipped(self):
        row = {"image_data": [{"title": "no url"}, {"url": "https://x/b.jpg"}]}
        assert [m.url for m in resolve_media(row)] == ["https://x/b.jpg"]

    def test_legacy_types_inferred_in_order(self):
        row = {"image_urls": ["https://x/a.jpg", "https://x/b.mp4"]}
        media = resolve_media(row)
        assert [m.type for m in media] == [MediaType.IMAGE, MediaType.VIDEO]

    def test_empty_structured_falls_back_to_legacy(self):
        row = {"image_data": [], "image_urls": ["https://x/a.jpg"]}
        assert len(resolve_media(row)) == 1

    def test_nothing_yields_empty_list(self):
        assert resolve_media({"image_data": [], "image_urls": []}) == []
        assert resolve_media({}) == []
        assert resolve_media({"image_data": None, "image_urls": None}) == []

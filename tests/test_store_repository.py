"""Tests for the REST record store, with HTTP mocked out."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from core.models import MediaType
from core.services.interfaces import StoreError
from infrastructure.store_repository import RestRecordStore, row_to_record

GET = "infrastructure.store_repository.requests.get"


def _response(payload, ok=True, status=200):
    response = MagicMock()
    response.ok = ok
    response.status_code = status
    response.json.return_value = payload
    return response


@pytest.fixture
def store():
    return RestRecordStore("https://proj.example.co/", "anon-key", table="cats", timeout=5)


class TestRowToRecord:
    def test_full_row(self):
        record = row_to_record(
            {
                "id": 7,
                "title": "Tom",
                "description": "",
                "image_urls": ["https://x/a.jpg", "https://x/b.webm"],
                "categories": ["Orange", None, ""],
                "is_featured": True,
                "created_at": "2024-05-01T10:00:00Z",
            }
        )
        assert record.id == "7"
        assert record.description is None
        assert [m.type for m in record.media] == [MediaType.IMAGE, MediaType.VIDEO]
        assert record.categories == ["Orange"]
        assert record.is_featured
        assert record.created_at.year == 2024

    def test_missing_id(self):
        assert row_to_record({"title": "x"}) is None

    def test_featured_requires_true(self):
        assert not row_to_record({"id": "1", "is_featured": "yes"}).is_featured
        assert not row_to_record({"id": "1", "is_featured": None}).is_featured


class TestRestRecordStore:
    """Query construction, headers and error mapping."""

    def test_requires_table(self):
        with pytest.raises(ValueError):
            RestRecordStore("https://x", "k", table="")

    def test_select_all_sends_key_headers(self, store):
        with patch(GET, return_value=_response([{"id": "1"}])) as get:
            records = store.select_all()
        assert [r.id for r in records] == ["1"]
        url = get.call_args.args[0]
        assert url == "https://proj.example.co/rest/v1/cats?select=*"
        headers = get.call_args.kwargs["headers"]
        assert headers["apikey"] == "anon-key"
        assert headers["Authorization"] == "Bearer anon-key"
        assert get.call_args.kwargs["timeout"] == 5

    def test_select_equality_filters(self, store):
        with patch(GET, return_value=_response([])) as get:
            store.select({"title": "Tom Cat"})
        assert get.call_args.args[0].endswith("select=*&title=eq.Tom%20Cat")

    def test_select_without_filters_is_select_all(self, store):
        with patch(GET, return_value=_response([])) as get:
            store.select({})
        assert get.call_args.args[0].endswith("?select=*")

    def test_select_by_category_uses_containment(self, store):
        with patch(GET, return_value=_response([])) as get:
            store.select_by_category("Orange")
        assert get.call_args.args[0].endswith("categories=cs.{Orange}")

    def test_select_by_categories_encodes_json_array(self, store):
        with patch(GET, return_value=_response([])) as get:
            store.select_by_categories(["A", "B"])
        assert "categories=cs.%5B%22A%22%2C%20%22B%22%5D" in get.call_args.args[0]

    def test_unique_categories(self, store):
        rows = [{"categories": ["b", "a"]}, {"categories": ["a"]}, {"categories": None}]
        with patch(GET, return_value=_response(rows)):
            assert store.unique_categories() == ["a", "b"]

    def test_bad_rows_are_skipped(self, store):
        rows = [{"id": "1"}, "garbage", {"title": "no id"}, {"id": "2"}]
        with patch(GET, return_value=_response(rows)):
            assert [r.id for r in store.select_all()] == ["1", "2"]

    def test_network_error_raises_store_error(self, store):
        with patch(GET, side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(StoreError, match="refused"):
                store.select_all()

    def test_http_error_uses_body_message(self, store):
        response = _response({"message": "permission denied"}, ok=False, status=401)
        with patch(GET, return_value=response):
            with pytest.raises(StoreError, match="permission denied"):
                store.select_all()

    def test_http_error_without_body(self, store):
        response = _response(None, ok=False, status=500)
        response.json.side_effect = ValueError("no json")
        with patch(GET, return_value=response):
            with pytest.raises(StoreError, match="Failed to fetch records"):
                store.select_all()

    def test_non_list_payload(self, store):
        with patch(GET, return_value=_response({"id": "1"})):
            with pytest.raises(StoreError, match="unexpected response shape"):
                store.select_all()

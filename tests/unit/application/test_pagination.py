"""Unit tests for pagination primitives."""

from __future__ import annotations

import pytest

from logfanout.application.pagination import Page, PageRequest, Sort, SortDirection
from logfanout.kernel.errors import ValidationError


class TestPageRequest:
    def test_defaults(self) -> None:
        pr = PageRequest()
        assert pr.page == 1
        assert pr.size == 50

    def test_offset(self) -> None:
        assert PageRequest(page=3, size=10).offset == 20

    def test_page_zero_raises(self) -> None:
        with pytest.raises(ValueError):
            PageRequest(page=0)

    def test_size_zero_raises(self) -> None:
        with pytest.raises(ValueError):
            PageRequest(size=0)

    def test_size_max_raises(self) -> None:
        with pytest.raises(ValueError):
            PageRequest(size=1001)

    def test_from_params(self) -> None:
        assert PageRequest.from_params("3", "20") == PageRequest(page=3, size=20)
        assert PageRequest.from_params(None, "") == PageRequest()

    def test_from_params_rejects(self) -> None:
        with pytest.raises(ValidationError) as info:
            PageRequest.from_params("first", "5000")
        assert info.value.fields == ["page", "limit"]


class TestSort:
    def test_default_is_newest_first(self) -> None:
        s = Sort()
        assert s.field == "created_at"
        assert s.direction is SortDirection.DESC
        assert s.descending

    def test_ascending(self) -> None:
        assert not Sort("priority", SortDirection.ASC).descending

    def test_unknown_field_raises(self) -> None:
        with pytest.raises(ValueError):
            Sort("metadata")

    def test_from_params(self) -> None:
        assert Sort.from_params("priority", "ASC") == Sort("priority", SortDirection.ASC)
        assert Sort.from_params() == Sort()

    @pytest.mark.parametrize(
        ("sort_by", "sort_order", "field"),
        [("metadata", None, "sort_by"), (None, "up", "sort_order")],
    )
    def test_from_params_rejects(self, sort_by: str | None, sort_order: str | None, field: str) -> None:
        with pytest.raises(ValidationError) as info:
            Sort.from_params(sort_by, sort_order)
        assert info.value.fields == [field]


class TestPage:
    def test_total_pages(self) -> None:
        assert Page(items=[], total=25, page=1, size=10).total_pages == 3

    def test_total_pages_empty(self) -> None:
        assert Page(items=[], total=0, page=1, size=10).total_pages == 0

    def test_navigation(self) -> None:
        page = Page(items=[1, 2], total=25, page=2, size=10)
        assert page.has_next
        assert page.has_previous
        last = Page(items=[1], total=25, page=3, size=10)
        assert not last.has_next

    def test_of_uses_request(self) -> None:
        page = Page.of(["a"], 11, PageRequest(page=2, size=5))
        assert page.page == 2
        assert page.size == 5
        assert page.total == 11

    def test_pagination_metadata(self) -> None:
        page = Page(items=["x"], total=101, page=1, size=50)
        assert page.pagination() == {"page": 1, "limit": 50, "total": 101, "pages": 3}

    def test_to_dict_serializes_items(self) -> None:
        body = Page(items=[1, 2], total=30, page=2, size=10).to_dict(str)
        assert body == {
            "items": ["1", "2"],
            "pagination": {"page": 2, "limit": 10, "total": 30, "pages": 3},
        }

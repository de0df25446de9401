"""Application pagination – page and sort primitives."""
from logfanout.application.pagination.page import Page
from logfanout.application.pagination.page_request import (
    MAX_PAGE_SIZE,
    SORTABLE_FIELDS,
    PageRequest,
    Sort,
    SortDirection,
)

__all__ = ["MAX_PAGE_SIZE", "Page", "PageRequest", "SORTABLE_FIELDS", "Sort", "SortDirection"]

"""Pagination utilities for API v1."""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """Fifty rows per page by default; clients may ask for up to 500."""

    page_size = 50
    page_size_query_param = "page_size"
    max_page_size = 500

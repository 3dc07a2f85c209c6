from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """Page-number pagination shared by every list endpoint.

    ``?page_size=`` lets staff dashboards pull larger pages, capped at 100.
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100

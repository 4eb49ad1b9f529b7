from rest_framework.pagination import PageNumberPagination


class ProductListPagination(PageNumberPagination):
    page_size = 20
    # Clients may override page size with `?limit=`
    page_size_query_param = "limit"
    max_page_size = 100

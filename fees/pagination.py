# fees/pagination.py
from django.conf import settings
from rest_framework.pagination import PageNumberPagination


class FeeCatalogPagination(PageNumberPagination):
    """?page=<n>&per_page=<taille> (15 par défaut)."""
    page_size = getattr(settings, "FEE_CATALOG_PAGE_SIZE", 15)
    page_size_query_param = "per_page"
    max_page_size = getattr(settings, "FEE_CATALOG_MAX_PAGE_SIZE", 100)

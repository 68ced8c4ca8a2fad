from rest_framework import viewsets, filters as drf_filters
from rest_framework.permissions import IsAuthenticated

from django_filters.rest_framework import DjangoFilterBackend

from .models import Fee
from .serializers import FeeSerializer
from .filters import FeeFilter
from .pagination import FeeCatalogPagination


class FeeViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Catalogue des frais facturables (lecture seule).
    Query params : ?page=, ?per_page= (15 par défaut), ?name=, ?amount_min=, ?amount_max=
    """
    queryset = Fee.objects.billable()
    serializer_class = FeeSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = FeeCatalogPagination

    filter_backends = [DjangoFilterBackend, drf_filters.SearchFilter, drf_filters.OrderingFilter]
    filterset_class = FeeFilter
    search_fields = ["name", "description"]
    ordering_fields = ["name", "amount", "created_at"]

# fees/filters.py
from django_filters import rest_framework as filters

from .models import Fee


class FeeFilter(filters.FilterSet):
    """
    Filtres pour le catalogue :
      - name icontains
      - amount_min / amount_max
    """
    name = filters.CharFilter(field_name="name", lookup_expr="icontains")
    amount_min = filters.NumberFilter(field_name="amount", lookup_expr="gte")
    amount_max = filters.NumberFilter(field_name="amount", lookup_expr="lte")

    class Meta:
        model = Fee
        fields = ["name", "amount_min", "amount_max"]

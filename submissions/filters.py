# submissions/filters.py
from django_filters import rest_framework as filters

from .models import Submission, SubmissionStatus


class SubmissionFilter(filters.FilterSet):
    """
    Filtres pour les soumissions :
      - status (pending / accepted)
      - student (id)
      - created_after / created_before
    """
    status = filters.ChoiceFilter(field_name="status", choices=SubmissionStatus.choices)
    student = filters.CharFilter(field_name="student__id", lookup_expr="iexact")
    created_after = filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    created_before = filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model = Submission
        fields = ["status", "student", "created_after", "created_before"]

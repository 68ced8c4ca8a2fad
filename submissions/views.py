# submissions/views.py
import logging

from rest_framework import viewsets, mixins, status, filters as drf_filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from django_filters.rest_framework import DjangoFilterBackend

from core.permissions import IsStudentOwnerOrReviewer
from core.roles import get_role_flags

from .counter import pending_count
from .exceptions import WorkflowError
from .filters import SubmissionFilter
from .models import Submission
from .serializers import SubmissionSerializer, SubmitFeesSerializer, SubmitPaymentSerializer
from .workflow import create_submission, approve_submission

logger = logging.getLogger(__name__)


def _workflow_error_response(exc: WorkflowError):
    return Response({"detail": exc.message}, status=exc.status_code)


class SubmissionViewSet(mixins.CreateModelMixin,
                        mixins.ListModelMixin,
                        mixins.RetrieveModelMixin,
                        viewsets.GenericViewSet):
    queryset = Submission.objects.select_related("student", "reviewed_by").all()
    serializer_class = SubmissionSerializer
    permission_classes = [IsAuthenticated, IsStudentOwnerOrReviewer]

    filter_backends = [DjangoFilterBackend, drf_filters.SearchFilter, drf_filters.OrderingFilter]
    filterset_class = SubmissionFilter
    search_fields = ["student_name", "student__id", "file_reference"]
    ordering_fields = ["created_at", "status", "reviewed_at"]

    def get_queryset(self):
        flags = get_role_flags(self.request.user)
        qs = self.queryset.all()

        if flags and flags.can_review:
            return qs

        if flags and flags.student_id:
            return qs.filter(student_id=flags.student_id)

        return qs.none()

    def create(self, request, *args, **kwargs):
        """
        Soumettre les frais : {student, student_name?, fee_selection, file_reference}
        """
        serializer = SubmitFeesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            submission = create_submission(
                actor=request.user,
                student_id=data["student"],
                student_name=data.get("student_name"),
                fee_selection=data.get("fee_selection"),
                file_reference=data.get("file_reference"),
            )
        except WorkflowError as e:
            return _workflow_error_response(e)

        return Response(SubmissionSerializer(submission).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path=r"students/(?P<student_id>[^/.]+)/approve")
    def approve(self, request, student_id=None):
        """
        Valider le paiement d'un élève : {meta: {...}}
        Toutes ses soumissions en attente passent en "accepted".
        """
        serializer = SubmitPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            accepted = approve_submission(
                actor=request.user,
                student_id=student_id,
                approved_meta=serializer.validated_data.get("meta"),
            )
        except WorkflowError as e:
            return _workflow_error_response(e)
        except Exception:
            logger.exception("Erreur lors de approve for student_id=%s user=%r", student_id, request.user)
            return Response({"detail": "Erreur interne lors de la validation."},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"detail": "Paiement validé.", "student_id": student_id, "accepted": accepted},
                        status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="pending-count")
    def pending(self, request):
        return Response({"pending_count": pending_count()})

# core/views.py
from django.http import JsonResponse

from rest_framework import viewsets, filters
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from .context import build_shared_context
from .models import Student
from .permissions import IsStudentOwnerOrReviewer
from .roles import get_role_flags
from .serializers import StudentSerializer, SharedContextSerializer


# ------------------------------------------------------------------
# STUDENT directory (lecture seule)
# ------------------------------------------------------------------
class StudentViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Student.objects.all()
    serializer_class = StudentSerializer
    permission_classes = [IsAuthenticated, IsStudentOwnerOrReviewer]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["id", "first_name", "last_name", "user__username"]
    ordering_fields = ["first_name", "last_name"]

    def get_queryset(self):
        flags = get_role_flags(self.request.user)
        queryset = Student.objects.select_related("user").all()

        # Reviewer (admin / employee) : tout
        if flags and flags.can_review:
            return queryset

        # Élève : uniquement lui-même
        if flags and flags.student_id:
            return queryset.filter(pk=flags.student_id)

        return queryset.none()


# ------------------------------------------------------------------
# PROFILE VIEW (connected user)
# ------------------------------------------------------------------
class ProfileView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        student = getattr(request.user, "student", None)
        if student is not None:
            return Response(StudentSerializer(student).data)

        user = request.user
        return Response({
            "id": user.id,
            "username": user.username,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
        })


# ------------------------------------------------------------------
# SHARED CONTEXT (auth + rôles + compteur de notifications)
# ------------------------------------------------------------------
class SharedContextView(APIView):
    """
    GET /api/core/context/
    Retourne le contexte partagé par toutes les pages :
      - auth.user, auth.role (is_admin / is_student / is_employee, null si anonyme)
      - notification_count : soumissions en attente
    """
    permission_classes = [AllowAny]

    def get(self, request):
        serializer = SharedContextSerializer(build_shared_context(request.user))
        return Response(serializer.data)


def health(request):
    return JsonResponse({"status": "ok"})

# core/permissions.py
from rest_framework import permissions

from .roles import get_role_flags


class IsStudentOwnerOrReviewer(permissions.BasePermission):
    """
    - Reviewer : voit tout
    - Étudiant : lecture sur ses propres objets (Student ou objet lié à un student)
    """

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        flags = get_role_flags(request.user)
        if flags is None:
            return False

        if flags.can_review:
            return True

        # Récupérer l'étudiant concerné par l'objet
        if obj.__class__.__name__ == "Student":
            student_id = obj.pk
        else:
            student_id = getattr(obj, "student_id", None)

        if student_id is None or not flags.acts_for(student_id):
            return False
        return request.method in permissions.SAFE_METHODS

# core/roles.py
"""
Annuaire des rôles : un seul appel de lookup par requête renvoie
l'ensemble des drapeaux de rôle et des capacités de l'utilisateur.
"""
from dataclasses import dataclass
from typing import Optional

ADMIN_GROUP = "admin"
STUDENT_GROUP = "student"
EMPLOYEE_GROUP = "employee"

REVIEW_PERMISSION = "submissions.review_submission"


@dataclass(frozen=True)
class RoleFlags:
    is_admin: bool = False
    is_student: bool = False
    is_employee: bool = False
    # peut valider les soumissions de paiement
    can_review: bool = False
    # peut soumettre des frais au nom d'un autre élève
    can_submit_for_others: bool = False
    student_id: Optional[str] = None

    def acts_for(self, student_id) -> bool:
        return self.student_id is not None and str(self.student_id) == str(student_id)

    def as_shared(self) -> dict:
        return {
            "is_admin": self.is_admin,
            "is_student": self.is_student,
            "is_employee": self.is_employee,
        }


def get_role_flags(user) -> Optional[RoleFlags]:
    """
    Retourne les drapeaux de rôle de `user`, ou None pour un visiteur anonyme.

    - admin : superuser, staff ou membre du groupe "admin"
    - student : possède un profil Student ou membre du groupe "student"
    - employee : membre du groupe "employee"
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return None

    group_names = set(user.groups.values_list("name", flat=True))
    student = getattr(user, "student", None)

    is_admin = bool(user.is_superuser or user.is_staff or ADMIN_GROUP in group_names)
    return RoleFlags(
        is_admin=is_admin,
        is_student=student is not None or STUDENT_GROUP in group_names,
        is_employee=EMPLOYEE_GROUP in group_names,
        can_review=is_admin or user.has_perm(REVIEW_PERMISSION),
        can_submit_for_others=is_admin,
        student_id=student.pk if student is not None else None,
    )


def shared_role_payload(flags: Optional[RoleFlags]) -> dict:
    if flags is None:
        return {"is_admin": None, "is_student": None, "is_employee": None}
    return flags.as_shared()

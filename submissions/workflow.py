# submissions/workflow.py
"""
Workflow de validation des soumissions de paiement.

    pending --(approve_submission)--> accepted

Aucune transition inverse n'est produite ici.
"""
import logging
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.models import Student
from core.roles import get_role_flags

from .exceptions import ValidationError, NotFoundError, AuthorizationError
from .models import Submission, SubmissionStatus
from .store import submission_store

logger = logging.getLogger(__name__)


def _resolve_student(student_id) -> Student:
    student = Student.objects.select_related("user").filter(pk=student_id).first() if student_id else None
    if student is None:
        raise NotFoundError(f"Élève {student_id!r} introuvable.")
    return student


def create_submission(actor, student_id, student_name: Optional[str], fee_selection, file_reference: str,
                      store=None) -> Submission:
    """
    Crée une soumission `pending` pour l'élève `student_id`.

    - ValidationError si `file_reference` est absent ou vide, ou si un champ dépasse
      sa longueur maximale (aucune écriture)
    - NotFoundError si l'élève n'existe pas
    - AuthorizationError si `actor` n'agit pas pour lui-même et n'est pas admin
    """
    store = store or submission_store

    if not file_reference or not str(file_reference).strip():
        logger.warning("Soumission refusée (fichier manquant) student=%r actor=%r", student_id, actor)
        raise ValidationError("Le fichier justificatif est requis.")

    max_file = Submission._meta.get_field("file_reference").max_length
    if len(str(file_reference).strip()) > max_file:
        raise ValidationError(f"La référence du fichier dépasse {max_file} caractères.")
    max_name = Submission._meta.get_field("student_name").max_length
    if student_name and len(student_name) > max_name:
        raise ValidationError(f"Le nom de l'élève dépasse {max_name} caractères.")

    student = _resolve_student(student_id)

    flags = get_role_flags(actor)
    if flags is None or not (flags.acts_for(student.pk) or flags.can_submit_for_others):
        logger.warning("Soumission refusée (non autorisé) student=%s actor=%r", student.pk, actor)
        raise AuthorizationError("Vous ne pouvez pas soumettre de frais pour cet élève.")

    submission = Submission(
        student=student,
        student_name=student_name or student.full_name[:max_name],
        fee_selection=fee_selection if fee_selection is not None else {},
        file_reference=str(file_reference).strip(),
        status=SubmissionStatus.PENDING,
    )
    store.insert(submission)

    logger.info("Soumission %s créée pour student=%s par user=%s", submission.pk, student.pk, getattr(actor, "pk", None))
    return submission


def approve_submission(actor, student_id, approved_meta, store=None) -> int:
    """
    Valide le paiement d'un élève :
      a) enregistre `approved_meta` tel quel sur le profil de l'élève
      b) passe TOUTES ses soumissions `pending` en `accepted`

    La validation se fait par élève et non par soumission : un élève ayant
    plusieurs soumissions en attente les voit toutes acceptées ensemble.

    Retourne le nombre de soumissions acceptées (0 n'est pas une erreur,
    un second appel est donc sans effet).

    Les deux écritures partagent un transaction.atomic() sur la base par défaut.
    Si le profil et les soumissions sont un jour dans des bases différentes,
    il n'y a pas de rollback compensatoire : un échec de (b) après (a) laisse
    le profil à jour avec des soumissions encore en attente.
    """
    store = store or submission_store

    # permission check avant toute lecture/écriture
    flags = get_role_flags(actor)
    if flags is None or not flags.can_review:
        logger.warning("Validation refusée (non autorisé) student=%r actor=%r", student_id, actor)
        raise AuthorizationError("Vous n'avez pas la permission de valider ce paiement.")

    student = _resolve_student(student_id)
    now = timezone.now()

    with transaction.atomic():
        student.meta = approved_meta if approved_meta is not None else {}
        student.save(update_fields=["meta"])

        accepted = store.update_status_for_student(
            student.pk,
            SubmissionStatus.PENDING,
            SubmissionStatus.ACCEPTED,
            reviewed_by=actor,
            reviewed_at=now,
            updated_at=now,
        )

    logger.info("Paiement validé pour student=%s par user=%s (%d soumission(s) acceptée(s))",
                student.pk, getattr(actor, "pk", None), accepted)

    if accepted and getattr(settings, "SUBMISSION_NOTIFY_ON_ACCEPT", True):
        transaction.on_commit(lambda: _notify_student_accepted(student, accepted, now))

    return accepted


def _notify_student_accepted(student, accepted_count, accepted_at):
    # La notification est secondaire : un échec ne doit pas casser la validation
    try:
        from notifications.service import create_notification_for_user
        create_notification_for_user(
            recipient_user=student.user,
            topic="fees",
            payload={
                "student_id": student.pk,
                "student_name": student.full_name,
                "accepted_count": accepted_count,
                "accepted_at": accepted_at.isoformat(),
            },
            template_key="submission_accepted",
        )
    except Exception:
        logger.exception("Échec notification d'acceptation pour student=%s", student.pk)

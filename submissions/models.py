# submissions/models.py
from django.conf import settings
from django.db import models

from core.models import Student


class SubmissionStatus(models.TextChoices):
    PENDING = "pending", "En attente"
    ACCEPTED = "accepted", "Acceptée"


class SubmissionQuerySet(models.QuerySet):
    def for_student(self, student_id):
        return self.filter(student_id=student_id)


class Submission(models.Model):
    """
    Preuve de paiement soumise par un élève (fichier + sélection de frais).

    Créée toujours en `pending`, passe en `accepted` lors de la validation.
    Pas de retour arrière possible depuis le workflow.
    """
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="submissions")

    # nom affiché au moment de la soumission (pas recalculé ensuite)
    student_name = models.CharField(max_length=150, blank=True)

    # sélection de frais telle qu'envoyée par le front, non validée
    fee_selection = models.JSONField(default=dict, blank=True)

    # référence vers le justificatif déjà stocké
    file_reference = models.CharField(max_length=500)

    status = models.CharField(max_length=20, choices=SubmissionStatus.choices, default=SubmissionStatus.PENDING)

    reviewed_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name="reviewed_submissions")
    reviewed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SubmissionQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="submissions_status_3f1c2a_idx"),
            models.Index(fields=["student", "status"], name="submissions_student_8b7d4e_idx"),
        ]
        permissions = [
            ("review_submission", "Peut valider les soumissions de paiement"),
        ]

    def __str__(self):
        return f"Submission #{self.pk} {self.student_id} ({self.status})"


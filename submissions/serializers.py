# submissions/serializers.py
from rest_framework import serializers

from .models import Submission


class SubmissionSerializer(serializers.ModelSerializer):
    student = serializers.CharField(source="student_id", read_only=True)
    reviewed_by = serializers.SerializerMethodField()

    class Meta:
        model = Submission
        fields = [
            "id",
            "student",
            "student_name",
            "fee_selection",
            "file_reference",
            "status",
            "reviewed_by",
            "reviewed_at",
            "created_at",
        ]
        read_only_fields = fields

    def get_reviewed_by(self, obj):
        user = obj.reviewed_by
        if not user:
            return None
        return {
            "id": getattr(user, "id", None),
            "username": getattr(user, "username", None),
            "first_name": getattr(user, "first_name", None),
            "last_name": getattr(user, "last_name", None),
        }


class SubmitFeesSerializer(serializers.Serializer):
    """
    Entrée de l'action "soumettre les frais".
    Le contrôle du fichier est fait par le workflow (ValidationError).
    """
    student = serializers.CharField()
    student_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    fee_selection = serializers.JSONField(required=False, default=dict)
    file_reference = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)


class SubmitPaymentSerializer(serializers.Serializer):
    """Entrée de l'action "valider le paiement" : métadonnées stockées telles quelles."""
    meta = serializers.JSONField(required=False, default=dict)

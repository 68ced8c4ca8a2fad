# submissions/exceptions.py
from rest_framework import status


class WorkflowError(Exception):
    """Erreur métier du workflow de soumission, remontée telle quelle à l'appelant."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Erreur du workflow de soumission."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(WorkflowError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Données invalides."


class NotFoundError(WorkflowError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Élève introuvable."


class AuthorizationError(WorkflowError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Action non autorisée."

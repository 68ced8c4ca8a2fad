# core/middleware/shared_context.py
import json

from django.conf import settings

from core.roles import get_role_flags, shared_role_payload
from submissions.counter import pending_count


class SharedContextMiddleware:
    """
    Ajoute le contexte partagé à chaque réponse de l'API :
    - X-Notification-Count : nombre de soumissions en attente
    - X-User-Role : drapeaux de rôle (JSON, valeurs null si anonyme)
    Calculé après la vue pour refléter les écritures de la requête courante
    et l'authentification DRF (JWT).
    """

    header_name = "X-Notification-Count"
    role_header_name = "X-User-Role"

    def __init__(self, get_response):
        self.get_response = get_response
        self.path_prefix = getattr(settings, "SHARED_CONTEXT_PATH_PREFIX", "/api/")

    def __call__(self, request):
        response = self.get_response(request)
        if request.path.startswith(self.path_prefix):
            response[self.header_name] = str(pending_count())
            role = shared_role_payload(get_role_flags(getattr(request, "user", None)))
            response[self.role_header_name] = json.dumps(role, separators=(",", ":"))
        return response

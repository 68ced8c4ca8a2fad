# core/context.py
from .roles import get_role_flags, shared_role_payload


def build_shared_context(user):
    """
    Contexte partagé par toutes les réponses : utilisateur connecté,
    drapeaux de rôle et nombre de soumissions en attente (recalculé à chaque appel).
    """
    from submissions.counter import pending_count

    authenticated = user is not None and getattr(user, "is_authenticated", False)
    user_payload = None
    if authenticated:
        user_payload = {
            "id": user.id,
            "username": user.username,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
        }

    return {
        "auth": {
            "user": user_payload,
            "role": shared_role_payload(get_role_flags(user)),
        },
        "notification_count": pending_count(),
    }

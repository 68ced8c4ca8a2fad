# submissions/counter.py
from .models import SubmissionStatus
from .store import submission_store


def pending_count(store=None) -> int:
    """Nombre de soumissions en attente, recalculé à chaque appel (pas de cache)."""
    store = store or submission_store
    return store.count(SubmissionStatus.PENDING)

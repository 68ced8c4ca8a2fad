# submissions/store.py
from .models import Submission


class SubmissionStore:
    """
    Accès persistant aux soumissions. Chaque opération est atomique
    individuellement, sans garantie transactionnelle entre deux appels.
    """

    def __init__(self, model=Submission):
        self.model = model

    def insert(self, submission):
        submission.save(force_insert=True)
        return submission

    def find_by_student(self, student_id, status=None):
        qs = self.model.objects.for_student(student_id)
        if status is not None:
            qs = qs.filter(status=status)
        return qs

    def update_status_for_student(self, student_id, from_status, to_status, **stamp) -> int:
        """
        Passe toutes les soumissions de l'élève de `from_status` à `to_status`.
        Retourne le nombre de lignes modifiées (0..n, 0 n'est pas une erreur).
        `stamp` permet de renseigner des colonnes d'audit (reviewed_by, reviewed_at).
        """
        return (
            self.model.objects
            .for_student(student_id)
            .filter(status=from_status)
            .update(status=to_status, **stamp)
        )

    def count(self, status) -> int:
        return self.model.objects.filter(status=status).count()


submission_store = SubmissionStore()

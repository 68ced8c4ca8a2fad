# fees/models.py
from django.db import models


class FeeQuerySet(models.QuerySet):
    def billable(self):
        """Frais affichables aux élèves : ceux qui ont un nom renseigné."""
        return self.exclude(name__isnull=True).exclude(name="")


class Fee(models.Model):
    """
    Ligne de frais du catalogue (lecture seule pour le workflow de paiement).
    Un frais sans nom n'est pas facturable et n'apparaît pas dans la liste.
    """
    name = models.CharField(max_length=150, null=True, blank=True)
    description = models.TextField(blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = FeeQuerySet.as_manager()

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.name or '-'}: {self.amount}"

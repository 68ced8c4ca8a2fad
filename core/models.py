import random
from django.db import models
from django.conf import settings


# =======================
# Student
# =======================
def generate_student_id():
    """Génère un ID unique sous la forme S000000."""
    while True:
        new_id = f"S{random.randint(0, 999999):06d}"
        if not Student.objects.filter(id=new_id).exists():
            return new_id


class Student(models.Model):
    id = models.CharField(max_length=7, primary_key=True, default=generate_student_id, editable=False)
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)

    first_name = models.CharField(max_length=30, default="", blank=True)
    last_name = models.CharField(max_length=30, default="", blank=True)

    # Métadonnées de paiement validées par l'administration (stockées telles quelles)
    meta = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["first_name", "last_name"]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip() or self.user.username

    def save(self, *args, **kwargs):
        # Auto-sync avec l’utilisateur lié
        if self.user:
            self.first_name = self.user.first_name
            self.last_name = self.user.last_name
        super().save(*args, **kwargs)

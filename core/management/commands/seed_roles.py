# core/management/commands/seed_roles.py
from django.core.management.base import BaseCommand
from django.contrib.auth.models import Group, Permission

from core.roles import ADMIN_GROUP, STUDENT_GROUP, EMPLOYEE_GROUP

# groupes -> permissions (app_label.codename)
ROLE_PERMISSIONS = {
    ADMIN_GROUP: ["submissions.review_submission"],
    EMPLOYEE_GROUP: ["submissions.review_submission"],
    STUDENT_GROUP: [],
}


class Command(BaseCommand):
    help = "Crée les groupes admin / student / employee et leurs permissions"

    def handle(self, *args, **kwargs):
        for group_name, perms in ROLE_PERMISSIONS.items():
            group, created = Group.objects.get_or_create(name=group_name)
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created group {group_name}"))
            else:
                self.stdout.write(self.style.WARNING(f"Group {group_name} already exists"))

            for perm in perms:
                app_label, codename = perm.split(".", 1)
                try:
                    permission = Permission.objects.get(content_type__app_label=app_label, codename=codename)
                except Permission.DoesNotExist:
                    self.stdout.write(self.style.ERROR(f"Permission manquante: {perm} (lancer migrate d'abord)"))
                    continue
                group.permissions.add(permission)

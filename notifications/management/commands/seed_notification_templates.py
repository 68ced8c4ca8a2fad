from django.core.management.base import BaseCommand
from notifications.models import NotificationTemplate

# Templates du workflow de paiement (syntaxe Django {{ variable }})
TEMPLATES = [
    {
        "key": "submission_accepted",
        "topic": "fees",
        "title_template": "Paiement validé pour {{ student_name }}",
        "body_template": "Bonjour {{ student_name }}, {{ accepted_count }} soumission{{ accepted_count|pluralize }} de paiement {% if accepted_count > 1 %}ont été acceptées{% else %}a été acceptée{% endif %} le {{ accepted_at }}. Merci.",
        "default_channels": ["inapp", "email"]
    },
]


class Command(BaseCommand):
    help = "Crée ou met à jour les templates de notification du workflow de paiement."

    def handle(self, *args, **options):
        for data in TEMPLATES:
            tpl, created = NotificationTemplate.objects.update_or_create(
                key=data["key"],
                defaults={k: v for k, v in data.items() if k != "key"},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Template créé: {tpl.key}"))
            else:
                self.stdout.write(self.style.WARNING(f"Template mis à jour: {tpl.key}"))

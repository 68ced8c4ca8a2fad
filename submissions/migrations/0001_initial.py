from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Submission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('student_name', models.CharField(blank=True, max_length=150)),
                ('fee_selection', models.JSONField(blank=True, default=dict)),
                ('file_reference', models.CharField(max_length=500)),
                ('status', models.CharField(choices=[('pending', 'En attente'), ('accepted', 'Acceptée')], default='pending', max_length=20)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('reviewed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reviewed_submissions', to=settings.AUTH_USER_MODEL)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='submissions', to='core.student')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'permissions': [('review_submission', 'Peut valider les soumissions de paiement')],
                'indexes': [
                    models.Index(fields=['status'], name='submissions_status_3f1c2a_idx'),
                    models.Index(fields=['student', 'status'], name='submissions_student_8b7d4e_idx'),
                ],
            },
        ),
    ]

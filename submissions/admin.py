from django.contrib import admin, messages

from core.models import Student

from .exceptions import WorkflowError
from .models import Submission
from .workflow import approve_submission


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ["id", "student", "student_name", "file_reference", "status", "reviewed_by", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["student__id", "student_name", "file_reference"]
    readonly_fields = ["status", "reviewed_by", "reviewed_at", "created_at", "updated_at"]
    actions = ["accept_pending"]

    @admin.action(description="Accepter les soumissions en attente des élèves sélectionnés")
    def accept_pending(self, request, queryset):
        # validation par élève : on passe par le workflow pour chaque élève concerné
        student_ids = set(queryset.values_list("student_id", flat=True))
        total = 0
        for student_id in student_ids:
            student = Student.objects.get(pk=student_id)
            try:
                total += approve_submission(request.user, student_id, student.meta)
            except WorkflowError as e:
                self.message_user(request, f"{student_id}: {e.message}", level=messages.ERROR)
        self.message_user(request, f"{total} soumission(s) acceptée(s).", level=messages.SUCCESS)

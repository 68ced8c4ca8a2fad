from django.contrib import admin
from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ["id", "first_name", "last_name", "user"]
    search_fields = ["id", "first_name", "last_name", "user__username"]
    readonly_fields = ["id"]

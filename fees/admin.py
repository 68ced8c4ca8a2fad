from django.contrib import admin
from .models import Fee


@admin.register(Fee)
class FeeAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "amount", "created_at"]
    search_fields = ["name", "description"]

# fees/serializers.py
from rest_framework import serializers

from .models import Fee


class FeeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Fee
        fields = ["id", "name", "description", "amount", "created_at"]
        read_only_fields = fields

from rest_framework import serializers

from .models import Student


class StudentSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    email = serializers.CharField(source="user.email", read_only=True)
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Student
        fields = ("id", "username", "email", "first_name", "last_name", "full_name", "meta")
        read_only_fields = fields


class RoleFlagsSerializer(serializers.Serializer):
    is_admin = serializers.BooleanField(allow_null=True)
    is_student = serializers.BooleanField(allow_null=True)
    is_employee = serializers.BooleanField(allow_null=True)


class SharedUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    first_name = serializers.CharField(allow_blank=True)
    last_name = serializers.CharField(allow_blank=True)
    email = serializers.CharField(allow_blank=True)


class SharedAuthSerializer(serializers.Serializer):
    user = SharedUserSerializer(allow_null=True)
    role = RoleFlagsSerializer()


class SharedContextSerializer(serializers.Serializer):
    auth = SharedAuthSerializer()
    notification_count = serializers.IntegerField()

from rest_framework import serializers
from .models import Notification, UserNotificationPreference, NotificationTopic


class NotificationSerializer(serializers.ModelSerializer):
    title = serializers.SerializerMethodField()
    body = serializers.SerializerMethodField()

    class Meta:
        model = Notification
        fields = ('id', 'topic', 'title', 'body', 'channels', 'sent', 'read', 'created_at', 'payload')

    def get_title(self, obj):
        return obj.render_title()

    def get_body(self, obj):
        return obj.render_body()


class UserNotificationPreferenceSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    topic = serializers.ChoiceField(choices=NotificationTopic.choices)

    class Meta:
        model = UserNotificationPreference
        fields = ('id', 'user', 'username', 'topic', 'channels', 'enabled')
        read_only_fields = ('id', 'user', 'username')


class AckSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), default=list)

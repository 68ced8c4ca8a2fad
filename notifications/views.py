from rest_framework import viewsets, permissions, status, filters as drf_filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from .models import Notification, UserNotificationPreference
from .serializers import AckSerializer, NotificationSerializer, UserNotificationPreferenceSerializer


class NotificationViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Lecture des notifications de l'utilisateur connecté.
    Admins peuvent lister toutes les notifications et filtrer par user (?user=ID).
    """
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = NotificationSerializer
    queryset = Notification.objects.select_related('recipient_user', 'template').all()
    filter_backends = [drf_filters.OrderingFilter]
    ordering_fields = ['created_at', 'sent_at', 'read']
    # pk UUID : tout autre segment ne matche pas la route (404)
    lookup_value_regex = '[0-9a-fA-F]{8}(?:-[0-9a-fA-F]{4}){3}-[0-9a-fA-F]{12}'

    def get_queryset(self):
        user = self.request.user
        qs = self.queryset.all()
        if user.is_staff or user.is_superuser:
            user_id = self.request.query_params.get('user', None)
            if user_id:
                qs = qs.filter(recipient_user__id=user_id)
            return qs
        return qs.filter(recipient_user=user)

    @action(detail=False, methods=['post'])
    def ack(self, request):
        """
        Marquer en lot des notifications comme lues.
        Body: {"ids": ["uuid1","uuid2", ...]}
        """
        serializer = AckSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        ids = serializer.validated_data['ids']
        updated = Notification.objects.filter(id__in=ids, recipient_user=request.user).update(read=True)
        return Response({"ok": True, "updated": updated})

    @action(detail=True, methods=['post'])
    def mark_as_read(self, request, pk=None):
        """
        Marquer une notif comme lue (user doit être destinataire).
        """
        notif = get_object_or_404(Notification, pk=pk)
        if notif.recipient_user != request.user:
            return Response({"detail": "Permission denied."}, status=status.HTTP_403_FORBIDDEN)
        notif.mark_read()
        return Response({"detail": "Notification marquée comme lue."})


class PreferenceViewSet(viewsets.ModelViewSet):
    """
    Chaque user gère ses préférences.
    """
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = UserNotificationPreferenceSerializer
    queryset = UserNotificationPreference.objects.select_related('user').all()

    def get_queryset(self):
        return self.queryset.filter(user=self.request.user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import NotificationViewSet, PreferenceViewSet

router = SimpleRouter()
router.register(r'preferences', PreferenceViewSet, basename='notification-preferences')
router.register(r'', NotificationViewSet, basename='notifications')

urlpatterns = [
    path('', include(router.urls)),
]

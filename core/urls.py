from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import StudentViewSet, ProfileView, SharedContextView

router = DefaultRouter()
router.register(r'students', StudentViewSet, basename='student')

urlpatterns = [
    path('', include(router.urls)),

    # Profil connecté
    path('me/', ProfileView.as_view(), name='profile'),

    # Contexte partagé (rôles + compteur)
    path('context/', SharedContextView.as_view(), name='shared-context'),
]

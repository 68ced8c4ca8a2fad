from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.views import health

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health, name='health'),

    # Routes API
    path('api/core/', include('core.urls')),                    # Élèves, profil, contexte partagé
    path('api/fees/', include('fees.urls')),                    # Catalogue des frais (lecture seule)
    path('api/submissions/', include('submissions.urls')),      # Soumissions de paiement
    path('api/notifications/', include('notifications.urls')),  # Notifications

    # Authentification JWT
    path('api/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]

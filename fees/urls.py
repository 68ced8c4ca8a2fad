# fees/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import FeeViewSet

router = SimpleRouter()
router.register(r"", FeeViewSet, basename="fee")

urlpatterns = [
    path("", include(router.urls)),
]

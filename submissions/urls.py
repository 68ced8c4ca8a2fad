# submissions/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import SubmissionViewSet

router = SimpleRouter()
router.register(r"", SubmissionViewSet, basename="submission")

urlpatterns = [
    path("", include(router.urls)),
]

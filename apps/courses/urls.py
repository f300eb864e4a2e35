"""URL routing for the course catalogue."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import CourseViewSet, HolidayViewSet

router = SimpleRouter()
router.register(r"holidays", HolidayViewSet, basename="holiday")
router.register(r"", CourseViewSet, basename="course")

urlpatterns = [
    path("", include(router.urls)),
]

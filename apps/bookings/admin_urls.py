"""URL routing for booking management by club staff."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import AdminBookingViewSet

router = SimpleRouter()
router.register(r"bookings", AdminBookingViewSet, basename="admin-booking")

urlpatterns = [
    path("", include(router.urls)),
]

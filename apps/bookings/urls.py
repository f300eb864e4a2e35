"""URL routing for the booking domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import BookingViewSet, RangeBookingViewSet

router = SimpleRouter()
router.register(r"bookings", BookingViewSet, basename="booking")
router.register(r"range-bookings", RangeBookingViewSet, basename="range-booking")

urlpatterns = [
    path("", include(router.urls)),
]

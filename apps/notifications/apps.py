from django.apps import AppConfig  # type: ignore


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.notifications"
    label = "notifications"
    verbose_name = "Уведомления"

    def ready(self) -> None:
        from apps.bookings.domain.events import (
            BookingCancelled,
            BookingCreated,
            BookingStatusChanged,
            RangeSessionCompleted,
        )
        from shared.application.message_bus import message_bus

        from . import services

        message_bus.register_event_handler(BookingCreated, services.on_booking_created)
        message_bus.register_event_handler(BookingCancelled, services.on_booking_cancelled)
        message_bus.register_event_handler(BookingStatusChanged, services.on_booking_status_changed)
        message_bus.register_event_handler(RangeSessionCompleted, services.on_range_session_completed)

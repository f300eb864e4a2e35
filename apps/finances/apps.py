from django.apps import AppConfig  # type: ignore


class FinancesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.finances"
    label = "finances"
    verbose_name = "Платежи"

    def ready(self) -> None:
        from apps.bookings.domain.events import BookingCancelled
        from shared.application.message_bus import message_bus

        from .services import refund_cancelled_booking

        message_bus.register_event_handler(BookingCancelled, refund_cancelled_booking)

"""Payment processing services.

There is no external payment gateway: confirmation is a provider stub
that marks the payment completed and mirrors the status onto the booking.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction  # type: ignore

from apps.bookings.application.command_handlers import booking_settings
from apps.bookings.models import RangeBooking, TeeTimeBooking
from apps.users.access import Permission, authorize
from shared.domain.exceptions import Conflict, NotFound, PreconditionFailed, ValidationFailed

from .models import Payment, PaymentTransaction

logger = logging.getLogger(__name__)


def _alias(using: str | None) -> str:
    return using or booking_settings()["DATABASE_ALIAS"]


def _record(payment: Payment, event: str, **payload: Any) -> None:
    PaymentTransaction.objects.using(payment._state.db).create(
        payment=payment,
        event=event,
        status=payment.status,
        payload=payload,
    )


def _load_payment(payment_id, using: str) -> Payment:
    try:
        return (
            Payment.objects.using(using)
            .select_for_update(of=("self",))
            .select_related("tee_time_booking", "range_booking")
            .get(pk=payment_id)
        )
    except (Payment.DoesNotExist, ValueError, TypeError):
        raise NotFound("Платёж не найден.", details={"payment_id": payment_id})


def _load_booking(tee_time_booking_id, range_booking_id, using: str):
    if bool(tee_time_booking_id) == bool(range_booking_id):
        raise ValidationFailed(
            "Укажите ровно одно бронирование: tee_time_booking или range_booking.",
            details={"tee_time_booking": tee_time_booking_id, "range_booking": range_booking_id},
        )
    model = TeeTimeBooking if tee_time_booking_id else RangeBooking
    booking_id = tee_time_booking_id or range_booking_id
    try:
        return model.objects.using(using).select_for_update().get(pk=booking_id)
    except model.DoesNotExist:
        raise NotFound("Бронирование не найдено.", details={"booking_id": booking_id})


def create_payment(
    user,
    *,
    method: str,
    tee_time_booking_id=None,
    range_booking_id=None,
    using: str | None = None,
) -> Payment:
    """
    Создаёт платёж по собственному бронированию.

    Сумма и валюта копируются из бронирования. Отменённые и уже
    оплаченные бронирования не принимаются; одновременно может
    существовать только один ожидающий платёж.
    """

    using = _alias(using)
    with transaction.atomic(using=using):
        booking = _load_booking(tee_time_booking_id, range_booking_id, using)
        authorize(user, Permission.PAY_BOOKING, owner_id=booking.user_id)

        if booking.status == booking.Status.CANCELLED:
            raise PreconditionFailed("Нельзя оплатить отменённое бронирование.")
        if booking.payment_status == TeeTimeBooking.PaymentStatus.COMPLETED:
            raise PreconditionFailed("Бронирование уже оплачено.")

        existing = booking.payments.filter(status=Payment.Status.PENDING)
        if existing.exists():
            raise Conflict(
                "По бронированию уже есть платёж, ожидающий подтверждения.",
                details={"payment_id": existing.first().pk},
            )

        payment = Payment.objects.using(using).create(
            user=booking.user,
            tee_time_booking=booking if isinstance(booking, TeeTimeBooking) else None,
            range_booking=booking if isinstance(booking, RangeBooking) else None,
            method=method,
            amount=booking.total_amount,
            currency=booking.currency,
        )
        _record(payment, "created", amount=str(payment.amount), method=method)

    logger.info(f"Payment {payment.id} created for user {user.pk}: {payment.amount} {payment.currency}")
    return payment


def confirm_payment(payment_id, user, transaction_id: str | None = None, using: str | None = None) -> Payment:
    """Заглушка платёжного провайдера: платёж сразу считается проведённым."""

    using = _alias(using)
    with transaction.atomic(using=using):
        payment = _load_payment(payment_id, using)
        authorize(user, Permission.PAY_BOOKING, owner_id=payment.user_id)
        if payment.status != Payment.Status.PENDING:
            raise PreconditionFailed(
                "Подтвердить можно только ожидающий платёж.",
                details={"status": payment.status},
            )
        payment.mark_completed(transaction_id=transaction_id or f"STUB_{payment.id}")
        _record(payment, "confirmed", transaction_id=payment.transaction_id)

    logger.info(f"Payment {payment.id} confirmed (transaction {payment.transaction_id})")
    return payment


def fail_payment(payment_id, user, reason: str = "", using: str | None = None) -> Payment:
    using = _alias(using)
    with transaction.atomic(using=using):
        payment = _load_payment(payment_id, using)
        authorize(user, Permission.PAY_BOOKING, owner_id=payment.user_id)
        if payment.status != Payment.Status.PENDING:
            raise PreconditionFailed(
                "Отклонить можно только ожидающий платёж.",
                details={"status": payment.status},
            )
        payment.mark_failed(reason=reason or None)
        _record(payment, "failed", reason=reason)

    logger.info(f"Payment {payment.id} marked failed: {reason}")
    return payment


def refund_payment(payment_id, user, reason: str = "", using: str | None = None) -> Payment:
    using = _alias(using)
    with transaction.atomic(using=using):
        payment = _load_payment(payment_id, using)
        authorize(user, Permission.MANAGE_PAYMENTS)
        if payment.status != Payment.Status.COMPLETED:
            raise PreconditionFailed(
                "Вернуть можно только проведённый платёж.",
                details={"status": payment.status},
            )
        payment.mark_refunded(reason=reason or None)
        _record(payment, "refunded", reason=reason, refunded_by=user.pk)

    logger.info(f"Payment {payment.id} refunded by user {user.pk}")
    return payment


def refund_cancelled_booking(event) -> None:
    """Обработчик BookingCancelled: возврат проведённых платежей по брони."""

    using = _alias(None)
    with transaction.atomic(using=using):
        payments = (
            Payment.objects.using(using)
            .select_for_update(of=("self",))
            .select_related("tee_time_booking")
            .filter(
                tee_time_booking_id=event.booking_id,
                status=Payment.Status.COMPLETED,
            )
        )
        for payment in payments:
            payment.mark_refunded(reason="booking_cancelled")
            _record(payment, "refunded", reason="booking_cancelled", cancelled_by=event.cancelled_by)
            logger.info(f"Payment {payment.id} refunded after cancellation of booking {event.booking_id}")

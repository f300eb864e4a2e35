"""Aggregations behind the administrator dashboard, reports and exports."""

from __future__ import annotations

import csv
from datetime import date
from decimal import Decimal
from io import StringIO
from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db.models import Sum  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import RangeBooking, TeeTimeBooking
from apps.courses.models import Course
from shared.domain.exceptions import ValidationFailed

EXPORT_TYPES = ("users", "bookings", "courses")


def _sum(qs, field: str = "total_amount") -> Decimal:
    return qs.aggregate(total=Sum(field)).get("total") or Decimal("0.00")


def _booking_row(booking: TeeTimeBooking) -> dict[str, Any]:
    return {
        "id": booking.pk,
        "booking_code": booking.booking_code,
        "user_id": booking.user_id,
        "user_email": booking.user.email,
        "course_id": booking.course_id,
        "course_name": booking.course.name,
        "date": booking.date.isoformat(),
        "tee_time": booking.tee_time.strftime("%H:%M"),
        "players": booking.players,
        "status": booking.status,
        "payment_status": booking.payment_status,
        "total_amount": str(booking.total_amount),
        "currency": booking.currency,
        "created_at": booking.created_at.isoformat(),
    }


def _user_row(user) -> dict[str, Any]:
    return {
        "id": user.pk,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "phone": user.phone or "",
        "role": user.role,
        "membership_type": user.membership_type,
        "handicap": str(user.handicap) if user.handicap is not None else "",
        "is_active": user.is_active,
        "created_at": user.created_at.isoformat(),
    }


def _course_row(course: Course) -> dict[str, Any]:
    return {
        "id": course.pk,
        "name": course.name,
        "city": course.city,
        "holes": course.holes,
        "par": course.par,
        "difficulty": course.difficulty,
        "green_fee_weekday": str(course.green_fee_weekday),
        "green_fee_weekend": str(course.green_fee_weekend),
        "is_active": course.is_active,
    }


def dashboard_stats() -> dict[str, Any]:
    """Сводка для панели администратора."""

    User = get_user_model()
    bookings = TeeTimeBooking.objects.select_related("user", "course")
    paid = bookings.filter(payment_status=TeeTimeBooking.PaymentStatus.COMPLETED)
    paid_ranges = RangeBooking.objects.filter(payment_status=TeeTimeBooking.PaymentStatus.COMPLETED)

    return {
        "total_users": User.objects.count(),
        "total_courses": Course.objects.count(),
        "active_courses": Course.objects.active().count(),
        "total_bookings": bookings.count(),
        "today_bookings": bookings.filter(date=timezone.localdate()).count(),
        "total_revenue": _sum(paid),
        "range_revenue": _sum(paid_ranges),
        "active_range_sessions": RangeBooking.objects.filter(status=RangeBooking.Status.ACTIVE).count(),
        "recent_bookings": [_booking_row(b) for b in bookings.order_by("-created_at")[:5]],
        "generated_at": timezone.now().isoformat(),
    }


def revenue_report(start_date: date, end_date: date) -> dict[str, Any]:
    """Выручка по оплаченным ти-таймам за период, с разбивкой по полям."""

    if start_date > end_date:
        raise ValidationFailed(
            "Начало периода должно быть не позже конца.",
            details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )

    paid = TeeTimeBooking.objects.filter(
        date__gte=start_date,
        date__lte=end_date,
        payment_status=TeeTimeBooking.PaymentStatus.COMPLETED,
    )
    by_course = {
        row["course__name"]: row["total"] or Decimal("0.00")
        for row in paid.values("course__name").annotate(total=Sum("total_amount")).order_by("course__name")
    }

    return {
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "total_revenue": _sum(paid),
        "booking_count": paid.count(),
        "revenue_by_course": by_course,
        "generated_at": timezone.now().isoformat(),
    }


def system_logs() -> dict[str, Any]:
    """Недавняя активность: новые пользователи и бронирования."""

    User = get_user_model()
    return {
        "recent_users": [_user_row(u) for u in User.objects.order_by("-created_at")[:10]],
        "recent_bookings": [
            _booking_row(b)
            for b in TeeTimeBooking.objects.select_related("user", "course").order_by("-created_at")[:10]
        ],
        "generated_at": timezone.now().isoformat(),
    }


def export_rows(export_type: str) -> list[dict[str, Any]]:
    if export_type == "users":
        return [_user_row(u) for u in get_user_model().objects.order_by("pk")]
    if export_type == "bookings":
        return [_booking_row(b) for b in TeeTimeBooking.objects.select_related("user", "course").order_by("pk")]
    if export_type == "courses":
        return [_course_row(c) for c in Course.objects.order_by("pk")]
    raise ValidationFailed(
        "Недопустимый тип экспорта.",
        details={"type": export_type, "allowed": list(EXPORT_TYPES)},
    )


def rows_to_csv(rows: list[dict[str, Any]]) -> bytes:
    csv_buffer = StringIO()
    if rows:
        writer = csv.DictWriter(csv_buffer, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)
    return csv_buffer.getvalue().encode("utf-8-sig")

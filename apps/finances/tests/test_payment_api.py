"""API tests for payments: creation, stub confirmation and refunds."""

from __future__ import annotations

from datetime import time, timedelta
from decimal import Decimal

from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone
from django.utils.connection import ConnectionDoesNotExist
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import RangeBooking, TeeTimeBooking
from apps.courses.models import Course
from apps.finances import services
from apps.finances.models import Payment
from apps.users.models import User


class PaymentAPITests(APITestCase):
    def setUp(self) -> None:
        self.player = User.objects.create_user(email="player@example.com", password="PlayerPass123")
        self.other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.course = Course.objects.create(name="Ocean Links", green_fee_weekday=Decimal("50.00"))
        self.booking = TeeTimeBooking.objects.create(
            user=self.player,
            course=self.course,
            date=timezone.localdate() + timedelta(days=3),
            tee_time=time(10, 0),
            players=2,
            green_fee=Decimal("50.00"),
            total_amount=Decimal("100.00"),
        )
        self.client.force_authenticate(self.player)

    def pay(self, **payload):
        payload.setdefault("tee_time_booking", self.booking.id)
        return self.client.post(reverse("payment-list"), payload, format="json")

    def test_create_payment_copies_booking_amount(self) -> None:
        response = self.pay(method="card")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Payment.Status.PENDING)
        self.assertEqual(response.data["amount"], "100.00")
        self.assertEqual(response.data["currency"], "USD")
        self.assertEqual(response.data["transactions"][0]["event"], "created")

    def test_exactly_one_booking_required(self) -> None:
        range_booking = RangeBooking.objects.create(
            user=self.player,
            course=self.course,
            date=timezone.localdate(),
            start_time=time(9, 0),
            bucket_size=RangeBooking.BucketSize.SMALL,
            bucket_count=1,
            total_amount=Decimal("10.00"),
        )

        both = self.pay(range_booking=range_booking.id)
        self.assertEqual(both.status_code, status.HTTP_400_BAD_REQUEST, both.data)

        neither = self.client.post(reverse("payment-list"), {"method": "card"}, format="json")
        self.assertEqual(neither.status_code, status.HTTP_400_BAD_REQUEST, neither.data)

    def test_range_booking_payment(self) -> None:
        range_booking = RangeBooking.objects.create(
            user=self.player,
            course=self.course,
            date=timezone.localdate(),
            start_time=time(9, 0),
            bucket_size=RangeBooking.BucketSize.LARGE,
            bucket_count=2,
            total_amount=Decimal("40.00"),
        )

        response = self.client.post(
            reverse("payment-list"),
            {"range_booking": range_booking.id, "method": "cash"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["amount"], "40.00")

    def test_cannot_pay_for_someone_elses_booking(self) -> None:
        self.client.force_authenticate(self.other)
        response = self.pay()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_duplicate_pending_payment_conflicts(self) -> None:
        self.assertEqual(self.pay().status_code, status.HTTP_201_CREATED)
        response = self.pay()
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_cancelled_booking_cannot_be_paid(self) -> None:
        self.booking.status = TeeTimeBooking.Status.CANCELLED
        self.booking.save(update_fields=["status"])

        response = self.pay()

        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY, response.data)

    def test_confirm_marks_booking_paid(self) -> None:
        payment_id = self.pay().data["id"]

        response = self.client.post(reverse("payment-confirm", args=[payment_id]), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Payment.Status.COMPLETED)
        self.assertEqual(response.data["transaction_id"], f"STUB_{payment_id}")
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.payment_status, TeeTimeBooking.PaymentStatus.COMPLETED)

        again = self.client.post(reverse("payment-confirm", args=[payment_id]), {}, format="json")
        self.assertEqual(again.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY, again.data)

        paid_again = self.pay()
        self.assertEqual(paid_again.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY, paid_again.data)

    def test_fail_marks_booking_failed(self) -> None:
        payment_id = self.pay().data["id"]

        response = self.client.post(
            reverse("payment-fail", args=[payment_id]),
            {"reason": "card declined"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["metadata"]["failure_reason"], "card declined")
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.payment_status, TeeTimeBooking.PaymentStatus.FAILED)

    def test_refund_requires_admin(self) -> None:
        payment_id = self.pay().data["id"]
        self.client.post(reverse("payment-confirm", args=[payment_id]), {}, format="json")

        refused = self.client.post(reverse("payment-refund", args=[payment_id]), {}, format="json")
        self.assertEqual(refused.status_code, status.HTTP_403_FORBIDDEN, refused.data)

        self.client.force_authenticate(self.admin)
        response = self.client.post(
            reverse("payment-refund", args=[payment_id]),
            {"reason": "rain"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Payment.Status.REFUNDED)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.payment_status, TeeTimeBooking.PaymentStatus.REFUNDED)

    def test_list_visibility(self) -> None:
        self.pay()

        self.client.force_authenticate(self.other)
        self.assertEqual(self.client.get(reverse("payment-list")).data["count"], 0)

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.get(reverse("payment-list")).data["count"], 1)


class PaymentServiceDatabaseAliasTests(TestCase):
    def setUp(self) -> None:
        self.player = User.objects.create_user(email="player@example.com", password="PlayerPass123")
        course = Course.objects.create(name="Ocean Links", green_fee_weekday=Decimal("50.00"))
        self.booking = TeeTimeBooking.objects.create(
            user=self.player,
            course=course,
            date=timezone.localdate() + timedelta(days=3),
            tee_time=time(10, 0),
            players=2,
            total_amount=Decimal("100.00"),
        )

    @override_settings(GOLF_BOOKING={"DATABASE_ALIAS": "reporting"})
    def test_services_use_configured_booking_alias(self) -> None:
        with self.assertRaises(ConnectionDoesNotExist):
            services.create_payment(self.player, method=Payment.Method.CARD, tee_time_booking_id=self.booking.pk)
        self.assertFalse(Payment.objects.exists())

    @override_settings(GOLF_BOOKING={"DATABASE_ALIAS": "reporting"})
    def test_explicit_alias_wins_over_settings(self) -> None:
        payment = services.create_payment(
            self.player,
            method=Payment.Method.CARD,
            tee_time_booking_id=self.booking.pk,
            using="default",
        )
        confirmed = services.confirm_payment(payment.pk, self.player, using="default")

        self.assertEqual(confirmed.status, Payment.Status.COMPLETED)
        self.assertEqual(confirmed.transactions.count(), 2)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.payment_status, TeeTimeBooking.PaymentStatus.COMPLETED)

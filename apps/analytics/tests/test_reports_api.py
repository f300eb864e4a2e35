"""API tests for administrator dashboard, reports and exports."""

from __future__ import annotations

from datetime import time, timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import RangeBooking, TeeTimeBooking
from apps.courses.models import Course
from apps.users.models import User


class ReportsAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.staff = User.objects.create_user(
            email="staff@example.com",
            password="StaffPass123",
            role=User.RoleChoices.STAFF,
        )
        self.member = User.objects.create_user(email="member@example.com", password="MemberPass123")
        self.ocean = Course.objects.create(name="Ocean Links", green_fee_weekday=Decimal("50.00"))
        self.meadow = Course.objects.create(name="Meadow Nine", green_fee_weekday=Decimal("25.00"))
        self.today = timezone.localdate()

        self._booking(self.ocean, self.today, time(8, 0), Decimal("100.00"), paid=True)
        self._booking(self.ocean, self.today, time(9, 0), Decimal("150.00"), paid=True)
        self._booking(self.meadow, self.today + timedelta(days=1), time(9, 0), Decimal("50.00"), paid=True)
        self._booking(self.meadow, self.today, time(10, 0), Decimal("75.00"), paid=False)
        RangeBooking.objects.create(
            user=self.member,
            course=self.ocean,
            date=self.today,
            start_time=time(9, 0),
            bucket_size=RangeBooking.BucketSize.MEDIUM,
            bucket_count=2,
            total_amount=Decimal("30.00"),
            payment_status=TeeTimeBooking.PaymentStatus.COMPLETED,
        )

    def _booking(self, course, day, tee_time, amount, paid):
        return TeeTimeBooking.objects.create(
            user=self.member,
            course=course,
            date=day,
            tee_time=tee_time,
            players=2,
            total_amount=amount,
            payment_status=(
                TeeTimeBooking.PaymentStatus.COMPLETED if paid else TeeTimeBooking.PaymentStatus.PENDING
            ),
        )

    def test_dashboard_stats(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("admin-dashboard-stats"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["total_users"], 3)
        self.assertEqual(response.data["total_courses"], 2)
        self.assertEqual(response.data["total_bookings"], 4)
        self.assertEqual(response.data["today_bookings"], 3)
        self.assertEqual(response.data["total_revenue"], Decimal("300.00"))
        self.assertEqual(response.data["range_revenue"], Decimal("30.00"))
        self.assertEqual(response.data["active_range_sessions"], 1)
        self.assertEqual(len(response.data["recent_bookings"]), 4)

    def test_staff_can_view_reports_but_not_export(self) -> None:
        self.client.force_authenticate(self.staff)

        self.assertEqual(self.client.get(reverse("admin-dashboard-stats")).status_code, status.HTTP_200_OK)
        export = self.client.get(reverse("admin-export"), {"type": "users"})
        self.assertEqual(export.status_code, status.HTTP_403_FORBIDDEN)

    def test_member_cannot_view_reports(self) -> None:
        self.client.force_authenticate(self.member)
        for name in ("admin-dashboard-stats", "admin-system-logs"):
            with self.subTest(name=name):
                self.assertEqual(self.client.get(reverse(name)).status_code, status.HTTP_403_FORBIDDEN)

    def test_revenue_report_by_course(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(
            reverse("admin-revenue-report"),
            {"start_date": str(self.today), "end_date": str(self.today)},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["total_revenue"], Decimal("250.00"))
        self.assertEqual(response.data["booking_count"], 2)
        self.assertEqual(response.data["revenue_by_course"], {"Ocean Links": Decimal("250.00")})

    def test_revenue_report_validates_period(self) -> None:
        self.client.force_authenticate(self.admin)

        reversed_period = self.client.get(
            reverse("admin-revenue-report"),
            {"start_date": str(self.today), "end_date": str(self.today - timedelta(days=1))},
        )
        self.assertEqual(reversed_period.status_code, status.HTTP_400_BAD_REQUEST)

        missing = self.client.get(reverse("admin-revenue-report"), {"start_date": str(self.today)})
        self.assertEqual(missing.status_code, status.HTTP_400_BAD_REQUEST)

    def test_system_logs(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("admin-system-logs"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["recent_users"]), 3)
        self.assertEqual(len(response.data["recent_bookings"]), 4)

    def test_export_json(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("admin-export"), {"type": "courses"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["export_type"], "courses")
        self.assertEqual(response.data["count"], 2)

    def test_export_csv(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("admin-export"), {"type": "bookings", "file_format": "csv"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response["Content-Type"].startswith("text/csv"))
        self.assertIn("attachment;", response["Content-Disposition"])
        lines = response.content.decode("utf-8-sig").strip().splitlines()
        self.assertTrue(lines[0].startswith("id,booking_code"))
        self.assertEqual(len(lines), 5)

    def test_export_rejects_unknown_type(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("admin-export"), {"type": "payments"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "validation_error")

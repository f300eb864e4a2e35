"""API tests for the course catalogue, availability and holidays."""

from __future__ import annotations

from datetime import time, timedelta
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.courses.models import Course, CourseCondition, Holiday
from apps.users.models import User


class CourseAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.member = User.objects.create_user(email="member@example.com", password="MemberPass123")
        self.course = Course.objects.create(
            name="Ocean Links",
            city="Monterey",
            green_fee_weekday=Decimal("50.00"),
            green_fee_weekend=Decimal("70.00"),
            open_time=time(7, 0),
            close_time=time(9, 0),
            slot_duration=30,
            max_players_per_slot=4,
        )
        self.hidden = Course.objects.create(
            name="Closed Dunes",
            city="Carmel",
            green_fee_weekday=Decimal("200.00"),
            is_active=False,
        )


class CourseCatalogueTests(CourseAPITestCase):
    def test_public_list_shows_active_courses(self) -> None:
        response = self.client.get(reverse("course-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["name"] for row in response.data["results"]], ["Ocean Links"])
        self.assertEqual(response.data["results"][0]["open_time"], "07:00")

    def test_admin_sees_inactive_courses(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("course-list"))
        self.assertEqual(response.data["count"], 2)

    def test_inactive_course_detail_is_hidden(self) -> None:
        response = self.client.get(reverse("course-detail", args=[self.hidden.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["code"], "not_found")

    def test_filters(self) -> None:
        Course.objects.create(name="Pine Valley", city="Pine Valley", green_fee_weekday=Decimal("150.00"))

        by_city = self.client.get(reverse("course-list"), {"city": "monte"})
        self.assertEqual(by_city.data["count"], 1)

        by_fee = self.client.get(reverse("course-list"), {"max_weekday_fee": "100"})
        self.assertEqual([row["name"] for row in by_fee.data["results"]], ["Ocean Links"])

    def test_latest_condition_is_embedded(self) -> None:
        CourseCondition.objects.create(
            course=self.course,
            recorded_at=timezone.now() - timedelta(days=1),
            weather="rain",
        )
        CourseCondition.objects.create(course=self.course, weather="sunny", green_speed=Decimal("10.5"))

        response = self.client.get(reverse("course-detail", args=[self.course.id]))
        self.assertEqual(response.data["latest_condition"]["weather"], "sunny")


class CourseManagementTests(CourseAPITestCase):
    def _payload(self, **overrides):
        payload = {
            "name": "Lakeside Links",
            "city": "Madison",
            "holes": 9,
            "par": 36,
            "amenities": ["driving_range"],
            "green_fee_weekday": "40.00",
            "green_fee_weekend": "55.00",
            "open_time": "07:00",
            "close_time": "18:00",
        }
        payload.update(overrides)
        return payload

    def test_member_cannot_create_course(self) -> None:
        self.client.force_authenticate(self.member)
        response = self.client.post(reverse("course-list"), self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_creates_course(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("course-list"), self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["name"], "Lakeside Links")
        self.assertTrue(response.data["is_active"])
        self.assertTrue(Course.objects.filter(name="Lakeside Links").exists())

    def test_invalid_operating_hours_rejected(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("course-list"),
            self._payload(open_time="18:00", close_time="07:00"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"]["code"], "validation_error")

    def test_amenities_must_be_strings(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("course-list"), self._payload(amenities=[1, 2]), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_partial_update(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("course-detail", args=[self.course.id]),
            {"green_fee_weekday": "65.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.course.refresh_from_db()
        self.assertEqual(self.course.green_fee_weekday, Decimal("65.00"))

    def test_delete_deactivates(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("course-detail", args=[self.course.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.course.refresh_from_db()
        self.assertFalse(self.course.is_active)

    def test_admin_reports_condition(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("course-conditions", args=[self.course.id]),
            {"weather": "windy", "fairway_condition": "good", "humidity": 40},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        condition = CourseCondition.objects.get()
        self.assertEqual(condition.reported_by, self.admin)

        listing = self.client.get(reverse("course-conditions", args=[self.course.id]))
        self.assertEqual(listing.data["count"], 1)

    def test_member_cannot_report_condition(self) -> None:
        self.client.force_authenticate(self.member)
        response = self.client.post(
            reverse("course-conditions", args=[self.course.id]),
            {"weather": "windy"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class AvailabilityAPITests(CourseAPITestCase):
    def test_returns_free_slots(self) -> None:
        day = timezone.localdate() + timedelta(days=2)

        response = self.client.get(reverse("course-availability", args=[self.course.id]), {"date": str(day)})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["date"], day.isoformat())
        self.assertEqual(
            response.data["slots"],
            [
                {"time": "07:00", "max_players": 4},
                {"time": "07:30", "max_players": 4},
                {"time": "08:00", "max_players": 4},
                {"time": "08:30", "max_players": 4},
            ],
        )

    def test_booked_slot_disappears(self) -> None:
        day = timezone.localdate() + timedelta(days=2)
        self.client.force_authenticate(self.member)
        booked = self.client.post(
            reverse("booking-tee-time"),
            {"course_id": self.course.id, "date": str(day), "tee_time": "07:30", "players": 1},
            format="json",
        )
        self.assertEqual(booked.status_code, status.HTTP_201_CREATED, booked.data)

        response = self.client.get(reverse("course-availability", args=[self.course.id]), {"date": str(day)})
        self.assertEqual([slot["time"] for slot in response.data["slots"]], ["07:00", "08:00", "08:30"])

    def test_date_is_required(self) -> None:
        response = self.client.get(reverse("course-availability", args=[self.course.id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get(
            reverse("course-availability", args=[self.course.id]),
            {"date": "2025-02-30"},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_inactive_course_not_found(self) -> None:
        response = self.client.get(
            reverse("course-availability", args=[self.hidden.id]),
            {"date": str(timezone.localdate())},
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class HolidayAPITests(CourseAPITestCase):
    def test_admin_manages_holidays(self) -> None:
        self.client.force_authenticate(self.admin)
        day = timezone.localdate() + timedelta(days=10)

        response = self.client.post(reverse("holiday-list"), {"date": str(day), "name": "Club Day"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        duplicate = self.client.post(reverse("holiday-list"), {"date": str(day), "name": "Again"}, format="json")
        self.assertEqual(duplicate.status_code, status.HTTP_400_BAD_REQUEST)

        holiday_id = response.data["id"]
        deleted = self.client.delete(reverse("holiday-detail", args=[holiday_id]))
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Holiday.objects.exists())

    def test_member_cannot_manage_holidays(self) -> None:
        self.client.force_authenticate(self.member)
        response = self.client.get(reverse("holiday-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class SeedCoursesCommandTests(CourseAPITestCase):
    def test_seed_is_idempotent(self) -> None:
        call_command("seed_courses", stdout=StringIO())
        first_count = Course.objects.count()
        call_command("seed_courses", stdout=StringIO())

        self.assertEqual(Course.objects.count(), first_count)
        self.assertEqual(first_count, 2 + 3)
        self.assertEqual(Holiday.objects.count(), 3)

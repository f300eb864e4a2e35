from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore

from apps.courses.models import Course, CourseCondition, Holiday


SAMPLE_COURSES = [
    {
        "name": "Pine Valley Golf Club",
        "description": "Классическое поле в сосновом лесу.",
        "address": "1 Pine Valley Rd",
        "city": "Pine Valley",
        "state": "NJ",
        "country": "USA",
        "holes": 18,
        "par": 70,
        "length_yards": 6999,
        "difficulty": Course.Difficulty.CHAMPIONSHIP,
        "amenities": ["pro_shop", "driving_range", "restaurant"],
        "green_fee_weekday": Decimal("150.00"),
        "green_fee_weekend": Decimal("200.00"),
        "green_fee_holiday": Decimal("250.00"),
        "cart_fee": Decimal("25.00"),
        "club_rental_fee": Decimal("50.00"),
        "open_time": time(6, 0),
        "close_time": time(19, 0),
        "slot_duration": 10,
    },
    {
        "name": "Lakeside Links",
        "description": "Поле у озера для игроков любого уровня.",
        "address": "200 Shore Dr",
        "city": "Madison",
        "state": "WI",
        "country": "USA",
        "holes": 18,
        "par": 72,
        "length_yards": 6400,
        "difficulty": Course.Difficulty.INTERMEDIATE,
        "amenities": ["driving_range", "putting_green"],
        "green_fee_weekday": Decimal("60.00"),
        "green_fee_weekend": Decimal("80.00"),
        "cart_fee": Decimal("15.00"),
        "club_rental_fee": Decimal("30.00"),
        "open_time": time(7, 0),
        "close_time": time(18, 0),
        "slot_duration": 15,
    },
    {
        "name": "Meadow Nine",
        "description": "Короткое поле на 9 лунок для начинающих.",
        "address": "15 Meadow Ln",
        "city": "Austin",
        "state": "TX",
        "country": "USA",
        "holes": 9,
        "par": 34,
        "length_yards": 2800,
        "difficulty": Course.Difficulty.BEGINNER,
        "amenities": ["putting_green"],
        "green_fee_weekday": Decimal("25.00"),
        "green_fee_weekend": Decimal("35.00"),
        "open_time": time(8, 0),
        "close_time": time(17, 0),
        "slot_duration": 20,
    },
]

SAMPLE_HOLIDAYS = [
    (1, 1, "New Year's Day"),
    (7, 4, "Independence Day"),
    (12, 25, "Christmas Day"),
]


class Command(BaseCommand):
    help = "Заполняет каталог тестовыми полями и праздничными днями (идемпотентно)"

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument("--year", type=int, default=date.today().year, help="Год праздничного календаря")

    def handle(self, *args, **options):  # type: ignore
        created_courses = 0
        created_holidays = 0

        try:
            with transaction.atomic():
                for data in SAMPLE_COURSES:
                    defaults = {key: value for key, value in data.items() if key != "name"}
                    course, created = Course.objects.get_or_create(name=data["name"], defaults=defaults)
                    if created:
                        created_courses += 1
                        CourseCondition.objects.create(
                            course=course,
                            fairway_condition=CourseCondition.Rating.GOOD,
                            rough_condition=CourseCondition.Rating.GOOD,
                            bunker_condition=CourseCondition.Rating.FAIR,
                            weather="Sunny",
                        )

                for month, day, name in SAMPLE_HOLIDAYS:
                    _, created = Holiday.objects.get_or_create(
                        date=date(options["year"], month, day),
                        defaults={"name": name},
                    )
                    created_holidays += int(created)
        except DatabaseError as exc:
            raise CommandError(f"База данных недоступна: {exc}") from exc

        self.stdout.write(
            self.style.SUCCESS(f"Создано полей: {created_courses}, праздничных дней: {created_holidays}")
        )

import datetime
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("address", models.CharField(blank=True, max_length=255)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("state", models.CharField(blank=True, max_length=100)),
                ("country", models.CharField(blank=True, max_length=100)),
                ("postal_code", models.CharField(blank=True, max_length=20)),
                ("phone", models.CharField(blank=True, max_length=20)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("website", models.URLField(blank=True)),
                ("holes", models.PositiveSmallIntegerField(default=18)),
                ("par", models.PositiveSmallIntegerField(default=72)),
                ("length_yards", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "difficulty",
                    models.CharField(
                        choices=[
                            ("beginner", "Начальный"),
                            ("intermediate", "Средний"),
                            ("advanced", "Продвинутый"),
                            ("championship", "Чемпионский"),
                        ],
                        default="intermediate",
                        max_length=20,
                    ),
                ),
                ("amenities", models.JSONField(blank=True, default=list)),
                ("green_fee_weekday", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("green_fee_weekend", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                (
                    "green_fee_holiday",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Если не задан, в праздники действует тариф выходного дня.",
                        max_digits=10,
                        null=True,
                    ),
                ),
                ("cart_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("club_rental_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                (
                    "member_discount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Скидка для участников клуба в процентах.",
                        max_digits=5,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                (
                    "booking_advance_days",
                    models.PositiveSmallIntegerField(
                        default=14, help_text="На сколько дней вперёд открыто бронирование."
                    ),
                ),
                (
                    "max_players_per_slot",
                    models.PositiveSmallIntegerField(
                        default=4,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(8),
                        ],
                    ),
                ),
                (
                    "slot_duration",
                    models.PositiveSmallIntegerField(
                        default=15,
                        help_text="Шаг сетки ти-таймов в минутах.",
                        validators=[
                            django.core.validators.MinValueValidator(5),
                            django.core.validators.MaxValueValidator(60),
                        ],
                    ),
                ),
                ("open_time", models.TimeField(default=datetime.time(6, 0))),
                ("close_time", models.TimeField(default=datetime.time(19, 0))),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Гольф-поле",
                "verbose_name_plural": "Гольф-поля",
                "ordering": ["name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("close_time__gt", models.F("open_time"))),
                        name="course_valid_operating_hours",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Holiday",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(unique=True)),
                ("name", models.CharField(max_length=100)),
            ],
            options={
                "verbose_name": "Праздничный день",
                "verbose_name_plural": "Праздничные дни",
                "ordering": ["date"],
            },
        ),
        migrations.CreateModel(
            name="CourseCondition",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("recorded_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("green_speed", models.DecimalField(blank=True, decimal_places=1, max_digits=4, null=True)),
                (
                    "fairway_condition",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("excellent", "Отличное"),
                            ("good", "Хорошее"),
                            ("fair", "Удовлетворительное"),
                            ("poor", "Плохое"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "rough_condition",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("excellent", "Отличное"),
                            ("good", "Хорошее"),
                            ("fair", "Удовлетворительное"),
                            ("poor", "Плохое"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "bunker_condition",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("excellent", "Отличное"),
                            ("good", "Хорошее"),
                            ("fair", "Удовлетворительное"),
                            ("poor", "Плохое"),
                        ],
                        max_length=20,
                    ),
                ),
                ("weather", models.CharField(blank=True, max_length=100)),
                ("temperature", models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True)),
                ("wind_speed", models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True)),
                (
                    "humidity",
                    models.PositiveSmallIntegerField(
                        blank=True, null=True, validators=[django.core.validators.MaxValueValidator(100)]
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                (
                    "course",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="conditions",
                        to="courses.course",
                    ),
                ),
                (
                    "reported_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="course_condition_reports",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Состояние поля",
                "verbose_name_plural": "Состояние полей",
                "ordering": ["-recorded_at"],
                "get_latest_by": "recorded_at",
            },
        ),
    ]

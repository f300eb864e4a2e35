from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


PAYMENT_STATUS_CHOICES = [
    ("pending", "Ожидает оплаты"),
    ("completed", "Оплачено"),
    ("failed", "Ошибка оплаты"),
    ("refunded", "Возврат"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("courses", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="TeeTimeBooking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_code", models.CharField(editable=False, max_length=12, unique=True)),
                ("date", models.DateField()),
                ("tee_time", models.TimeField()),
                (
                    "players",
                    models.PositiveSmallIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Ожидает подтверждения"),
                            ("confirmed", "Подтверждено"),
                            ("cancelled", "Отменено"),
                            ("completed", "Завершено"),
                        ],
                        default="confirmed",
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(choices=PAYMENT_STATUS_CHOICES, default="pending", max_length=20),
                ),
                (
                    "green_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Тариф за игрока на момент бронирования.",
                        max_digits=10,
                    ),
                ),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("special_requests", models.TextField(blank=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "course",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tee_time_bookings",
                        to="courses.course",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tee_time_bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Бронирование ти-тайма",
                "verbose_name_plural": "Бронирования ти-таймов",
                "ordering": ["-date", "-tee_time"],
                "indexes": [
                    models.Index(fields=["course", "date"], name="bookings_te_course__0f3a1c_idx"),
                    models.Index(fields=["user", "date"], name="bookings_te_user_id_5b7e2d_idx"),
                    models.Index(fields=["status"], name="bookings_te_status_9c4d8e_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SlotReservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("tee_time", models.TimeField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "booking",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="slot_reservation",
                        to="bookings.teetimebooking",
                    ),
                ),
                (
                    "course",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="slot_reservations",
                        to="courses.course",
                    ),
                ),
            ],
            options={
                "verbose_name": "Занятый ти-тайм",
                "verbose_name_plural": "Занятые ти-таймы",
                "ordering": ["date", "tee_time"],
                "constraints": [
                    models.UniqueConstraint(fields=("course", "date", "tee_time"), name="unique_tee_time_slot")
                ],
            },
        ),
        migrations.CreateModel(
            name="RangeBooking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                (
                    "duration_minutes",
                    models.PositiveSmallIntegerField(
                        default=60, validators=[django.core.validators.MinValueValidator(15)]
                    ),
                ),
                ("bay_number", models.PositiveSmallIntegerField(blank=True, null=True)),
                (
                    "bucket_size",
                    models.CharField(
                        choices=[
                            ("small", "Маленькая"),
                            ("medium", "Средняя"),
                            ("large", "Большая"),
                            ("jumbo", "Джамбо"),
                        ],
                        max_length=10,
                    ),
                ),
                (
                    "bucket_count",
                    models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("used_buckets", models.PositiveSmallIntegerField(default=0)),
                ("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("currency", models.CharField(default="USD", max_length=3)),
                (
                    "payment_status",
                    models.CharField(choices=PAYMENT_STATUS_CHOICES, default="pending", max_length=20),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Активна"),
                            ("completed", "Завершена"),
                            ("cancelled", "Отменена"),
                            ("expired", "Истекла"),
                        ],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "course",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="range_bookings",
                        to="courses.course",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="range_bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Сессия на рейндже",
                "verbose_name_plural": "Сессии на рейндже",
                "ordering": ["-date", "-start_time"],
                "indexes": [models.Index(fields=["status", "date"], name="bookings_ra_status_2a6f0b_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "active")),
                        fields=("user",),
                        name="one_active_range_session_per_user",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("used_buckets__lte", models.F("bucket_count"))),
                        name="range_used_buckets_within_count",
                    ),
                ],
            },
        ),
    ]

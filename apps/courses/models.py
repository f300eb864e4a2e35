"""Course catalogue models: courses, condition reports and the holiday calendar."""

from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CourseQuerySet(models.QuerySet):
    def active(self) -> "CourseQuerySet":
        return self.filter(is_active=True)


class Course(models.Model):
    """Гольф-поле: каталог, тарифы и параметры сетки ти-таймов."""

    class Difficulty(models.TextChoices):
        BEGINNER = "beginner", _("Начальный")
        INTERMEDIATE = "intermediate", _("Средний")
        ADVANCED = "advanced", _("Продвинутый")
        CHAMPIONSHIP = "championship", _("Чемпионский")

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    website = models.URLField(blank=True)

    holes = models.PositiveSmallIntegerField(default=18)
    par = models.PositiveSmallIntegerField(default=72)
    length_yards = models.PositiveIntegerField(null=True, blank=True)
    difficulty = models.CharField(
        max_length=20,
        choices=Difficulty.choices,
        default=Difficulty.INTERMEDIATE,
    )
    amenities = models.JSONField(default=list, blank=True)

    green_fee_weekday = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    green_fee_weekend = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    green_fee_holiday = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_("Если не задан, в праздники действует тариф выходного дня."),
    )
    cart_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    club_rental_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    member_discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Скидка для участников клуба в процентах."),
    )

    is_active = models.BooleanField(default=True)
    booking_advance_days = models.PositiveSmallIntegerField(
        default=14,
        help_text=_("На сколько дней вперёд открыто бронирование."),
    )
    max_players_per_slot = models.PositiveSmallIntegerField(
        default=4,
        validators=[MinValueValidator(1), MaxValueValidator(8)],
    )
    slot_duration = models.PositiveSmallIntegerField(
        default=15,
        validators=[MinValueValidator(5), MaxValueValidator(60)],
        help_text=_("Шаг сетки ти-таймов в минутах."),
    )
    open_time = models.TimeField(default=time(6, 0))
    close_time = models.TimeField(default=time(19, 0))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CourseQuerySet.as_manager()

    class Meta:
        verbose_name = _("Гольф-поле")
        verbose_name_plural = _("Гольф-поля")
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(close_time__gt=models.F("open_time")),
                name="course_valid_operating_hours",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        if self.open_time and self.close_time and self.open_time >= self.close_time:
            raise ValidationError(_("Время закрытия должно быть позже времени открытия."))

    def last_bookable_date(self, today: date | None = None) -> date:
        today = today or timezone.localdate()
        return today + timedelta(days=self.booking_advance_days)

    def deactivate(self) -> None:
        self.is_active = False
        self.save(update_fields=["is_active", "updated_at"])


class CourseCondition(models.Model):
    """Отчёт о состоянии поля (грины, фервеи, погода)."""

    class Rating(models.TextChoices):
        EXCELLENT = "excellent", _("Отличное")
        GOOD = "good", _("Хорошее")
        FAIR = "fair", _("Удовлетворительное")
        POOR = "poor", _("Плохое")

    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="conditions")
    recorded_at = models.DateTimeField(default=timezone.now)
    green_speed = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)
    fairway_condition = models.CharField(max_length=20, choices=Rating.choices, blank=True)
    rough_condition = models.CharField(max_length=20, choices=Rating.choices, blank=True)
    bunker_condition = models.CharField(max_length=20, choices=Rating.choices, blank=True)
    weather = models.CharField(max_length=100, blank=True)
    temperature = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True)
    wind_speed = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True)
    humidity = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(100)],
    )
    notes = models.TextField(blank=True)
    reported_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="course_condition_reports",
    )

    class Meta:
        verbose_name = _("Состояние поля")
        verbose_name_plural = _("Состояние полей")
        ordering = ["-recorded_at"]
        get_latest_by = "recorded_at"

    def __str__(self) -> str:
        return f"{self.course_id} @ {self.recorded_at:%Y-%m-%d %H:%M}"


class Holiday(models.Model):
    """Праздничный день: в эту дату действует праздничный тариф."""

    date = models.DateField(unique=True)
    name = models.CharField(max_length=100)

    class Meta:
        verbose_name = _("Праздничный день")
        verbose_name_plural = _("Праздничные дни")
        ordering = ["date"]

    def __str__(self) -> str:
        return f"{self.date}: {self.name}"

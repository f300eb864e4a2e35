from django.apps import AppConfig  # type: ignore


class CoursesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.courses"
    label = "courses"
    verbose_name = "Гольф-поля"

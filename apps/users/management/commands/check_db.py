from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError  # type: ignore
from django.db import DatabaseError, connections  # type: ignore


class Command(BaseCommand):
    help = "Проверяет подключение к базе данных; завершается с ошибкой, если она недоступна"

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument("--database", default="default")

    def handle(self, *args, **options):  # type: ignore
        alias = options["database"]
        try:
            with connections[alias].cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except DatabaseError as exc:
            raise CommandError(f"Не удалось подключиться к базе '{alias}': {exc}") from exc

        vendor = connections[alias].vendor
        self.stdout.write(self.style.SUCCESS(f"База '{alias}' ({vendor}) доступна"))

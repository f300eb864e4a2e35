from __future__ import annotations

import os

from django.core.management.base import BaseCommand, CommandError  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore

from apps.users.models import CustomUser


class Command(BaseCommand):
    help = "Создаёт администратора клуба или повышает существующего пользователя до администратора"

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument("--email", default=os.environ.get("ADMIN_EMAIL", "admin@golfclub.local"))
        parser.add_argument("--password", default=os.environ.get("ADMIN_PASSWORD"))
        parser.add_argument("--first-name", default="Admin")
        parser.add_argument("--last-name", default="User")

    def handle(self, *args, **options):  # type: ignore
        email = options["email"]
        password = options["password"]

        try:
            with transaction.atomic():
                user = CustomUser.objects.filter(email__iexact=email).first()
                if user is not None:
                    user.role = CustomUser.RoleChoices.ADMIN
                    user.is_staff = True
                    if password:
                        user.set_password(password)
                    user.save()
                    self.stdout.write(self.style.WARNING(f"Пользователь {email} уже существует, роль обновлена до admin"))
                    return

                if not password:
                    raise CommandError("Пароль обязателен: --password или ADMIN_PASSWORD")

                CustomUser.objects.create_user(
                    email=email,
                    password=password,
                    first_name=options["first_name"],
                    last_name=options["last_name"],
                    role=CustomUser.RoleChoices.ADMIN,
                    is_staff=True,
                )
        except DatabaseError as exc:
            raise CommandError(f"База данных недоступна: {exc}") from exc

        self.stdout.write(self.style.SUCCESS(f"Администратор {email} создан"))

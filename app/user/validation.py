"""Registration form checks.

Every field is checked on each call and the result maps field name to
message; an empty mapping means the form is valid.
"""

import re
from collections.abc import Iterable

from app.core.config import get_settings
from app.user.schemas import RegisterForm, User

FULL_NAME_RE = re.compile(r"[а-яА-ЯёЁ\s-]+")
LOGIN_RE = re.compile(r"[a-zA-Z0-9_]+")
EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_RE = re.compile(r"\+7 \(\d{3}\)\d{3}-\d{2}-\d{2}", re.ASCII)


def is_valid_full_name(value: str) -> bool:
    return FULL_NAME_RE.fullmatch(value) is not None


def is_valid_login(value: str) -> bool:
    return LOGIN_RE.fullmatch(value) is not None


def is_valid_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None


def is_valid_phone(value: str) -> bool:
    return PHONE_RE.fullmatch(value) is not None


def utf16_length(value: str) -> int:
    """Length in UTF-16 code units, as browsers count string length."""
    return len(value.encode("utf-16-le")) // 2


def is_login_taken(login: str, users: Iterable[User]) -> bool:
    return any(user.login == login for user in users)


def validate_registration(form: RegisterForm, users: Iterable[User]) -> dict[str, str]:
    settings = get_settings()
    errors: dict[str, str] = {}

    if not is_valid_full_name(form.full_name):
        errors["fullName"] = "ФИО должно содержать только кириллицу, пробелы и дефисы"

    if not is_valid_login(form.login):
        errors["login"] = "Логин должен содержать только латиницу и цифры"

    # overrides the charset message
    if is_login_taken(form.login, users):
        errors["login"] = "Этот логин уже занят"

    if not is_valid_email(form.email):
        errors["email"] = "Неверный формат email"

    if not is_valid_phone(form.phone):
        errors["phone"] = "Формат: +7 (XXX)XXX-XX-XX"

    if utf16_length(form.password) < settings.MIN_PASSWORD_LENGTH:
        errors["password"] = f"Пароль должен содержать минимум {settings.MIN_PASSWORD_LENGTH} символов"

    if form.password != form.confirm_password:
        errors["confirmPassword"] = "Пароли не совпадают"

    return errors

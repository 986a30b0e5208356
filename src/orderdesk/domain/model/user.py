"""User aggregate: the people who log in and place or manage orders."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from werkzeug.security import check_password_hash, generate_password_hash

from orderdesk.domain.exceptions import ValidationError

MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 150
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 100

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Role(Enum):
    ADMIN = "Admin"
    EMPLOYEE = "Employee"
    CUSTOMER = "Customer"

    @classmethod
    def parse(cls, raw: str) -> Role:
        for role in cls:
            if role.value.lower() == raw.strip().lower():
                return role
        choices = ", ".join(r.value for r in cls)
        raise ValidationError(f"Invalid role '{raw}' (expected one of {choices})")


@dataclass
class User:
    id: int | None
    name: str
    email: str
    password_hash: str
    role: Role
    version: int = 1

    @staticmethod
    def create(name: str, email: str, password: str, role: Role) -> User:
        user = User(id=None, name="", email="", password_hash="", role=role)
        user.rename(name)
        user.change_email(email)
        user.set_password(password)
        return user

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Name is required")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(f"Name cannot exceed {MAX_NAME_LENGTH} characters")
        self.name = name.strip()

    def change_email(self, email: str) -> None:
        email = (email or "").strip()
        if not email:
            raise ValidationError("Email is required")
        if len(email) > MAX_EMAIL_LENGTH:
            raise ValidationError(f"Email cannot exceed {MAX_EMAIL_LENGTH} characters")
        if not _EMAIL_RE.match(email):
            raise ValidationError(f"Invalid email address: '{email}'")
        self.email = email

    def set_password(self, password: str) -> None:
        if not password or not (
            MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH
        ):
            raise ValidationError(
                f"Password must be between {MIN_PASSWORD_LENGTH} and "
                f"{MAX_PASSWORD_LENGTH} characters"
            )
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

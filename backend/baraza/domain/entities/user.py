"""User domain entity — a single type tagged with its role."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from baraza.domain.events import UserRoleChanged

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 10

_PASSWORD_RULES = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[^A-Za-z0-9]"),
)


class UserRole(str, Enum):
    """Role hierarchy; each role includes every role ranked below it."""

    GUEST = "guest"
    REGISTERED_USER = "registered_user"
    EDITOR = "editor"
    ADMINISTRATOR = "administrator"

    @property
    def rank(self) -> int:
        return list(UserRole).index(self)

    def includes(self, other: "UserRole") -> bool:
        return self.rank >= other.rank


class GenderCategory(str, Enum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "Other"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


@dataclass
class User:
    """Core domain entity for an account holder."""

    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    role: UserRole = UserRole.REGISTERED_USER
    password_hash: str | None = None
    gender: GenderCategory | None = None
    provider: str | None = None
    uid: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_provider_user(self) -> bool:
        """Accounts linked to an OAuth provider skip email/password rules."""
        return bool(self.provider and self.uid)

    def is_administrator(self) -> bool:
        return self.role is UserRole.ADMINISTRATOR

    def is_editor(self) -> bool:
        return self.role is UserRole.EDITOR

    def is_registered_user(self) -> bool:
        return self.role is UserRole.REGISTERED_USER

    def update(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        gender: GenderCategory | None = None,
    ) -> None:
        if first_name is not None:
            self.first_name = first_name
        if last_name is not None:
            self.last_name = last_name
        if gender is not None:
            self.gender = gender
        self.updated_at = datetime.now(timezone.utc)

    def change_email(self, email: str) -> None:
        self.email = email
        self.updated_at = datetime.now(timezone.utc)

    def change_role(self, role: UserRole) -> UserRoleChanged | None:
        """Move the user to ``role``; returns the event, or None when unchanged."""
        if role is self.role:
            return None
        previous = self.role
        self.role = role
        self.updated_at = datetime.now(timezone.utc)
        return UserRoleChanged(user_id=self.id, previous_role=previous.value, new_role=role.value)


def validate_credentials(
    email: str | None,
    password: str | None,
    password_confirmation: str | None = None,
    *,
    provider_linked: bool = False,
) -> list[str]:
    """Return the list of rule violations for a new account's credentials."""
    if provider_linked:
        return []

    errors: list[str] = []
    if not email or not email.strip():
        errors.append("Email can't be blank")

    if not password:
        errors.append("Password can't be blank")
        return errors

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password is too short (minimum is {PASSWORD_MIN_LENGTH} characters)")
    elif len(password) > PASSWORD_MAX_LENGTH:
        errors.append(f"Password is too long (maximum is {PASSWORD_MAX_LENGTH} characters)")

    if not all(rule.search(password) for rule in _PASSWORD_RULES):
        errors.append(
            "Password must include at least one uppercase letter, one lowercase letter, "
            "one numeral and one special character"
        )

    if password_confirmation is not None and password_confirmation != password:
        errors.append("Password confirmation doesn't match Password")
    return errors

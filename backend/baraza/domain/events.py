"""Domain events emitted by entity operations and consumed by notification handlers."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class UserRoleChanged:
    """A user moved from one role to another."""

    user_id: int | None
    previous_role: str
    new_role: str
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Subscriber:
    """An address that receives every sent newsletter."""

    email: str
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

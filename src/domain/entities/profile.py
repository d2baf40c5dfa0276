"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime

UNKNOWN_USER_NAME = "Unknown User"


@dataclass
class Profile:
    """Local mirror of a user known to the identity provider."""

    id: str
    email: str | None = None
    display_name: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def name(self) -> str:
        """Name used in notification messages."""
        return self.display_name or UNKNOWN_USER_NAME

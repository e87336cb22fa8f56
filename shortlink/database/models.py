"""Data models for the shortlink service."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ShortLink:
    """Represents a short link row. Rows are never modified after creation."""

    id: int
    slug: str
    destination: str
    custom: bool
    created_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "slug": self.slug,
            "destination": self.destination,
            "custom": self.custom,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ShortLink":
        """Create from dictionary."""
        return cls(
            id=int(data["id"]),
            slug=data["slug"],
            destination=data["destination"],
            custom=bool(data.get("custom", False)),
            created_at=data["created_at"] if isinstance(data["created_at"], datetime) else datetime.fromisoformat(data["created_at"]),
        )

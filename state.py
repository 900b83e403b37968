from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional

# Constants
PENDING, SERVED = "pending", "served"
MAX_PRAYER_LENGTH = 500
MAX_PRAYERS_PER_SERVICE = 5
DEFAULT_THEME = "general"

@dataclass
class PrayerRequest:
    id: str
    content: str
    submitted_at: str
    author: Optional[str] = None
    anonymous: bool = False
    private: bool = False
    served_at: Optional[str] = None
    status: str = PENDING

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "author": self.author,
            "anonymous": self.anonymous,
            "private": self.private,
            "submittedAt": self.submitted_at,
            "servedAt": self.served_at,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, row: dict) -> "PrayerRequest":
        return cls(
            id=row["id"],
            content=row["content"],
            author=row.get("author"),
            anonymous=bool(row.get("anonymous", False)),
            private=bool(row.get("private", False)),
            submitted_at=row["submittedAt"],
            served_at=row.get("servedAt"),
            status=row.get("status", PENDING),
        )

@dataclass(frozen=True)
class ScriptureReading:
    reference: str
    text: str
    theme: str = DEFAULT_THEME

@dataclass
class ServedPrayer:
    content: str
    anonymous: bool

@dataclass
class ServiceRecord:
    service_id: str
    start_time: datetime
    opening: str
    scripture: ScriptureReading
    reflection: str
    closing: str
    prayers: list[ServedPrayer] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "serviceId": self.service_id,
            "startTime": self.start_time.isoformat(),
            "opening": self.opening,
            "scripture": asdict(self.scripture),
            "prayers": [asdict(p) for p in self.prayers],
            "reflection": self.reflection,
            "closing": self.closing,
        }

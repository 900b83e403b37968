# prayer_queue.py
import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Iterable, Optional
from errors import ValidationError
from state import (
    PENDING,
    SERVED,
    MAX_PRAYER_LENGTH,
    MAX_PRAYERS_PER_SERVICE,
    PrayerRequest,
)
from database import (
    get_prayer_file,
    load_prayer_requests,
    save_prayer_requests,
)

logger = logging.getLogger("virtual_church")

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PrayerQueue:
    """Ordered list of prayer requests, mirrored whole into one JSON file.

    The in-memory list and the file are only ever resynchronised wholesale:
    ``load`` replaces memory with the file, ``save`` replaces the file with
    memory. Two processes writing at once means the last writer wins.
    """

    def __init__(self, data_dir: Optional[str] = None, rng: Optional[random.Random] = None):
        self.data_file = get_prayer_file(data_dir)
        self.prayers: list[PrayerRequest] = []
        self._rng = rng or random.Random()

    def load(self):
        try:
            self.prayers = load_prayer_requests(self.data_file)
            logger.info(f"Loaded {len(self.prayers)} prayer requests")
        except FileNotFoundError:
            # First run, start fresh
            self.prayers = []
            self.save()

    def save(self):
        save_prayer_requests(self.data_file, self.prayers)

    def add(self, content: str, author: Optional[str] = None,
            anonymous: bool = False, private: bool = False) -> PrayerRequest:
        if not content or not content.strip():
            raise ValidationError("Prayer content is required")
        if len(content.strip()) > MAX_PRAYER_LENGTH:
            raise ValidationError(f"Prayer must be {MAX_PRAYER_LENGTH} characters or less")

        prayer = PrayerRequest(
            id=self.generate_id(),
            content=content,
            author=None if anonymous else author,
            anonymous=bool(anonymous),
            private=bool(private),
            submitted_at=_utc_now(),
        )
        self.prayers.append(prayer)
        self.save()

        logger.info(f"Prayer added: {prayer.id}")
        return prayer

    def get_pending_for_service(self) -> list[PrayerRequest]:
        # Oldest first, no reordering
        public = [p for p in self.prayers if p.status == PENDING and not p.private]
        return public[:MAX_PRAYERS_PER_SERVICE]

    def mark_as_served(self, ids: Iterable[str]) -> int:
        now = _utc_now()
        by_id = {p.id: p for p in self.prayers}
        count = 0

        for prayer_id in ids:
            prayer = by_id.get(prayer_id)
            if prayer is None or prayer.status != PENDING:
                continue
            prayer.status = SERVED
            prayer.served_at = now
            count += 1

        if count > 0:
            self.save()
            logger.info(f"Marked {count} prayers as served")
        return count

    def count(self) -> int:
        return sum(1 for p in self.prayers if p.status == PENDING)

    def get_stats(self) -> dict:
        pending = self.count()
        served = sum(1 for p in self.prayers if p.status == SERVED)
        return {"total": len(self.prayers), "pending": pending, "served": served}

    def generate_id(self) -> str:
        millis = int(time.time() * 1000)
        suffix = "".join(self._rng.choice(_ID_ALPHABET) for _ in range(9))
        return f"prayer-{millis}-{suffix}"

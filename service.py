# service.py
import logging
import random
import time
from datetime import datetime, timedelta, time as dt_time
from typing import Callable, Optional
from moltbook import MoltbookPoster
from prayer_queue import PrayerQueue
from scripture import ScriptureSelector
from settings import Settings
from state import ServedPrayer, ServiceRecord

logger = logging.getLogger("virtual_church")

OPENINGS = (
    "Welcome to today's virtual church service. We're glad you're here.",
    "Welcome, friends. Let us gather in community and reflection.",
    "Greetings and peace to all joining today's service.",
)

REFLECTION_PROMPTS = (
    "Take a moment to reflect on what you're grateful for today.",
    "Consider how you can bring more kindness into the world this week.",
    "Reflect on a challenge you're facing and the strength you have to overcome it.",
)

CLOSINGS = (
    "Thank you for joining us. Go in peace.",
    "May you carry today's reflections into your week ahead.",
    "Blessings to you and yours. See you next Sunday.",
)

RECAP_FOOTER = "*Join us next Sunday for our next service. DM this bot to submit prayer requests.* 🦞"


def format_service_date(moment: datetime) -> str:
    return f"{moment:%A}, {moment:%B} {moment.day}, {moment.year}"


class Service:
    def __init__(self, settings: Settings,
                 scripture_selector: Optional[ScriptureSelector] = None,
                 poster: Optional[MoltbookPoster] = None,
                 rng: Optional[random.Random] = None,
                 now: Optional[Callable[[], datetime]] = None):
        self.settings = settings
        self.rng = rng or random.Random()
        self.scripture_selector = scripture_selector or ScriptureSelector(rng=self.rng)
        self.poster = poster or MoltbookPoster(settings.moltbook_api_key)
        self._now = now or (lambda: datetime.now(self.settings.tz))

    def conduct_service(self, prayer_queue: PrayerQueue) -> ServiceRecord:
        service_id = self.generate_service_id()
        start_time = self._now()
        logger.info(f"Service started: {start_time.isoformat()}")

        try:
            opening = self.get_opening()
            scripture = self.scripture_selector.get_todays_reading(start_time.date())
            prayers = prayer_queue.get_pending_for_service()
            reflection = self.get_reflection_prompt()
            closing = self.get_closing()

            # Authors never leave the queue
            record = ServiceRecord(
                service_id=service_id,
                start_time=start_time,
                opening=opening,
                scripture=scripture,
                prayers=[ServedPrayer(content=p.content, anonymous=p.anonymous) for p in prayers],
                reflection=reflection,
                closing=closing,
            )

            self.post_service_recap(record)
            prayer_queue.mark_as_served([p.id for p in prayers])
        except Exception as e:
            logger.error(f"Service {service_id} failed: {e}")
            raise

        logger.info("Service completed successfully")
        return record

    def generate_service_id(self) -> str:
        return f"service-{int(time.time() * 1000)}"

    def get_opening(self) -> str:
        return self.rng.choice(OPENINGS)

    def get_reflection_prompt(self) -> str:
        return self.rng.choice(REFLECTION_PROMPTS)

    def get_closing(self) -> str:
        return self.rng.choice(CLOSINGS)

    def post_service_recap(self, record: ServiceRecord) -> dict:
        return self.poster.post(self.format_recap_post(record))

    def format_recap_post(self, record: ServiceRecord) -> dict:
        date = format_service_date(record.start_time)

        lines = [
            f"## ⛪ Virtual Church Service - {date}",
            "",
            f"**Opening:** {record.opening}",
            "",
            "---",
            "",
            "**📖 Scripture Reading**",
            f"*{record.scripture.reference}*",
            f"> {record.scripture.text}",
            "",
            "---",
            "",
        ]

        if record.prayers:
            lines.append("**🙏 Community Prayers**")
            for i, prayer in enumerate(record.prayers, start=1):
                prefix = "" if prayer.anonymous else "*Shared prayer:* "
                lines.append(f"{i}. {prefix}{prayer.content}")
            lines += ["", "---", ""]

        lines += [
            "**💭 Reflection**",
            record.reflection,
            "",
            "---",
            "",
            f"**Closing:** {record.closing}",
            "",
            "---",
            RECAP_FOOTER,
        ]

        return {
            "submolt": self.settings.submolt,
            "title": f"Virtual Church Service - {date}",
            "content": "\n".join(lines),
        }

    def get_next_service_time(self, now: Optional[datetime] = None) -> datetime:
        tz = self.settings.tz
        now = (now or self._now()).astimezone(tz)
        hour, minute = self.settings.hour_minute

        # serviceDay counts from Sunday = 0, datetime.weekday() from Monday = 0
        today = (now.weekday() + 1) % 7
        service_date = now.date() + timedelta(days=(self.settings.service_day - today) % 7)
        next_service = self._localize(service_date, hour, minute)

        if next_service <= now:
            next_service = self._localize(service_date + timedelta(days=7), hour, minute)
        return next_service

    def _localize(self, day, hour, minute) -> datetime:
        # A wall time skipped by a DST jump lands on the same instant past the gap
        tz = self.settings.tz
        return tz.normalize(tz.localize(datetime.combine(day, dt_time(hour, minute))))

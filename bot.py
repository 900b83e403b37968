# bot.py
import logging
from typing import Optional
from errors import ConfigError
from prayer_queue import PrayerQueue
from service import Service
from settings import Settings, load_settings
from state import PrayerRequest, ServiceRecord

logger = logging.getLogger("virtual_church")


class VirtualChurchBot:
    """Ties the prayer queue and the service together for the CLI and cron runs."""

    def __init__(self, settings: Optional[Settings] = None,
                 service: Optional[Service] = None,
                 prayer_queue: Optional[PrayerQueue] = None):
        self.settings = settings or load_settings()
        self.service = service or Service(self.settings)
        self.prayer_queue = prayer_queue or PrayerQueue()
        self.initialized = False

    def initialize(self) -> bool:
        logger.info("Initializing Virtual Church Moltbot...")
        try:
            self.prayer_queue.load()
            self.validate_config()
        except Exception as e:
            logger.error(f"Initialization failed: {e}")
            raise

        self.initialized = True
        logger.info("Bot initialized successfully")
        return True

    def validate_config(self):
        missing = [
            key for key, value in (
                ("moltbookApiKey", self.settings.moltbook_api_key),
                ("serviceTime", self.settings.service_time),
                ("timezone", self.settings.timezone),
            ) if not value
        ]
        if missing:
            raise ConfigError(f"Missing required config: {', '.join(missing)}")

    def run_service(self) -> ServiceRecord:
        if not self.initialized:
            self.initialize()

        logger.info("Starting virtual church service...")
        return self.service.conduct_service(self.prayer_queue)

    def add_prayer_request(self, content: str, author: Optional[str] = None,
                           anonymous: bool = False, private: bool = False) -> PrayerRequest:
        if not self.initialized:
            self.initialize()
        return self.prayer_queue.add(content, author=author, anonymous=anonymous, private=private)

    def get_status(self) -> dict:
        return {
            "initialized": self.initialized,
            "prayersPending": self.prayer_queue.count(),
            "nextService": self.service.get_next_service_time(),
        }

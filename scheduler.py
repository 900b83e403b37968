# scheduler.py
import logging
from bot import VirtualChurchBot
from database import ROOT_DIR
from settings import Settings
from state import ServiceRecord

logger = logging.getLogger("virtual_church")

JOB_NAME = "virtual-church-service"
RUN_MESSAGE = f"Run the virtual church service: cd {ROOT_DIR} && python main.py test"
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def build_cron_expression(settings: Settings) -> str:
    hour, minute = settings.hour_minute
    return f"{minute} {hour} * * {settings.service_day}"


class ServiceScheduler:
    """Describes the weekly cron job; the job runner itself lives outside this bot."""

    def __init__(self, bot: VirtualChurchBot):
        self.bot = bot

    @property
    def settings(self) -> Settings:
        return self.bot.settings

    def setup_cron(self) -> dict:
        expression = build_cron_expression(self.settings)
        day = DAY_NAMES[self.settings.service_day]
        logger.info(f"Schedule: {expression} ({day}s at {self.settings.service_time} {self.settings.timezone})")

        return {
            "name": JOB_NAME,
            "schedule": {
                "kind": "cron",
                "expr": expression,
                "tz": self.settings.timezone,
            },
            "sessionTarget": "isolated",
            "payload": {
                "kind": "agentTurn",
                "message": RUN_MESSAGE,
            },
        }

    def test_service(self) -> ServiceRecord:
        logger.info("Testing service...")
        record = self.bot.run_service()
        logger.info(f"Test passed: {record.service_id}")
        return record

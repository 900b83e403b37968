# settings.py
import os
import re
from dataclasses import dataclass
from dotenv import load_dotenv
import pytz
from database import read_json, resolve_path
from errors import ConfigError

# Load environment variables
load_dotenv()

CONFIG_PATH = resolve_path("service-config.json")
REQUIRED_KEYS = ("moltbookApiKey", "serviceTime", "timezone")
TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def parse_service_time(value: str) -> tuple[int, int]:
    match = TIME_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise ConfigError(f"serviceTime must be HH:MM, got {value!r}")
    return int(match.group(1)), int(match.group(2))


@dataclass
class Settings:
    moltbook_api_key: str
    service_time: str
    timezone: str
    service_day: int = 0  # 0 = Sunday
    submolt: str = "general"

    @classmethod
    def from_dict(cls, raw: dict) -> "Settings":
        raw = dict(raw)
        env_key = os.getenv("MOLTBOOK_API_KEY")
        if env_key:
            raw["moltbookApiKey"] = env_key

        missing = [key for key in REQUIRED_KEYS if not raw.get(key)]
        if missing:
            raise ConfigError(f"Missing required config: {', '.join(missing)}")

        parse_service_time(raw["serviceTime"])
        if not isinstance(raw["timezone"], str) or raw["timezone"] not in pytz.all_timezones_set:
            raise ConfigError(f"Unknown timezone: {raw['timezone']!r}")

        service_day = raw.get("serviceDay", 0)
        if isinstance(service_day, bool) or not isinstance(service_day, int) or not 0 <= service_day <= 6:
            raise ConfigError(f"serviceDay must be 0-6 (0 = Sunday), got {service_day!r}")

        return cls(
            moltbook_api_key=raw["moltbookApiKey"],
            service_time=raw["serviceTime"],
            timezone=raw["timezone"],
            service_day=service_day,
            submolt=raw.get("submolt") or "general",
        )

    @property
    def hour_minute(self) -> tuple[int, int]:
        return parse_service_time(self.service_time)

    @property
    def tz(self):
        return pytz.timezone(self.timezone)


def load_settings(path: str = None) -> Settings:
    path = resolve_path(path or os.getenv("SERVICE_CONFIG_PATH") or CONFIG_PATH)
    try:
        raw = read_json(path)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must hold a JSON object")
    return Settings.from_dict(raw)

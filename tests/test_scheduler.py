import json
from datetime import datetime, timezone

import pytest

import main
import settings as settings_module
from bot import VirtualChurchBot
from database import ROOT_DIR
from errors import ConfigError
from prayer_queue import PrayerQueue
from scheduler import ServiceScheduler, build_cron_expression
from settings import Settings


@pytest.fixture(autouse=True)
def no_env_overrides(monkeypatch):
    monkeypatch.delenv("MOLTBOOK_API_KEY", raising=False)
    monkeypatch.delenv("SERVICE_CONFIG_PATH", raising=False)
    monkeypatch.delenv("PRAYER_DATA_DIR", raising=False)


@pytest.fixture
def bot(settings, service, queue):
    return VirtualChurchBot(settings=settings, service=service, prayer_queue=queue)


def test_build_cron_expression():
    assert build_cron_expression(Settings("key", "10:00", "UTC")) == "0 10 * * 0"
    assert build_cron_expression(Settings("key", "07:45", "UTC", service_day=5)) == "45 7 * * 5"


def test_setup_cron_descriptor(bot):
    job = ServiceScheduler(bot).setup_cron()

    assert job["name"] == "virtual-church-service"
    assert job["schedule"] == {"kind": "cron", "expr": "0 10 * * 0", "tz": "UTC"}
    assert job["sessionTarget"] == "isolated"
    assert job["payload"]["kind"] == "agentTurn"
    assert f"cd {ROOT_DIR} && python main.py test" in job["payload"]["message"]


def test_test_service_runs_one_cycle(bot, poster):
    bot.prayer_queue.add("For the harvest")

    record = ServiceScheduler(bot).test_service()

    assert bot.initialized
    assert len(poster.posts) == 1
    assert record.prayers[0].content == "For the harvest"
    assert bot.prayer_queue.count() == 0


def test_bot_status(bot, start_time):
    bot.add_prayer_request("For peace", author="Ana")
    status = bot.get_status()

    assert status["initialized"] is True
    assert status["prayersPending"] == 1
    assert status["nextService"] > start_time


def test_bot_validate_config_rejects_blank_values(bot):
    bot.settings.moltbook_api_key = ""
    with pytest.raises(ConfigError, match="moltbookApiKey"):
        bot.initialize()
    assert not bot.initialized


def write_config(tmp_path, monkeypatch):
    config = tmp_path / "service-config.json"
    config.write_text(json.dumps({
        "moltbookApiKey": "key",
        "serviceTime": "18:30",
        "timezone": "Europe/London",
        "serviceDay": 6,
    }), encoding="utf-8")
    monkeypatch.setattr(settings_module, "CONFIG_PATH", str(config))


def test_main_setup_prints_job(tmp_path, monkeypatch, capsys):
    write_config(tmp_path, monkeypatch)

    assert main.main(["setup"]) == 0

    out = capsys.readouterr().out
    job = json.loads(out[out.index("{"):])
    assert job["schedule"]["expr"] == "30 18 * * 6"
    assert job["schedule"]["tz"] == "Europe/London"


def test_main_reports_failure(tmp_path, monkeypatch):
    monkeypatch.setattr(settings_module, "CONFIG_PATH", str(tmp_path / "absent.json"))
    assert main.main(["test"]) == 1


def test_main_rejects_unknown_command():
    with pytest.raises(SystemExit):
        main.main(["preach"])


def test_main_status_prints_queue_and_next_service(tmp_path, monkeypatch, capsys):
    write_config(tmp_path, monkeypatch)
    monkeypatch.setenv("PRAYER_DATA_DIR", str(tmp_path / "prayers"))
    seeded = PrayerQueue(str(tmp_path / "prayers"))
    seeded.load()
    first = seeded.add("For travelling mercies")
    seeded.add("For the youth retreat")
    seeded.mark_as_served([first.id])

    assert main.main(["status"]) == 0

    status = json.loads(capsys.readouterr().out)
    assert status["initialized"] is True
    assert status["prayersPending"] == 1
    assert status["prayers"] == {"total": 2, "pending": 1, "served": 1}
    next_service = datetime.fromisoformat(status["nextService"])
    assert (next_service.weekday(), next_service.hour, next_service.minute) == (5, 18, 30)
    assert next_service > datetime.now(timezone.utc)

import random
from datetime import datetime

import pytest
import pytz

from errors import PublishError
from prayer_queue import PrayerQueue
from scripture import ScriptureSelector
from service import Service
from settings import Settings
from state import ScriptureReading


class FakePoster:
    """Stands in for MoltbookPoster and remembers what it was asked to publish."""

    def __init__(self, error=None):
        self.posts = []
        self.error = error

    def post(self, post_data):
        if self.error is not None:
            raise self.error
        self.posts.append(post_data)
        return {"post": {"id": f"post-{len(self.posts)}"}}


@pytest.fixture
def settings():
    return Settings(
        moltbook_api_key="test-key",
        service_time="10:00",
        timezone="UTC",
        service_day=0,
        submolt="church",
    )


@pytest.fixture
def catalog():
    return [
        ScriptureReading("Psalm 23:1", "The Lord is my shepherd; I shall not want.", "comfort"),
        ScriptureReading("Romans 8:28", "All things work together for good.", "hope"),
        ScriptureReading("Matthew 11:28", "Come unto me, and I will give you rest.", "comfort"),
    ]


@pytest.fixture
def queue(tmp_path):
    q = PrayerQueue(str(tmp_path), rng=random.Random(1))
    q.load()
    return q


@pytest.fixture
def poster():
    return FakePoster()


@pytest.fixture
def start_time():
    # Sunday
    return pytz.utc.localize(datetime(2026, 10, 25, 10, 0))


@pytest.fixture
def service(settings, catalog, poster, start_time):
    rng = random.Random(7)
    return Service(
        settings,
        scripture_selector=ScriptureSelector(catalog, rng=rng),
        poster=poster,
        rng=rng,
        now=lambda: start_time,
    )


@pytest.fixture
def failing_poster():
    return FakePoster(error=PublishError("Moltbook API error: 500 - boom", status_code=500, body="boom"))

# scripture.py
import os
import random
from datetime import date
from typing import Optional
from database import read_json, resolve_path
from errors import PersistenceError
from state import DEFAULT_THEME, ScriptureReading

CATALOG_PATH = resolve_path(os.path.join("data", "scriptures.json"))


def load_catalog(path: str = CATALOG_PATH) -> list[ScriptureReading]:
    """Reads the static list of readings; the file is never written back."""
    data = read_json(path)
    try:
        readings = [
            ScriptureReading(
                reference=r["reference"],
                text=r["text"],
                theme=r.get("theme") or DEFAULT_THEME,
            )
            for r in data["readings"]
        ]
    except (KeyError, TypeError, AttributeError) as e:
        raise PersistenceError(f"Malformed scripture catalog {path}: {e}") from e
    if not readings:
        raise PersistenceError(f"Scripture catalog {path} has no readings")
    return readings


class ScriptureSelector:
    """Picks readings from the catalog.

    Each selector remembers which catalog positions it has handed out from
    ``get_random_reading`` so a session avoids repeats until the pool runs dry.
    """

    def __init__(self, catalog: Optional[list[ScriptureReading]] = None,
                 rng: Optional[random.Random] = None):
        self.catalog = catalog if catalog is not None else load_catalog()
        self.used_indices: set[int] = set()
        self._rng = rng or random.Random()

    def get_todays_reading(self, today: Optional[date] = None) -> ScriptureReading:
        today = today or date.today()
        # tm_yday is 1 on January 1; leap years shift later dates by one slot
        day_of_year = today.timetuple().tm_yday
        return self.catalog[day_of_year % len(self.catalog)]

    def get_random_reading(self, theme: Optional[str] = None) -> ScriptureReading:
        pool = list(range(len(self.catalog)))
        if theme:
            themed = [i for i in pool if self.catalog[i].theme == theme]
            if themed:
                pool = themed

        # Avoid repeats if possible
        available = [i for i in pool if i not in self.used_indices]
        index = self._rng.choice(available or pool)
        self.used_indices.add(index)
        return self.catalog[index]

    def get_reading_by_theme(self, theme: str) -> ScriptureReading:
        readings = [r for r in self.catalog if r.theme == theme]
        if not readings:
            return self.get_random_reading()
        return self._rng.choice(readings)

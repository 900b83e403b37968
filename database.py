# database.py
import json
import os
from dotenv import load_dotenv
from errors import PersistenceError
from state import PrayerRequest

# Load environment variables
load_dotenv()

ROOT_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = "data"
PRAYER_FILE = "prayer-requests.json"

def resolve_path(path: str) -> str:
    # Relative paths resolve against the project directory
    return os.path.join(ROOT_DIR, path)

def get_prayer_file(data_dir: str = None) -> str:
    data_dir = data_dir or os.getenv("PRAYER_DATA_DIR") or DATA_DIR
    return os.path.join(resolve_path(data_dir), PRAYER_FILE)

# Raw JSON functions
def read_json(path: str):
    # A missing file is left as FileNotFoundError so callers can treat it as a first run
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise
    except (OSError, ValueError) as e:
        raise PersistenceError(f"Could not read {path}: {e}") from e

def write_json(path: str, data):
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except (OSError, TypeError) as e:
        raise PersistenceError(f"Could not write {path}: {e}") from e


# Prayer_Requests functions
def load_prayer_requests(path: str) -> list[PrayerRequest]:
    rows = read_json(path)
    if not isinstance(rows, list):
        raise PersistenceError(f"{path} does not hold a list of prayer requests")
    try:
        return [PrayerRequest.from_dict(row) for row in rows]
    except (KeyError, TypeError, AttributeError) as e:
        raise PersistenceError(f"Malformed prayer request in {path}: {e}") from e

def save_prayer_requests(path: str, requests: list[PrayerRequest]):
    write_json(path, [req.to_dict() for req in requests])

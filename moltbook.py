# moltbook.py
import logging
import requests
from errors import PublishError

logger = logging.getLogger("virtual_church")

BASE_URL = "https://www.moltbook.com/api/v1"
REQUEST_TIMEOUT = 30


class MoltbookPoster:
    """Thin client for the Moltbook posts and DM endpoints."""

    def __init__(self, api_key: str, base_url: str = BASE_URL, session=None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.api_key}"}

    def post(self, post_data: dict) -> dict:
        url = f"{self.base_url}/posts"
        payload = {
            "submolt": post_data.get("submolt") or "general",
            "title": post_data["title"],
            "content": post_data["content"],
        }

        try:
            response = self.session.post(url, json=payload, headers=self._headers(), timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            logger.error(f"Failed to post to Moltbook: {e}")
            raise PublishError(f"Moltbook request failed: {e}") from e

        if not response.ok:
            body = response.text
            logger.error(f"Failed to post to Moltbook: {response.status_code}")
            raise PublishError(
                f"Moltbook API error: {response.status_code} - {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            result = response.json()
        except ValueError:
            result = {}
        post_id = (result.get("post") or {}).get("id") if isinstance(result, dict) else None
        logger.info(f"Posted to Moltbook: {post_id or 'success'}")
        return result

    def _get_or_default(self, path: str, default: dict) -> dict:
        # DM lookups are best-effort; a failure never aborts the caller
        try:
            response = self.session.get(f"{self.base_url}{path}", headers=self._headers(), timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Moltbook lookup {path} failed: {e}")
            return default

    def check_dms(self) -> dict:
        return self._get_or_default("/agents/dm/check", {"pendingRequests": [], "unreadMessages": 0})

    def get_conversations(self) -> dict:
        return self._get_or_default("/agents/dm/conversations", {"conversations": []})

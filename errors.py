# errors.py
class VirtualChurchError(Exception):
    """Base class for every error this bot raises on purpose."""


class ValidationError(VirtualChurchError):
    """Prayer content was empty or too long."""


class ConfigError(VirtualChurchError):
    """Service configuration is missing keys or holds bad values."""


class PersistenceError(VirtualChurchError):
    """The prayer file could not be read or written."""


class PublishError(VirtualChurchError):
    """Moltbook rejected the post or could not be reached."""

    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

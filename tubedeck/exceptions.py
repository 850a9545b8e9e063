"""
Domain exceptions shared by the proxy endpoint, the state store and the dashboard.
"""


class TubeDeckError(Exception):
    """Base class for all application errors"""


class ValidationError(TubeDeckError):
    """Required input is missing or malformed (HTTP 400)"""


class UpstreamError(TubeDeckError):
    """The upstream search API call did not succeed (HTTP 500)"""


class SearchResponseError(TubeDeckError):
    """The proxy answered with an error status or an unexpected body shape"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class StateStoreCorruptedError(TubeDeckError):
    """A persisted slot could not be deserialized"""

    def __init__(self, slot: str, reason: str):
        super().__init__(f"Stored value for slot '{slot}' is malformed: {reason}")
        self.slot = slot
        self.reason = reason

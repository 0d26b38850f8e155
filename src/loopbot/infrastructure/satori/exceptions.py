"""Satori-related exceptions."""


class SatoriError(Exception):
    """Base exception for Satori-related errors."""


class SatoriApiError(SatoriError):
    """Satori HTTP API returned an error response."""

    def __init__(self, endpoint: str, status: int, body: str = "") -> None:
        """初期化

        Args:
            endpoint: Called API endpoint (e.g. "message.create").
            status: HTTP status code.
            body: Response body (truncated in the message).
        """
        self.endpoint = endpoint
        self.status = status
        self.body = body
        super().__init__(f"Satori API {endpoint} failed with {status}: {body[:200]}")

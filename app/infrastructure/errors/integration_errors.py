from typing import Any


class IntegrationError(Exception):
    """A third-party API answered with an unexpected status."""

    def __init__(self, service: str, status_code: int | None, body: Any = None):
        self.service = service
        self.status_code = status_code
        self.body = body
        super().__init__(f"{service} request failed with status {status_code}")

    @property
    def code(self) -> str | None:
        if isinstance(self.body, dict):
            return self.body.get("code")
        return None

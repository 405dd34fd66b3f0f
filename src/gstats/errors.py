"""Domain errors mapped to HTTP responses by the global error handlers."""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, status_code: int | None = None) -> None:
        if detail is not None:
            self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)


class Unauthenticated(AppError):
    """No registered bearer token and no valid session."""

    status_code = 401
    detail = "Not authenticated"


class NotFound(AppError):
    status_code = 404
    detail = "Not found"


class UpstreamError(AppError):
    """The game gateway answered non-2xx, sent a malformed body, or was unreachable.

    ``body`` holds the raw upstream text when there was one, so proxies can pass it through.
    """

    status_code = 500
    detail = "Game gateway request failed"

    def __init__(self, detail: str | None = None, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(detail, status_code)
        self.body = body

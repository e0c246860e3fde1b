"""Error taxonomy shared by the gateway, the file tree and the HTTP layer.

Every error carries the HTTP status it is reported with, so routers never
translate exceptions by hand; ``main`` installs a single handler that
renders them as ``{"error": detail}``.
"""


class FilesManagerError(Exception):
    status_code = 500
    detail = "Internal error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(FilesManagerError):
    """Malformed input. Never retried."""

    status_code = 400
    detail = "Bad request"


class NotFoundError(FilesManagerError):
    """Absent, or present but owned by someone else. The two are not distinguished."""

    status_code = 404
    detail = "Not found"


class ParentNotFoundError(NotFoundError):
    status_code = 400
    detail = "Parent not found"


class Unauthorized(FilesManagerError):
    status_code = 401
    detail = "Unauthorized"


class DependencyError(FilesManagerError):
    """A backing store (Redis, database, blob storage) could not be reached."""

    status_code = 500
    detail = "Backing store unavailable"

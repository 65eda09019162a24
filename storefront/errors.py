"""Error kinds shared by storage, workflow and the HTTP layer."""

from typing import Optional


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Malformed or missing input. `errors` holds {"field", "message"} items."""

    status_code = 400

    def __init__(self, message: str, errors: Optional[list[dict]] = None):
        super().__init__(message)
        self.errors = errors or []

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors if e.get("field")]


class NotFoundError(StorefrontError):
    status_code = 404


class StorageError(StorefrontError):
    """Persistence transport failure or constraint violation."""

    status_code = 500


class AuthorizationError(StorefrontError):
    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code

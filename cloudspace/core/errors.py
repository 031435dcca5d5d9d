"""Error taxonomy shared by services and the HTTP layer.

Services raise these; the handlers registered in ``cloudspace.main`` turn them
into ``{"error": message}`` responses with the matching status code.
"""

class CloudSpaceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class ValidationError(CloudSpaceError):
    status_code = 400
    default_message = "Invalid request"

class NotFoundError(CloudSpaceError):
    status_code = 404
    default_message = "Not found"

class AuthError(CloudSpaceError):
    status_code = 401
    default_message = "Incorrect password"

class ConflictError(CloudSpaceError):
    # Duplicate workspace names were always reported as a bad request
    status_code = 400
    default_message = "Conflict"

class InternalError(CloudSpaceError):
    """Storage or database failure. The message is logged, never returned."""

class StorageError(InternalError):
    default_message = "Storage operation failed"

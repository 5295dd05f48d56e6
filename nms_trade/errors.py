# nms_trade/errors.py
from fastapi import HTTPException, status


class TradeAPIError(HTTPException):
    """Base class for every error the trade API reports to callers.

    Carries a short human-readable ``error`` message. The application's
    exception handler renders it as ``{"error": <message>}`` with the
    error's status code.
    """

    def __init__(self, status_code: int, error: str):
        self.error = error
        super().__init__(status_code=status_code, detail=error)


class MissingTenantError(TradeAPIError):
    """Raised when a request carries no tenant key in any supported location."""

    def __init__(self, error: str = "Missing userToken"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, error=error)


class ValidationFailureError(TradeAPIError):
    """Raised when request data is missing or malformed.

    Always raised before any storage call is made.
    """

    def __init__(self, error: str = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, error=error)


class NoFieldsProvidedError(ValidationFailureError):
    """A partial update carried no updatable field."""

    def __init__(self, error: str = "No fields to update"):
        super().__init__(error=error)


class MissingFieldsError(ValidationFailureError):
    """A create/replace call lacked one of its required fields."""

    def __init__(self, error: str = "Missing demand data"):
        super().__init__(error=error)


class MissingKeyError(ValidationFailureError):
    """A keyed demand call lacked stationId or itemId."""

    def __init__(self, error: str = "Missing demand data"):
        super().__init__(error=error)


class InvalidKeyError(ValidationFailureError):
    """A keyed demand call supplied a key that is not a numeric identifier."""

    def __init__(self, error: str = "Invalid stationId or itemId"):
        super().__init__(error=error)


class NotFoundError(TradeAPIError):
    """No row matches the requested key within the caller's tenant."""

    def __init__(self, error: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, error=error)


class StorageFailureError(TradeAPIError):
    """The storage engine rejected or failed a statement.

    The engine's message is passed through unchanged. Not retried.
    """

    def __init__(self, error: str):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, error=error)


class ReferentialViolationError(StorageFailureError):
    """A demand referenced a station or item that does not exist for the tenant.

    Detected by the storage engine's foreign-key enforcement.
    """

"""
Error kinds raised by the catalog, order ledger and notification log.

Every error carries a ``kind`` (stable, machine readable) and a ``message``
that is safe to show to the caller. Internal detail such as driver errors
travels only on ``__cause__`` and in the logs.
"""


class CanteenError(Exception):
    kind = "error"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CanteenError):
    kind = "validation_error"
    status_code = 422
    default_message = "Invalid input"


class NotFound(CanteenError):
    kind = "not_found"
    status_code = 404
    default_message = "Not found"


class ItemUnavailable(CanteenError):
    kind = "item_unavailable"
    status_code = 409
    default_message = "Menu item is not available"


class InvalidTransition(CanteenError):
    kind = "invalid_transition"
    status_code = 409
    default_message = "Order status change not allowed"


class Forbidden(CanteenError):
    kind = "forbidden"
    status_code = 403
    default_message = "Not allowed"


class StorageError(CanteenError):
    kind = "storage_error"
    status_code = 503
    default_message = "A database error occurred. Please try again later."

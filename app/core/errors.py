"""Error kinds surfaced by the reservation endpoints.

Every error carries a user-facing message and the HTTP status the
router attaches to the error envelope. Catch ``ReservationError`` to
handle all of them at once.
"""


class ReservationError(Exception):
    """Base class for all reservation errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReservationError):
    """A required submission field is missing or blank.

    Attributes:
        field: Wire name of the first missing field, in the fixed
            required-field order.
    """

    status_code = 400

    def __init__(self, field: str):
        super().__init__(f"Required field missing: {field}")
        self.field = field


class DuplicateError(ReservationError):
    """The booker's name, national ID or phone is already registered.

    The message always starts with ``duplicate:`` so clients can tell it
    apart from other errors by prefix.
    """

    status_code = 409
    TAG = "duplicate:"

    def __init__(self, message: str = "You are already registered. Each person may register only once (by national ID, phone number and name)."):
        if not message.startswith(self.TAG):
            message = f"{self.TAG} {message}"
        super().__init__(message)


class LockTimeout(ReservationError):
    """The submission lock was not acquired within the configured wait."""

    status_code = 503

    def __init__(self, timeout: float):
        super().__init__(f"Server is busy, could not acquire submission lock within {timeout:g}s. Please try again.")
        self.timeout = timeout


class UnknownAction(ReservationError):
    status_code = 400

    def __init__(self, action):
        super().__init__(f"Unknown action: {action}")
        self.action = action


class UnexpectedError(ReservationError):
    status_code = 500


class StoreError(UnexpectedError):
    """The tabular store is unreachable, misconfigured or has a bad schema."""

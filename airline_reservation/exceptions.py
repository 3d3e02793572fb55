"""Exception types raised by the reservation system."""


class ReservationError(Exception):
    """Base error with a user-facing message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ReservationError):
    """Malformed input: bad seat label, out-of-range seat, aisle, bad capacity."""


class BookingError(ReservationError):
    """Invalid state transition: double booking, freeing a free seat, full flight."""


class FileOperationError(ReservationError):
    """Reading or writing a data file failed."""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)

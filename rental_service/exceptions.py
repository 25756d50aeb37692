from fastapi import status


class RentalServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookingValidationError(RentalServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(RentalServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class ItemNotFoundError(NotFoundError):
    def __init__(self, item_name: str):
        super().__init__(f'Equipment "{item_name}" not found.')
        self.item_name = item_name


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_code: str):
        super().__init__("Booking not found.")
        self.booking_code = booking_code


class ConflictError(RentalServiceError):
    status_code = status.HTTP_409_CONFLICT


class DuplicateBookingCodeError(ConflictError):
    def __init__(self, booking_code: str):
        super().__init__("Booking code already exists. Please try again with a new code.")
        self.booking_code = booking_code


class InsufficientStockError(ConflictError):
    def __init__(self, item_name: str, requested: int, available: int):
        super().__init__(
            f'Not enough stock for "{item_name}": requested {requested}, available {max(available, 0)}.'
        )
        self.item_name = item_name
        self.requested = requested
        self.available = available


class StoreError(RentalServiceError):
    pass

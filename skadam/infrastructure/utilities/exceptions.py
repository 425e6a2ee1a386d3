"""
Custom exceptions for the SKADAM café backend
"""

import logging

from skadam.infrastructure.utilities.constants import ErrorCodes

logger = logging.getLogger(__name__)


class SkadamError(Exception):
    """Base exception for the café backend"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.user_message = user_message or "An error occurred. Please try again."
        self.error_code = error_code or ErrorCodes.GENERAL_ERROR


class ValidationError(SkadamError):
    """Input validation errors"""

    def __init__(self, message: str, field: str = None, error_code: str = None):
        super().__init__(
            message, message, error_code or ErrorCodes.VALIDATION_ERROR  # Validation errors are user-friendly
        )
        self.field = field


class DuplicateKeyError(ValidationError):
    """A unique key (phone number, promo code, username) is already taken"""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"{field.replace('_', ' ').capitalize()} '{value}' already exists",
            field,
            ErrorCodes.DUPLICATE_KEY,
        )
        self.value = value


class BusinessLogicError(SkadamError):
    """Business rule violations"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(
            message, user_message or message, error_code or ErrorCodes.BUSINESS_ERROR
        )


class OrderNotFoundError(BusinessLogicError):
    """Order not found"""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order not found: {order_id}",
            "That order could not be found. Please refresh and try again.",
            ErrorCodes.NOT_FOUND,
        )
        self.order_id = order_id


class CustomerNotFoundError(BusinessLogicError):
    """Loyalty customer not found"""

    def __init__(self, customer_id: str):
        super().__init__(
            f"Customer not found: {customer_id}",
            "Customer information not found. Please try again.",
            ErrorCodes.NOT_FOUND,
        )
        self.customer_id = customer_id


class PersistenceError(SkadamError):
    """Storage adapter failures"""

    def __init__(self, message: str, key: str = None):
        super().__init__(
            message,
            "Sorry, there was a problem saving data. Please try again in a moment.",
            ErrorCodes.PERSISTENCE_ERROR,
        )
        self.key = key

"""
Domain-specific exceptions for registrations app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class RegistrationsServiceError(Exception):
    """Base exception for all registrations service errors."""
    pass


class InvalidAmountError(RegistrationsServiceError):
    """Raised when a monetary input is negative (or non-positive for payments)."""
    pass


class DuplicateRegistrationError(RegistrationsServiceError):
    """Raised when a participant is already registered to the product."""
    pass


class ProductFullError(RegistrationsServiceError):
    """Raised when a product has reached its maximum number of participants."""
    pass


class PaymentNotFoundError(RegistrationsServiceError):
    """Raised when a payment does not exist."""
    pass


class DeclarationNotFoundError(RegistrationsServiceError):
    """Raised when a health declaration token is unknown."""
    pass


class DeclarationAlreadySignedError(RegistrationsServiceError):
    """Raised when a health declaration is submitted a second time."""
    pass

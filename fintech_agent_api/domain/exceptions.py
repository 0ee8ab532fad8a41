"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    status_code = 500


class ValidationError(DomainException):
    """Required field missing, amount not positive, or enum value unknown"""

    status_code = 400


class NotFoundError(DomainException):
    """Requested entity does not exist in the store"""

    status_code = 404


class ConflictError(DomainException):
    """Action is not allowed from the entity's current status"""

    status_code = 409

"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages,
and the line-item handlers can hand them back as ``Failure`` values.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed or a business rule was violated."""


# --- Missing references -------------------------------------------------------


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OrderNotFoundError(EntityNotFoundError):
    pass


class ProductNotFoundError(EntityNotFoundError):
    pass


class LineItemNotFoundError(EntityNotFoundError):
    pass


class UserNotFoundError(EntityNotFoundError):
    pass


# --- Inventory ----------------------------------------------------------------


class ProductUnavailableError(DomainException):
    """The product is flagged as not available for new line items."""


class InsufficientStockError(DomainException):
    """The requested quantity exceeds the product's available stock."""


class InvalidStateError(DomainException):
    """A store write would break a stored invariant (e.g. negative stock)."""


# --- Persistence conflicts ----------------------------------------------------


class ConcurrencyConflictError(DomainException):
    """The row changed between read and write (version mismatch)."""


class ConflictError(DomainException):
    """The operation is blocked by dependent records."""


class OrderHasItemsError(ConflictError):
    pass


class ProductInUseError(ConflictError):
    pass


# --- Access -------------------------------------------------------------------


class AuthenticationError(DomainException):
    """Credentials were rejected or no valid session exists."""


class PermissionDeniedError(DomainException):
    """The current role may not perform the requested operation."""

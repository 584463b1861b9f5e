"""Domain-level exceptions.

Every failure the engine can report is a subclass of DomainException so
callers (the CLI, an HTTP layer) can catch them uniformly and translate
each kind into their own message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input violated a product rule (short name, negative price or stock)."""


class EntityNotFoundError(DomainException):
    """A requested product does not exist."""


class InvalidQuantityError(DomainException):
    """A sale quantity was zero or negative."""


class InsufficientStockError(DomainException):
    """A sale asked for more units than are currently in stock."""


class StorageError(DomainException):
    """The backing store failed (unreadable file, unreachable database)."""

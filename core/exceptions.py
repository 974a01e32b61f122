# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when input is missing, malformed or violates constraints."""


class AuthError(DomainError):
    """Raised when a call is made without a valid caller identity."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class CollaboratorReadError(DomainError):
    """Raised when the task or cost store cannot be read."""


class PersistenceWriteError(DomainError):
    """Raised when a health snapshot cannot be written."""

"""
Exception hierarchy for code construction and code algebra.

All exceptions inherit from CodeError. Parameter and precondition errors are
also ValueErrors, consistency failures are RuntimeErrors.
"""


class CodeError(Exception):
    """Base exception for all code construction errors."""
    pass


class InvalidParameterError(CodeError, ValueError):
    """Raised when the parameters of a construction are malformed."""
    pass


class InvalidFieldError(InvalidParameterError):
    """Raised when no suitable finite field exists for the requested order."""

    def __init__(self, message: str, order: int = None):
        super().__init__(message)
        self.order = order


class InvalidDistanceError(InvalidParameterError):
    """Raised when a design distance is out of range."""
    pass


class InvalidLengthError(InvalidParameterError):
    """Raised when a code length (or field size) cannot be used."""
    pass


class ConstructionPreconditionError(CodeError, ValueError):
    """Raised when the input codes of an operator do not fit together."""
    pass


class InternalConsistencyError(CodeError, RuntimeError):
    """Raised when a freshly built code fails its own verification."""
    pass

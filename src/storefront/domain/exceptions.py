"""Domain-level exceptions.

Invariant violations are expressed as subclasses of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.

Expected checkout conditions (unavailable quarter, rejected promo code,
order below the minimum) are NOT exceptions: they travel as ``Problem``
values, see ``storefront.domain.model.problems``.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidStateTransition(DomainException):
    """An aggregate was asked to move to a status it cannot reach."""

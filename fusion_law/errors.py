"""
Fusion Law Errors

Every failure raised by the package derives from FusionLawError, which is a
ValueError so callers validating input can catch either.
"""


class FusionLawError(ValueError):
    """Base class for fusion law failures."""


class DomainMismatch(FusionLawError):
    """Operands belong to different fusion laws."""


class NotCoercible(FusionLawError):
    """A value cannot be identified with an element of the target law."""


class AsymmetricLaw(FusionLawError):
    """A computation that needs a symmetric table was given an asymmetric one."""


class InternalInvariantViolation(FusionLawError):
    """The multiplication table is inconsistent with a derived structure."""


class InvalidFusionLaw(FusionLawError):
    """The elements, table or evaluation break a structural invariant."""


class MissingEvaluation(FusionLawError):
    """The fusion law has no evaluation map."""


class SerializationError(FusionLawError):
    """A record does not describe a fusion law."""


class PieceTooLarge(FusionLawError):
    """A graded piece exceeds the configured pure subset enumeration limit."""

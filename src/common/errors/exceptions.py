"""Exception hierarchy for sampling, detection and generation."""

from typing import Optional

from common.errors.error_codes import ErrorCode


class FormGenError(Exception):
    """Base error carrying a canonical error code."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None) -> None:
        super().__init__(message)
        self.code = code or self.default_code


class SamplingError(FormGenError):
    """Sampling the primary collection failed or returned nothing."""

    default_code = ErrorCode.SAMPLING_FAILED


class GenerationError(FormGenError):
    """The form generation service failed or returned an unusable payload."""

    default_code = ErrorCode.GENERATION_FAILED


class InvalidTransitionError(FormGenError):
    """A wizard event was dispatched in a phase that does not accept it."""

    default_code = ErrorCode.INVALID_TRANSITION


class ValidationError(FormGenError):
    """A user edit violates a relationship invariant."""

    default_code = ErrorCode.VALIDATION_ERROR

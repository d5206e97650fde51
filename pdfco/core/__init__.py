"""
Dispatch core: profile normalization, job polling, inline materialization
and the error taxonomy shared by all actions.
"""

from .errors import (
    ActionValidationError,
    ApiError,
    FetchError,
    JobFailedError,
    JobTimeoutError,
    NormalizationWarning,
    PdfcoError,
    TransportError,
    UnknownActionError,
)
from .materializer import InlineMode, materialize
from .normalizer import profiles_to_object, sanitize_profiles
from .poller import JobPoller, next_state

__all__ = [
    "ActionValidationError",
    "ApiError",
    "FetchError",
    "InlineMode",
    "JobFailedError",
    "JobPoller",
    "JobTimeoutError",
    "NormalizationWarning",
    "PdfcoError",
    "TransportError",
    "UnknownActionError",
    "materialize",
    "next_state",
    "profiles_to_object",
    "sanitize_profiles",
]

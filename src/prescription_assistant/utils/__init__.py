"""
Shared utilities: exceptions, logging, retry and image helpers
"""

from .exceptions import (
    PrescriptionAssistantError,
    NoImageError,
    ExtractionError,
    ExtractionErrorKind,
    ExplanationError,
    ExplanationErrorKind,
    ConfigurationError,
)
from .logging import setup_logging
from .retry import retry_async

__all__ = [
    "PrescriptionAssistantError",
    "NoImageError",
    "ExtractionError",
    "ExtractionErrorKind",
    "ExplanationError",
    "ExplanationErrorKind",
    "ConfigurationError",
    "setup_logging",
    "retry_async",
]

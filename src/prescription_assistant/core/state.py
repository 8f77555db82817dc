# ============================================================================
# src/prescription_assistant/core/state.py
# ============================================================================
"""
Processing State

Tagged variant describing pipeline progress:

    Idle | Processing(progress_message) | Completed(prescription) | Failed(error)

Plus a small observer registry shared by the pipeline and the conversation
session so any front end (CLI, web, notebook) can follow changes without the
core knowing how they are rendered.
"""

from dataclasses import dataclass
from typing import Callable, Generic, List, TypeVar, Union
import logging

from .models import Prescription

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    is_processing = False
    is_completed = False
    has_failed = False


@dataclass(frozen=True)
class Processing:
    progress_message: str

    is_processing = True
    is_completed = False
    has_failed = False


@dataclass(frozen=True)
class Completed:
    prescription: Prescription

    is_processing = False
    is_completed = True
    has_failed = False


@dataclass(frozen=True)
class Failed:
    error: Exception

    is_processing = False
    is_completed = False
    has_failed = True

    @property
    def user_message(self) -> str:
        """Generic message suitable for showing next to a retry action."""
        return getattr(self.error, "user_message", "Something went wrong. Please try again.")


ProcessingState = Union[Idle, Processing, Completed, Failed]


T = TypeVar("T")


class Observable(Generic[T]):
    """
    Synchronous observer registry.

    Callbacks run in registration order on the thread that published the
    value. An exception inside one callback is logged and does not stop the
    others or the publisher.
    """

    def __init__(self):
        self._observers: List[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def publish(self, value: T) -> None:
        for callback in list(self._observers):
            try:
                callback(value)
            except Exception as e:
                logger.error(f"Observer {callback!r} failed: {e}", exc_info=True)

# ============================================================================
# src/prescription_assistant/core/history.py
# ============================================================================
"""
In-memory list of prescriptions completed during the current session.

Newest first. Nothing is written to disk; the list is gone when the
process exits.
"""

from typing import Callable, List, Optional, Tuple

from .models import Prescription
from .state import ProcessingState


class PrescriptionHistory:
    def __init__(self):
        self._items: List[Prescription] = []

    @property
    def items(self) -> Tuple[Prescription, ...]:
        return tuple(self._items)

    def add(self, prescription: Prescription) -> None:
        self._items.insert(0, prescription)

    def get(self, prescription_id: str) -> Optional[Prescription]:
        for prescription in self._items:
            if prescription.id == prescription_id:
                return prescription
        return None

    def clear(self) -> None:
        self._items.clear()

    def attach(self, pipeline) -> Callable[[], None]:
        """Record every prescription the pipeline completes; returns unsubscribe."""
        def on_state(state: ProcessingState) -> None:
            if state.is_completed:
                self.add(state.prescription)

        return pipeline.subscribe(on_state)

    def __len__(self) -> int:
        return len(self._items)

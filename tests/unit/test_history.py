# ============================================================================
# tests/unit/test_history.py
# ============================================================================
"""
Tests for the in-memory prescription history
"""

import pytest

from conftest import RecordingService, StaticExtractor
from prescription_assistant.core.history import PrescriptionHistory
from prescription_assistant.core.models import Prescription
from prescription_assistant.core.pipeline import ProcessingPipeline


def _rx(text):
    return Prescription(extracted_text=text, explanation="", medications=[])


def test_newest_first():
    history = PrescriptionHistory()
    first, second = _rx("first"), _rx("second")

    history.add(first)
    history.add(second)

    assert history.items == (second, first)
    assert len(history) == 2


def test_get_by_id():
    history = PrescriptionHistory()
    rx = _rx("one")
    history.add(rx)

    assert history.get(rx.id) is rx
    assert history.get("missing") is None


def test_clear():
    history = PrescriptionHistory()
    history.add(_rx("one"))

    history.clear()

    assert len(history) == 0


@pytest.mark.asyncio
async def test_attach_records_completed_runs(image_payload):
    extractor = StaticExtractor("Lisinopril 10mg daily")
    pipeline = ProcessingPipeline(extractor, RecordingService())
    history = PrescriptionHistory()
    unsubscribe = history.attach(pipeline)

    state = await pipeline.run(image_payload)
    await pipeline.run(None)

    assert history.items == (state.prescription,)

    unsubscribe()
    await pipeline.run(image_payload)
    assert len(history) == 1

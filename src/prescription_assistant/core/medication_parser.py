# ============================================================================
# src/prescription_assistant/core/medication_parser.py
# ============================================================================
"""
Medication Parser

Derives a best-effort medication list from raw OCR text with a line-based
token heuristic:

    <name> <dosage> <frequency> ...

Each non-blank line with at least two space-separated tokens becomes one
Medication; the whole line is kept as its instructions. When nothing
qualifies, a single placeholder medication is returned so a finished
prescription always lists at least one entry.

Lines with a different word order ("Take Amoxicillin 500mg ...") are
misparsed. The behavior is kept as-is because the explanation prompts and
the chat context are built from this exact output.
"""

from typing import List

from .constants import (
    DEFAULT_DOSAGE,
    DEFAULT_FREQUENCY,
    PLACEHOLDER_INSTRUCTIONS,
    PLACEHOLDER_MEDICATION_NAME,
)
from .models import Medication


def placeholder_medication() -> Medication:
    """The entry used when no line could be parsed."""
    return Medication(
        name=PLACEHOLDER_MEDICATION_NAME,
        dosage=DEFAULT_DOSAGE,
        frequency=DEFAULT_FREQUENCY,
        instructions=PLACEHOLDER_INSTRUCTIONS,
    )


def parse_medications(text: str) -> List[Medication]:
    """
    Parse medications from extracted prescription text.

    Pure and total: never raises, never returns an empty list.

    Args:
        text: Newline-separated OCR text

    Returns:
        Medications in order of appearance, or [placeholder]
    """
    medications: List[Medication] = []

    for line in (text or "").splitlines():
        if not line.strip():
            continue

        # Single-space split on purpose: runs of spaces yield empty tokens
        tokens = line.split(" ")
        if len(tokens) < 2:
            continue

        medications.append(Medication(
            name=tokens[0],
            dosage=tokens[1] if len(tokens) > 1 else DEFAULT_DOSAGE,
            frequency=tokens[2] if len(tokens) > 2 else DEFAULT_FREQUENCY,
            instructions=line,
        ))

    if not medications:
        medications.append(placeholder_medication())

    return medications

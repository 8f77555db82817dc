# ============================================================================
# tests/unit/test_medication_parser.py
# ============================================================================
"""
Tests for the line-based medication parser
"""

from prescription_assistant.core.constants import (
    DEFAULT_DOSAGE,
    DEFAULT_FREQUENCY,
    PLACEHOLDER_INSTRUCTIONS,
    PLACEHOLDER_MEDICATION_NAME,
)
from prescription_assistant.core.medication_parser import (
    parse_medications,
    placeholder_medication,
)


class TestTokenMapping:
    """Test how line tokens map onto medication fields"""

    def test_full_line(self):
        """name / dosage / frequency come from the first three tokens"""
        line = "Amoxicillin 500mg Twice daily take with food"
        medications = parse_medications(line)

        assert len(medications) == 1
        med = medications[0]
        assert med.name == "Amoxicillin"
        assert med.dosage == "500mg"
        assert med.frequency == "Twice"
        assert med.instructions == line

    def test_two_token_line_gets_default_frequency(self):
        med = parse_medications("Metformin 850mg")[0]

        assert med.name == "Metformin"
        assert med.dosage == "850mg"
        assert med.frequency == DEFAULT_FREQUENCY

    def test_single_token_line_skipped(self):
        medications = parse_medications("Rx\nLisinopril 10mg daily")

        assert [m.name for m in medications] == ["Lisinopril"]

    def test_runs_of_spaces_produce_empty_tokens(self):
        """Splitting is on single spaces, so doubled spaces yield empty fields"""
        med = parse_medications("Aspirin  81mg")[0]

        assert med.name == "Aspirin"
        assert med.dosage == ""
        assert med.frequency == "81mg"


class TestParseMedications:
    """Test whole-text parsing"""

    def test_multiple_lines_in_order(self, sample_prescription_text):
        medications = parse_medications(sample_prescription_text)

        assert [m.name for m in medications] == ["Amoxicillin", "Ibuprofen"]
        assert medications[1].dosage == "200mg"
        assert medications[1].frequency == "Every"

    def test_blank_lines_ignored(self):
        medications = parse_medications("\n   \nAtorvastatin 20mg nightly\n\n")

        assert len(medications) == 1
        assert medications[0].name == "Atorvastatin"

    def test_empty_text_returns_placeholder(self):
        medications = parse_medications("")

        assert medications == [placeholder_medication()]

    def test_none_returns_placeholder(self):
        assert parse_medications(None) == [placeholder_medication()]

    def test_unparseable_text_returns_placeholder(self):
        medications = parse_medications("Rx\nSignature\n")

        assert len(medications) == 1
        med = medications[0]
        assert med.name == PLACEHOLDER_MEDICATION_NAME
        assert med.dosage == DEFAULT_DOSAGE
        assert med.frequency == DEFAULT_FREQUENCY
        assert med.instructions == PLACEHOLDER_INSTRUCTIONS

    def test_parsing_is_idempotent(self, sample_prescription_text):
        """Same text parses to equal lists (ids excluded from equality)"""
        first = parse_medications(sample_prescription_text)
        second = parse_medications(sample_prescription_text)

        assert first == second
        assert first[0].id != second[0].id

    def test_never_empty(self):
        for text in ["", "x", "\n\n", "one two"]:
            assert len(parse_medications(text)) >= 1

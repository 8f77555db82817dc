# ============================================================================
# src/prescription_assistant/core/constants.py
# ============================================================================
"""
User-facing strings shared by the pipeline, conversation session and CLI.
"""

# Pipeline progress messages
EXTRACTING_TEXT = "Extracting text from image..."
ANALYZING_PRESCRIPTION = "Analyzing prescription with AI..."
PREPARING_RESULTS = "Preparing results..."

# Medication sentinels
DEFAULT_DOSAGE = "As prescribed"
DEFAULT_FREQUENCY = "As directed"
PLACEHOLDER_MEDICATION_NAME = "Prescription Medication"
PLACEHOLDER_INSTRUCTIONS = "Follow your doctor's instructions"

# Conversation
WELCOME_MESSAGE = (
    "Hi! I'm here to help you understand your prescription. Feel free to ask me "
    "any questions about your medications, dosage, side effects, or anything else "
    "related to your prescription."
)
CHAT_ERROR_MESSAGE = "Sorry, I couldn't process your question. Please try again."

DISCLAIMER = (
    "This analysis is for informational purposes only. "
    "Always consult your healthcare provider for medical advice."
)

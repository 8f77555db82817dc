# ============================================================================
# src/prescription_assistant/services/mock_service.py
# ============================================================================
"""
Offline stand-in for the LLM service.

Returns a canned explanation and keyword-matched answers so the scanner and
chat can be exercised without credentials or network access.
"""

import asyncio

from ..core.capabilities import ExplanationCapability, QuestionAnsweringCapability


MOCK_EXPLANATION = """Based on the prescription text provided, here's what I can tell you:

**Medications Identified:**
The prescription appears to contain medication information that requires proper medical guidance for safe use.

**General Guidance:**
• Take medications exactly as prescribed by your healthcare provider
• Follow the dosage instructions carefully
• Be aware of potential side effects and interactions
• Keep medications in their original containers
• Store medications properly (away from heat, light, and moisture)

**Important Reminders:**
• Never share prescription medications with others
• Complete the full course of treatment even if you feel better
• Contact your healthcare provider if you experience unusual symptoms
• Keep track of refill dates and quantities

**Questions to Ask Your Healthcare Provider:**
• What are the potential side effects of this medication?
• Are there any foods or other medications I should avoid?
• What should I do if I miss a dose?
• How long will I need to take this medication?

This analysis is for educational purposes only. Always consult with your healthcare provider or pharmacist for personalized medical advice."""

SIDE_EFFECTS_ANSWER = """Common side effects can vary depending on the specific medication, but generally may include:

• Nausea or stomach upset
• Dizziness or drowsiness
• Headache
• Changes in appetite
• Skin reactions

**Important:** This is general information only. For specific side effects related to your medication, please:
• Read the medication guide provided with your prescription
• Consult your pharmacist or healthcare provider
• Contact your doctor immediately if you experience severe or concerning symptoms

Every person responds differently to medications, so your experience may vary."""

DOSING_ANSWER = """For proper medication administration:

**General Guidelines:**
• Take exactly as prescribed - don't skip or double doses
• Take at the same time each day for consistency
• Follow food instructions (with food, on empty stomach, etc.)
• Use the measuring device provided, not household spoons

**If You Miss a Dose:**
• Take it as soon as you remember
• If it's almost time for the next dose, skip the missed dose
• Never take two doses at once to "catch up"

**Always refer to your prescription label and medication guide for specific instructions for your medication.**"""

FOOD_ANSWER = """Medication and food interactions are important to consider:

**General Food Guidelines:**
• Some medications work better on an empty stomach
• Others should be taken with food to reduce stomach irritation
• Certain foods can interfere with medication absorption

**Common Food Interactions:**
• Dairy products can affect some antibiotics
• Grapefruit can interact with many medications
• Alcohol should generally be avoided with medications

**For your specific medication, please check:**
• The prescription label for food instructions
• The medication information sheet
• Ask your pharmacist about specific food interactions"""

STOPPING_ANSWER = """About stopping or finishing your medication:

**Important Rules:**
• Never stop taking prescribed medication without consulting your healthcare provider
• Complete the full course, even if you feel better
• Stopping early can lead to treatment failure or resistance

**When to Contact Your Doctor:**
• If you're experiencing concerning side effects
• If you want to stop the medication for any reason
• If your symptoms aren't improving as expected
• If you have questions about the treatment duration

Your healthcare provider prescribed this medication for a specific reason and duration. They can best advise you on when and how to safely discontinue treatment."""

GENERIC_ANSWER = """Thank you for your question about your prescription. While I can provide general information, the best answer to your specific question would come from:

**Healthcare Professionals:**
• Your prescribing doctor
• Your pharmacist
• Your healthcare provider's nurse line

**Reliable Resources:**
• The medication information sheet provided with your prescription
• FDA-approved drug information websites
• Your healthcare provider's patient portal

**For Immediate Concerns:**
If you're experiencing any concerning symptoms or have urgent questions about your medication, please contact your healthcare provider or pharmacist right away.

Is there a more specific aspect of your medication that you'd like general information about?"""

# First matching rule wins
KEYWORD_ANSWERS = [
    (("side effect",), SIDE_EFFECTS_ANSWER),
    (("take", "dose"), DOSING_ANSWER),
    (("food", "eat"), FOOD_ANSWER),
    (("stop", "finish"), STOPPING_ANSWER),
]


class MockLLMService(ExplanationCapability, QuestionAnsweringCapability):
    """
    Canned responses for development.

    Args:
        delay: Seconds to sleep before each response, to mimic a network call
    """

    def __init__(self, delay: float = 0.0):
        self.delay = delay

    async def explain(self, text: str) -> str:
        await self._wait()
        return MOCK_EXPLANATION

    async def answer_question(self, question: str, context: str) -> str:
        await self._wait()
        lowered = question.lower()
        for keywords, answer in KEYWORD_ANSWERS:
            if any(keyword in lowered for keyword in keywords):
                return answer
        return GENERIC_ANSWER

    async def close(self):
        pass

    async def _wait(self) -> None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)

# ============================================================================
# src/prescription_assistant/llm/prompts.py
# ============================================================================
"""
Prompt Templates

Provides:
- The system prompt sent with every request
- Explanation and question-answering templates
- Message list builders
"""

from dataclasses import dataclass
from typing import List

from .base import ChatMessages


SYSTEM_PROMPT = (
    "You are a helpful medical assistant. Always emphasize the importance of "
    "consulting healthcare professionals."
)


@dataclass(frozen=True)
class PromptTemplate:
    """Prompt template"""
    name: str
    template: str
    required_fields: List[str]

    def format(self, **kwargs) -> str:
        """
        Format template with provided values.

        Raises:
            ValueError: If a required field is missing
        """
        missing = [f for f in self.required_fields if f not in kwargs]
        if missing:
            raise ValueError(f"Missing required fields for {self.name}: {missing}")
        return self.template.format(**kwargs)


EXPLAIN_PRESCRIPTION = PromptTemplate(
    name="explain_prescription",
    template="""You are a medical assistant helping patients understand their prescriptions. Analyze this prescription text and provide a clear, patient-friendly explanation:

Prescription text: {text}

Please provide:
1. What medication(s) are prescribed
2. What condition(s) they typically treat
3. General dosage and frequency guidance
4. Important safety reminders
5. When to contact healthcare providers

Keep the explanation clear, accurate, and emphasize the importance of following medical professional guidance.""",
    required_fields=["text"],
)

ANSWER_QUESTION = PromptTemplate(
    name="answer_question",
    template="""You are a medical assistant helping a patient understand their prescription.

Prescription context: {context}

Patient question: {question}

Please provide a helpful, accurate answer. Always emphasize consulting healthcare providers for medical decisions and personalized advice.""",
    required_fields=["context", "question"],
)


def build_messages(prompt: str) -> ChatMessages:
    """System prompt plus one user turn."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def explanation_messages(text: str) -> ChatMessages:
    return build_messages(EXPLAIN_PRESCRIPTION.format(text=text))


def question_messages(question: str, context: str) -> ChatMessages:
    return build_messages(ANSWER_QUESTION.format(context=context, question=question))

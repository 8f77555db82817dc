# ============================================================================
# src/prescription_assistant/services/llm_service.py
# ============================================================================
"""
LLM Prescription Service

Explanation and question answering on top of any BaseChatClient. Client
errors surface as ExplanationError(PROVIDER_FAILURE); a completion with no
text surfaces as ExplanationError(EMPTY_RESPONSE).
"""

import logging
from typing import Dict, Any

from ..core.capabilities import ExplanationCapability, QuestionAnsweringCapability
from ..llm.base import BaseChatClient, ChatMessages
from ..llm.prompts import explanation_messages, question_messages
from ..utils.exceptions import ExplanationError, ExplanationErrorKind


class LLMPrescriptionService(ExplanationCapability, QuestionAnsweringCapability):

    def __init__(self, client: BaseChatClient):
        self.client = client
        self.logger = logging.getLogger(__name__)

    async def explain(self, text: str) -> str:
        return await self._complete(explanation_messages(text), "explanation")

    async def answer_question(self, question: str, context: str) -> str:
        return await self._complete(question_messages(question, context), "answer")

    async def _complete(self, messages: ChatMessages, purpose: str) -> str:
        try:
            result: Dict[str, Any] = await self.client.chat(messages)
        except Exception as e:
            raise ExplanationError(ExplanationErrorKind.PROVIDER_FAILURE, str(e)) from e

        text = (result.get("text") or "").strip()
        if not text:
            self.logger.warning(f"Empty {purpose} from {self.client.model_name}")
            raise ExplanationError(ExplanationErrorKind.EMPTY_RESPONSE)

        self.logger.debug(
            f"{purpose} from {result.get('model')} "
            f"({result.get('generated_tokens', 0)} tokens, "
            f"{result.get('inference_time', 0.0):.2f}s)"
        )
        return text

    async def close(self):
        await self.client.close()

# ============================================================================
# src/prescription_assistant/core/conversation.py
# ============================================================================
"""
Conversation Session

Chat history bound to one Prescription. Each accepted question is appended
immediately as a user message, then sent to the question-answering
capability together with a text serialization of the prescription. The
answer is appended as an assistant message; a failure sets `error_message`
and leaves the history as it was.

Only one question is in flight at a time: `submit` is rejected while a
previous turn is still awaiting its answer.
"""

import logging
import threading
from typing import Callable, List, Optional, Tuple

from .capabilities import QuestionAnsweringCapability
from .constants import CHAT_ERROR_MESSAGE, WELCOME_MESSAGE
from .models import ChatMessage, Prescription
from .state import Observable


def build_context(prescription: Prescription) -> str:
    """Serialize a prescription into the context string sent with every question."""
    medication_lines = "\n".join(
        f"- {m.name}: {m.dosage}, {m.frequency}" for m in prescription.medications
    )
    return (
        "Prescription Analysis:\n"
        "\n"
        f"Extracted Text: {prescription.extracted_text}\n"
        "\n"
        f"AI Explanation: {prescription.explanation}\n"
        "\n"
        "Medications:\n"
        f"{medication_lines}"
    )


class ConversationSession:
    """
    Ordered chat history for one prescription.

    Observers registered with `subscribe` receive the session itself after
    every change to the history, the awaiting flag or the error signal.
    """

    def __init__(
        self,
        prescription: Prescription,
        answerer: QuestionAnsweringCapability,
    ):
        self.prescription = prescription
        self.answerer = answerer
        self.logger = logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._messages: List[ChatMessage] = []
        self._awaiting_response = False
        self._error_message: Optional[str] = None
        self._resets = 0
        self._observers: Observable["ConversationSession"] = Observable()

        self._seed()

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        with self._lock:
            return tuple(self._messages)

    @property
    def is_awaiting_response(self) -> bool:
        return self._awaiting_response

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def has_messages(self) -> bool:
        """True once anything beyond the welcome message has been exchanged."""
        with self._lock:
            return len(self._messages) > 1

    @property
    def context(self) -> str:
        return build_context(self.prescription)

    def subscribe(
        self, callback: Callable[["ConversationSession"], None]
    ) -> Callable[[], None]:
        return self._observers.subscribe(callback)

    async def submit(self, question: str) -> bool:
        """
        Ask a question about the bound prescription.

        Args:
            question: Free-form user text

        Returns:
            True if the turn was accepted, False if it was ignored (blank
            input) or rejected (another question is still awaiting an answer).
        """
        if not question or not question.strip():
            return False

        with self._lock:
            if self._awaiting_response:
                self.logger.info("Question rejected: previous turn still in flight")
                return False
            self._messages.append(ChatMessage(content=question, is_user=True))
            self._awaiting_response = True
            self._error_message = None
            turn = self._resets
        self._notify()

        answer: Optional[str] = None
        failed = False
        try:
            answer = await self.answerer.answer_question(question, self.context)
        except Exception as e:
            self.logger.error(f"Question answering failed: {e}")
            failed = True
        finally:
            # Runs on cancellation too, so the session never stays stuck awaiting
            self._finish_turn(turn, answer, failed)

        return True

    def _finish_turn(self, turn: int, answer: Optional[str], failed: bool) -> None:
        with self._lock:
            if turn != self._resets:
                self.logger.debug("Discarding answer to a question asked before clear()")
                return
            if failed:
                self._error_message = CHAT_ERROR_MESSAGE
            elif answer is not None:
                self._messages.append(ChatMessage(content=answer, is_user=False))
            self._awaiting_response = False
        self._notify()

    def dismiss_error(self) -> None:
        """Clear the error signal after it has been shown."""
        with self._lock:
            self._error_message = None
        self._notify()

    def clear(self) -> None:
        """
        Empty the history and re-seed the welcome message.

        A question still awaiting its answer is abandoned: its answer or
        error is dropped when it arrives.
        """
        with self._lock:
            self._resets += 1
            self._messages.clear()
            self._error_message = None
            self._awaiting_response = False
        self._seed()

    def _seed(self) -> None:
        with self._lock:
            self._messages.append(ChatMessage(content=WELCOME_MESSAGE, is_user=False))
        self._notify()

    def _notify(self) -> None:
        self._observers.publish(self)

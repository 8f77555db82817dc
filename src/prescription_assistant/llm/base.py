# ============================================================================
# src/prescription_assistant/llm/base.py
# ============================================================================
"""
Base Chat Client Interface

Defines the abstract interface that every chat-completion backend implements.
Supported backends:
- openai: OpenAI (or any OpenAI-compatible) chat completions API
- ollama: Ollama server (local models)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
from enum import Enum
import logging


class BackendType(Enum):
    """Supported chat backends."""
    OPENAI = "openai"
    OLLAMA = "ollama"


# One chat message: {"role": "system" | "user" | "assistant", "content": str}
ChatMessages = List[Dict[str, str]]


class BaseChatClient(ABC):
    """
    Abstract base class for chat-completion clients.

    All backends must implement:
    - chat(): Async chat completion
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

        self.default_max_tokens = self.config.get('max_tokens', 500)
        self.default_temperature = self.config.get('temperature', 0.3)

        # Retry policy (applied per chat call)
        self.max_attempts = self.config.get('max_retry_attempts', 3)
        self.retry_delay = self.config.get('retry_delay', 1.0)

        # Common statistics
        self._request_count = 0
        self._failure_count = 0
        self._total_request_time = 0.0

    @property
    @abstractmethod
    def backend_type(self) -> BackendType:
        """Return the backend type."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model identifier."""
        pass

    @abstractmethod
    async def chat(
        self,
        messages: ChatMessages,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Run one chat completion.

        Args:
            messages: Ordered chat messages
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            {
                "text": str,              # Completion text ("" if none)
                "prompt_tokens": int,
                "generated_tokens": int,
                "model": str,
                "backend": str,
                "inference_time": float   # Seconds
            }
        """
        pass

    async def close(self):
        """Release network resources (no-op by default)."""
        pass

    def _record(self, inference_time: float) -> None:
        self._request_count += 1
        self._total_request_time += inference_time

    def get_statistics(self) -> Dict[str, Any]:
        """Get request statistics."""
        avg_time = (
            self._total_request_time / self._request_count
            if self._request_count > 0
            else 0.0
        )

        return {
            "backend": self.backend_type.value,
            "model": self.model_name,
            "request_count": self._request_count,
            "failure_count": self._failure_count,
            "total_request_time": self._total_request_time,
            "average_request_time": avg_time,
        }

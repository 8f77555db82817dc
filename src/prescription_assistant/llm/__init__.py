"""
Chat-completion clients used for prescription explanation and Q&A.
"""

from .base import BaseChatClient, BackendType
from .openai_client import OpenAIChatClient
from .ollama_client import OllamaChatClient
from .client import create_client
from .prompts import SYSTEM_PROMPT, explanation_messages, question_messages

__all__ = [
    "BaseChatClient",
    "BackendType",
    "OpenAIChatClient",
    "OllamaChatClient",
    "create_client",
    "SYSTEM_PROMPT",
    "explanation_messages",
    "question_messages",
]

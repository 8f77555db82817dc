# ============================================================================
# src/prescription_assistant/llm/client.py
# ============================================================================
"""
Chat Client Factory

Usage:
    from prescription_assistant.llm.client import create_client

    client = create_client({'llm_backend': 'ollama'})
    result = await client.chat([{"role": "user", "content": "Hello"}])
"""

import logging
from typing import Dict, Any, Optional

from .base import BaseChatClient
from .ollama_client import OllamaChatClient
from .openai_client import OpenAIChatClient
from ..config import get_config
from ..utils.exceptions import ConfigurationError

_logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "openai"


def create_client(config: Optional[Dict[str, Any]] = None) -> BaseChatClient:
    """
    Factory function to create a chat client.

    Configuration is loaded from the environment / .env file and merged with
    any passed config. Passed config values take precedence.

    Args:
        config: Configuration dict with at minimum:
            - llm_backend: "openai" | "ollama" (default: "openai")

            OpenAI-specific:
            - openai_api_key, openai_base_url, openai_model

            Ollama-specific:
            - ollama_host, ollama_model

            Common:
            - max_tokens, temperature, request_timeout, resource_timeout,
              max_retry_attempts, retry_delay

    Returns:
        Configured chat client

    Raises:
        ConfigurationError: If the backend is unknown or misconfigured
    """
    config = {**get_config(), **(config or {})}
    backend = (config.get('llm_backend') or DEFAULT_BACKEND).lower()

    if backend == "openai":
        client = OpenAIChatClient(config)
    elif backend == "ollama":
        client = OllamaChatClient(config)
    else:
        raise ConfigurationError(
            f"Unknown LLM backend: {backend}. Supported backends: openai, ollama"
        )

    _logger.debug(f"Created {backend} chat client ({client.model_name})")
    return client

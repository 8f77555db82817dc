"""
Explanation / question-answering services and their factory.
"""

import logging
from typing import Any, Dict, Optional, Union

from .llm_service import LLMPrescriptionService
from .mock_service import MockLLMService
from ..config import get_config
from ..llm.client import create_client

logger = logging.getLogger(__name__)


def create_prescription_service(
    config: Optional[Dict[str, Any]] = None,
) -> Union[LLMPrescriptionService, MockLLMService]:
    """
    Build the explanation / Q&A service for the configured backend.

    The mock service is used when `llm_backend` is "mock", or when the openai
    backend is selected without an API key.
    """
    config = {**get_config(), **(config or {})}
    backend = (config.get("llm_backend") or "openai").lower()

    if backend == "mock":
        return MockLLMService(delay=config.get("mock_delay", 0.0))

    if backend == "openai" and not config.get("openai_api_key"):
        logger.warning("OPENAI_API_KEY not set; falling back to the mock LLM service")
        return MockLLMService(delay=config.get("mock_delay", 0.0))

    return LLMPrescriptionService(create_client(config))


__all__ = [
    "LLMPrescriptionService",
    "MockLLMService",
    "create_prescription_service",
]

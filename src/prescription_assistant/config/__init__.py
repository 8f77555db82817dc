"""
Convenient imports for all settings

Usage:
    from prescription_assistant.config import get_config

    config = get_config()
    print(config["ocr_backend"])
"""

from typing import Any, Dict

from .llm_config import LLMSettings, llm_settings
from .ocr_config import OCRSettings, ocr_settings
from .network_config import NetworkSettings, network_settings
from .logging_config import LoggingSettings, logging_settings


def get_config() -> Dict[str, Any]:
    """
    Flatten all settings into one lowercase-keyed dict.

    Values are re-read from the environment (and .env) on every call so
    factories pick up changes made after import.
    """
    config: Dict[str, Any] = {}
    for settings in (LLMSettings(), OCRSettings(), NetworkSettings()):
        for key, value in settings.model_dump().items():
            config[key.lower()] = value
    return config


__all__ = [
    "get_config",
    "LLMSettings",
    "OCRSettings",
    "NetworkSettings",
    "LoggingSettings",
    "llm_settings",
    "ocr_settings",
    "network_settings",
    "logging_settings",
]

# ============================================================================
# FILE: tests/unit/test_configuration.py
# ============================================================================
"""
Unit tests for configuration
"""

import pytest
from pydantic import ValidationError

from prescription_assistant.config import (
    LLMSettings,
    LoggingSettings,
    NetworkSettings,
    OCRSettings,
    get_config,
)


def test_network_defaults(monkeypatch):
    """Timeout and retry defaults"""
    for key in ("REQUEST_TIMEOUT", "RESOURCE_TIMEOUT", "MAX_RETRY_ATTEMPTS", "RETRY_DELAY"):
        monkeypatch.delenv(key, raising=False)

    settings = NetworkSettings(_env_file=None)

    assert settings.REQUEST_TIMEOUT == 30.0
    assert settings.RESOURCE_TIMEOUT == 60.0
    assert settings.MAX_RETRY_ATTEMPTS == 3
    assert settings.RETRY_DELAY == 1.0


def test_llm_defaults(monkeypatch):
    for key in ("LLM_BACKEND", "OPENAI_MODEL", "MAX_TOKENS", "TEMPERATURE"):
        monkeypatch.delenv(key, raising=False)

    settings = LLMSettings(_env_file=None)

    assert settings.LLM_BACKEND == "openai"
    assert settings.OPENAI_MODEL == "gpt-4"
    assert settings.MAX_TOKENS == 500
    assert settings.TEMPERATURE == 0.3


def test_ocr_defaults(monkeypatch):
    for key in ("OCR_BACKEND", "MAX_IMAGE_DIMENSION", "JPEG_QUALITY"):
        monkeypatch.delenv(key, raising=False)

    settings = OCRSettings(_env_file=None)

    assert settings.OCR_BACKEND == "tesseract"
    assert settings.MAX_IMAGE_DIMENSION == 2048
    assert settings.JPEG_QUALITY == 80


def test_env_override(monkeypatch):
    monkeypatch.setenv("OCR_BACKEND", "remote")
    monkeypatch.setenv("REMOTE_OCR_URL", "http://ocr.local/process-image")
    monkeypatch.setenv("MAX_RETRY_ATTEMPTS", "5")

    config = get_config()

    assert config["ocr_backend"] == "remote"
    assert config["remote_ocr_url"] == "http://ocr.local/process-image"
    assert config["max_retry_attempts"] == 5


def test_invalid_value_rejected(monkeypatch):
    monkeypatch.setenv("MAX_RETRY_ATTEMPTS", "0")

    with pytest.raises(ValidationError):
        NetworkSettings(_env_file=None)


def test_logging_settings(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_JSON", "true")

    settings = LoggingSettings(_env_file=None)

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_JSON is True
    assert "log_level" not in get_config()

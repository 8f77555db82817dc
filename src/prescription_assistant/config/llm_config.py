# ============================================================================
# src/prescription_assistant/config/llm_config.py
# ============================================================================
"""
LLM Settings
- Backend selection (openai / ollama / mock)
- Model and credentials
- Generation defaults
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    LLM_BACKEND: str = Field(
        default="openai",
        description="Explanation / chat backend: openai, ollama or mock"
    )
    OPENAI_API_KEY: Optional[str] = Field(
        default=None,
        description="OpenAI API key; without it the mock service is used"
    )
    OPENAI_BASE_URL: Optional[str] = Field(
        default=None,
        description="Override for OpenAI-compatible endpoints"
    )
    OPENAI_MODEL: str = Field(
        default="gpt-4",
        description="Chat completion model"
    )
    OLLAMA_HOST: str = Field(
        default="http://localhost:11434",
        description="Ollama server URL"
    )
    OLLAMA_MODEL: str = Field(
        default="llama3.1:8b",
        description="Ollama model name"
    )
    MAX_TOKENS: int = Field(
        default=500,
        ge=1,
        description="Maximum tokens per completion"
    )
    TEMPERATURE: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature"
    )


llm_settings = LLMSettings()

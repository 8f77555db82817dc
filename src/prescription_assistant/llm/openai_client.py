# ============================================================================
# src/prescription_assistant/llm/openai_client.py
# ============================================================================
"""
OpenAI Chat Client

Chat completions against the OpenAI API, or any OpenAI-compatible server
when OPENAI_BASE_URL is set.

Transport retries inside the SDK are disabled; transient failures are
retried here with the fixed-delay policy shared by every adapter.
"""

from datetime import datetime
from typing import Dict, Any, Optional

import openai
from openai import AsyncOpenAI

from .base import BaseChatClient, BackendType, ChatMessages
from ..utils.exceptions import ConfigurationError
from ..utils.retry import retry_async


DEFAULT_OPENAI_MODEL = "gpt-4"

# Errors worth another attempt; auth and bad-request errors are not
TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.APITimeoutError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class OpenAIChatClient(BaseChatClient):
    """
    OpenAI chat-completions client.

    Config options:
        openai_api_key: API key (required)
        openai_base_url: Alternate endpoint (optional)
        openai_model: Model name (default: gpt-4)
        max_tokens: Default max tokens (default: 500)
        temperature: Default temperature (default: 0.3)
        request_timeout: Seconds per request (default: 30)
        resource_timeout: Ceiling for one request, connect included (default: 60)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)

        self.api_key = self.config.get('openai_api_key')
        self.base_url = self.config.get('openai_base_url')
        self._model_name = self.config.get('openai_model') or DEFAULT_OPENAI_MODEL

        self.request_timeout = self.config.get('request_timeout', 30.0)
        self.resource_timeout = self.config.get('resource_timeout', 60.0)

        if not self.api_key:
            raise ConfigurationError("OPENAI_API_KEY is required for the openai backend")

        self._client: Optional[AsyncOpenAI] = None

        self.logger.info(f"Initialized OpenAI client: {self.base_url or 'api.openai.com'} / {self._model_name}")

    @property
    def backend_type(self) -> BackendType:
        return BackendType.OPENAI

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy load the SDK client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=openai.Timeout(self.resource_timeout, read=self.request_timeout),
                max_retries=0,
            )
        return self._client

    async def close(self):
        if self._client is not None:
            await self._client.close()
        self._client = None

    async def chat(
        self,
        messages: ChatMessages,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        start_time = datetime.now()

        max_tokens = max_tokens or self.default_max_tokens
        temperature = temperature if temperature is not None else self.default_temperature

        async def _do_request():
            return await self.client.chat.completions.create(
                model=self._model_name,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )

        try:
            response = await retry_async(
                _do_request,
                max_attempts=self.max_attempts,
                delay=self.retry_delay,
                retry_on=TRANSIENT_ERRORS,
                description="OpenAI chat completion",
                log=self.logger,
            )
        except Exception as e:
            self._failure_count += 1
            self.logger.error(f"OpenAI request failed: {e}")
            raise

        inference_time = (datetime.now() - start_time).total_seconds()
        self._record(inference_time)

        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""

        usage = response.usage
        prompt_tokens = usage.prompt_tokens if usage else 0
        generated_tokens = usage.completion_tokens if usage else 0

        self.logger.info(f"Generated {generated_tokens} tokens in {inference_time:.2f}s")

        return {
            "text": text.strip(),
            "prompt_tokens": prompt_tokens,
            "generated_tokens": generated_tokens,
            "model": self._model_name,
            "backend": "openai",
            "inference_time": inference_time,
        }

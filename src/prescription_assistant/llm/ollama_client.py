# ============================================================================
# src/prescription_assistant/llm/ollama_client.py
# ============================================================================
"""
Ollama Chat Client

Uses a local Ollama server for explanation and question answering.

Setup:
    1. Install Ollama: https://ollama.ai
    2. Pull a model: ollama pull llama3.1:8b
    3. Start server: ollama serve (or it runs automatically)
"""

import aiohttp
import asyncio
from typing import Dict, Any, Optional
from datetime import datetime

from .base import BaseChatClient, BackendType, ChatMessages
from ..utils.retry import retry_async


DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama3.1:8b"


class OllamaServerError(aiohttp.ClientResponseError):
    """5xx or 429 from the Ollama server."""


TRANSIENT_ERRORS = (aiohttp.ClientConnectionError, asyncio.TimeoutError, OllamaServerError)


class OllamaChatClient(BaseChatClient):
    """
    Ollama-based chat client.

    Config options:
        ollama_host: Ollama server URL (default: http://localhost:11434)
        ollama_model: Model name (default: llama3.1:8b)
        max_tokens: Default max tokens (default: 500)
        temperature: Default temperature (default: 0.3)
        request_timeout: Max seconds between chunks (default: 30)
        resource_timeout: Max seconds for one request (default: 60)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)

        self.host = (self.config.get('ollama_host') or DEFAULT_OLLAMA_HOST).rstrip('/')
        self._model_name = self.config.get('ollama_model') or DEFAULT_OLLAMA_MODEL

        self.request_timeout = self.config.get('request_timeout', 30.0)
        self.resource_timeout = self.config.get('resource_timeout', 60.0)

        # HTTP session (created lazily, tied to event loop)
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop: Optional[asyncio.AbstractEventLoop] = None

        self.logger.info(f"Initialized Ollama client: {self.host} / {self._model_name}")

    @property
    def backend_type(self) -> BackendType:
        return BackendType.OLLAMA

    @property
    def model_name(self) -> str:
        return self._model_name

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session for current event loop."""
        current_loop = asyncio.get_running_loop()

        needs_new_session = (
            self._session is None
            or self._session.closed
            or self._session_loop is not current_loop
        )

        if needs_new_session:
            if self._session is not None and not self._session.closed:
                await self._session.close()

            timeout = aiohttp.ClientTimeout(
                total=self.resource_timeout,
                sock_read=self.request_timeout,
            )
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._session_loop = current_loop

        return self._session

    async def close(self):
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._session_loop = None

    async def chat(
        self,
        messages: ChatMessages,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        start_time = datetime.now()

        max_tokens = max_tokens or self.default_max_tokens
        temperature = temperature if temperature is not None else self.default_temperature

        payload = {
            "model": self._model_name,
            "messages": messages,
            "stream": False,
            "options": {
                "num_predict": max_tokens,
                "temperature": temperature,
            }
        }

        async def _do_request():
            session = await self._get_session()
            async with session.post(f"{self.host}/api/chat", json=payload) as response:
                if response.status != 200:
                    error_text = await response.text()
                    transient = response.status == 429 or response.status >= 500
                    error_cls = OllamaServerError if transient else aiohttp.ClientResponseError
                    raise error_cls(
                        response.request_info,
                        response.history,
                        status=response.status,
                        message=f"Ollama error: {error_text}",
                    )
                return await response.json()

        try:
            data = await retry_async(
                _do_request,
                max_attempts=self.max_attempts,
                delay=self.retry_delay,
                retry_on=TRANSIENT_ERRORS,
                description="Ollama chat",
                log=self.logger,
            )
        except Exception as e:
            self._failure_count += 1
            self.logger.error(f"Ollama inference failed: {e}")
            raise

        inference_time = (datetime.now() - start_time).total_seconds()
        self._record(inference_time)

        text = (data.get('message') or {}).get('content', '') or ''
        prompt_tokens = data.get('prompt_eval_count', 0)
        generated_tokens = data.get('eval_count', 0)

        self.logger.info(f"Generated {generated_tokens} tokens in {inference_time:.2f}s")

        return {
            "text": text.strip(),
            "prompt_tokens": prompt_tokens,
            "generated_tokens": generated_tokens,
            "model": self._model_name,
            "backend": "ollama",
            "inference_time": inference_time,
        }

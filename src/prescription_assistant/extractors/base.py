# ============================================================================
# src/prescription_assistant/extractors/base.py
# ============================================================================
"""
Shared plumbing for HTTP-backed OCR extractors.

Handles the aiohttp session lifecycle, the timeout policy and bounded
retries. Transport failures are retried; a 4xx response is not. Whatever
is still failing after the last attempt is reported as
ExtractionError(PROVIDER_FAILURE).
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Optional

import aiohttp

from ..core.capabilities import TextExtractionCapability
from ..utils.exceptions import ExtractionError, ExtractionErrorKind
from ..utils.retry import retry_async


class TransientHTTPError(Exception):
    """5xx or 429 from the OCR provider."""

    def __init__(self, status: int, body: str):
        super().__init__(f"HTTP error {status}: {body[:200]}")
        self.status = status


TRANSIENT_ERRORS = (aiohttp.ClientConnectionError, asyncio.TimeoutError, TransientHTTPError)


class HTTPTextExtractor(TextExtractionCapability):
    """
    Base class for extractors that call a remote OCR service.

    Config options:
        request_timeout: Max seconds waiting on the socket (default: 30)
        resource_timeout: Max seconds for one request (default: 60)
        max_retry_attempts: Attempts per extraction (default: 3)
        retry_delay: Seconds between attempts (default: 1.0)
        max_image_dimension: Longest edge uploaded (default: 2048)
        jpeg_quality: JPEG quality of uploads (default: 80)
    """

    provider_name = "ocr"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

        self.request_timeout = self.config.get('request_timeout', 30.0)
        self.resource_timeout = self.config.get('resource_timeout', 60.0)
        self.max_attempts = self.config.get('max_retry_attempts', 3)
        self.retry_delay = self.config.get('retry_delay', 1.0)
        self.max_image_dimension = self.config.get('max_image_dimension', 2048)
        self.jpeg_quality = self.config.get('jpeg_quality', 80)

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop: Optional[asyncio.AbstractEventLoop] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session for current event loop."""
        current_loop = asyncio.get_running_loop()

        if (
            self._session is None
            or self._session.closed
            or self._session_loop is not current_loop
        ):
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

    async def _post(self, url: str, **kwargs) -> Dict[str, Any]:
        """
        POST with retries and return the decoded JSON body.

        `kwargs` are passed to `session.post`; a `data` value that is a
        zero-argument callable is called once per attempt (multipart bodies
        cannot be re-sent).
        """
        start_time = datetime.now()
        data_factory = kwargs.pop('data', None)

        async def _do_request():
            session = await self._get_session()
            request_kwargs = dict(kwargs)
            if data_factory is not None:
                request_kwargs['data'] = data_factory() if callable(data_factory) else data_factory

            async with session.post(url, **request_kwargs) as response:
                if response.status == 429 or response.status >= 500:
                    raise TransientHTTPError(response.status, await response.text())
                if response.status >= 400:
                    body = await response.text()
                    raise ExtractionError(
                        ExtractionErrorKind.PROVIDER_FAILURE,
                        f"{self.provider_name} HTTP error {response.status}: {body[:200]}"
                    )
                return await response.json(content_type=None)

        try:
            payload = await retry_async(
                _do_request,
                max_attempts=self.max_attempts,
                delay=self.retry_delay,
                retry_on=TRANSIENT_ERRORS,
                description=f"{self.provider_name} request",
                log=self.logger,
            )
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                ExtractionErrorKind.PROVIDER_FAILURE,
                f"{self.provider_name} request failed: {e}"
            ) from e

        duration = (datetime.now() - start_time).total_seconds()
        self.logger.info(f"{self.provider_name} responded in {duration:.2f}s")

        if not isinstance(payload, dict):
            raise ExtractionError(
                ExtractionErrorKind.PROVIDER_FAILURE,
                f"Unexpected {self.provider_name} response: {type(payload).__name__}"
            )
        return payload

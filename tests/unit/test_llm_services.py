# ============================================================================
# tests/unit/test_llm_services.py
# ============================================================================
"""
Tests for chat clients, prompt building and the explanation services
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import aiohttp
import pytest

from prescription_assistant.llm.base import BackendType, BaseChatClient
from prescription_assistant.llm.client import create_client
from prescription_assistant.llm.ollama_client import OllamaChatClient
from prescription_assistant.llm.openai_client import OpenAIChatClient
from prescription_assistant.llm.prompts import (
    SYSTEM_PROMPT,
    explanation_messages,
    question_messages,
)
from prescription_assistant.services import (
    LLMPrescriptionService,
    MockLLMService,
    create_prescription_service,
)
from prescription_assistant.services.mock_service import (
    DOSING_ANSWER,
    FOOD_ANSWER,
    GENERIC_ANSWER,
    MOCK_EXPLANATION,
    SIDE_EFFECTS_ANSWER,
    STOPPING_ANSWER,
)
from prescription_assistant.utils.exceptions import (
    ConfigurationError,
    ExplanationError,
    ExplanationErrorKind,
)


class FakeChatClient(BaseChatClient):
    """Chat client returning a fixed text (or raising)"""

    def __init__(self, text="An answer", error=None):
        super().__init__({})
        self.text = text
        self.error = error
        self.requests = []

    @property
    def backend_type(self):
        return BackendType.OLLAMA

    @property
    def model_name(self):
        return "fake-model"

    async def chat(self, messages, max_tokens=None, temperature=None):
        self.requests.append(messages)
        if self.error is not None:
            raise self.error
        return {"text": self.text, "model": "fake-model", "generated_tokens": 3, "inference_time": 0.01}


class TestPrompts:

    def test_explanation_messages(self):
        messages = explanation_messages("Amoxicillin 500mg")

        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert messages[1]["role"] == "user"
        assert "Prescription text: Amoxicillin 500mg" in messages[1]["content"]
        assert "5. When to contact healthcare providers" in messages[1]["content"]

    def test_question_messages(self):
        messages = question_messages("Can I eat cheese?", "CTX")

        content = messages[1]["content"]
        assert "Prescription context: CTX" in content
        assert "Patient question: Can I eat cheese?" in content


class TestLLMPrescriptionService:

    @pytest.mark.asyncio
    async def test_explain(self):
        client = FakeChatClient(text="  Take twice daily.  ")
        service = LLMPrescriptionService(client)

        assert await service.explain("Amoxicillin 500mg") == "Take twice daily."
        assert "Amoxicillin 500mg" in client.requests[0][1]["content"]

    @pytest.mark.asyncio
    async def test_answer_question(self):
        client = FakeChatClient(text="Yes.")
        service = LLMPrescriptionService(client)

        assert await service.answer_question("With food?", "context") == "Yes."

    @pytest.mark.asyncio
    async def test_empty_completion(self):
        service = LLMPrescriptionService(FakeChatClient(text="   "))

        with pytest.raises(ExplanationError) as exc:
            await service.explain("text")

        assert exc.value.kind == ExplanationErrorKind.EMPTY_RESPONSE

    @pytest.mark.asyncio
    async def test_client_error_is_provider_failure(self):
        service = LLMPrescriptionService(FakeChatClient(error=ConnectionError("refused")))

        with pytest.raises(ExplanationError) as exc:
            await service.answer_question("q", "c")

        assert exc.value.kind == ExplanationErrorKind.PROVIDER_FAILURE
        assert isinstance(exc.value.__cause__, ConnectionError)


class TestMockLLMService:

    @pytest.mark.asyncio
    async def test_explanation(self):
        assert await MockLLMService().explain("anything") == MOCK_EXPLANATION

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question,expected", [
        ("What are the SIDE EFFECTS?", SIDE_EFFECTS_ANSWER),
        ("When should I take it?", DOSING_ANSWER),
        ("I missed a dose", DOSING_ANSWER),
        ("Is food a problem?", FOOD_ANSWER),
        ("Can I stop early?", STOPPING_ANSWER),
        ("Who made this?", GENERIC_ANSWER),
    ])
    async def test_keyword_answers(self, question, expected):
        assert await MockLLMService().answer_question(question, "") == expected

    @pytest.mark.asyncio
    async def test_side_effect_wins_over_take(self):
        answer = await MockLLMService().answer_question("side effect if I take it", "")

        assert answer == SIDE_EFFECTS_ANSWER


class TestOpenAIChatClient:

    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError):
            OpenAIChatClient({"openai_api_key": None})

    @pytest.mark.asyncio
    async def test_chat_request_and_result(self):
        client = OpenAIChatClient({"openai_api_key": "sk-test"})
        response = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=" Hello "))],
            usage=SimpleNamespace(prompt_tokens=12, completion_tokens=2),
        )
        create = AsyncMock(return_value=response)
        client._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        result = await client.chat(explanation_messages("rx"))

        assert result["text"] == "Hello"
        assert result["generated_tokens"] == 2
        assert result["backend"] == "openai"
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gpt-4"
        assert kwargs["max_tokens"] == 500
        assert kwargs["temperature"] == 0.3
        assert client.get_statistics()["request_count"] == 1

    @pytest.mark.asyncio
    async def test_missing_content_is_empty_text(self):
        client = OpenAIChatClient({"openai_api_key": "sk-test"})
        response = SimpleNamespace(choices=[], usage=None)
        create = AsyncMock(return_value=response)
        client._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        result = await client.chat([{"role": "user", "content": "hi"}])

        assert result["text"] == ""


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self.body = body
        self.request_info = SimpleNamespace(real_url="http://localhost:11434/api/chat")
        self.history = ()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def text(self):
        return str(self.body)

    async def json(self):
        return self.body


class FakeSession:
    """Hands out queued responses, one per POST"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.posts = []

    def post(self, url, json=None):
        self.posts.append((url, json))
        return self.responses.pop(0)


OLLAMA_REPLY = {"message": {"content": " Take with food. "}, "prompt_eval_count": 20, "eval_count": 4}


class TestOllamaChatClient:

    def _client(self, session):
        client = OllamaChatClient({"retry_delay": 0, "max_retry_attempts": 3})
        client._get_session = AsyncMock(return_value=session)
        return client

    @pytest.mark.asyncio
    async def test_chat_request_and_result(self):
        session = FakeSession(FakeResponse(200, OLLAMA_REPLY))
        client = self._client(session)

        result = await client.chat(explanation_messages("rx"))

        assert result["text"] == "Take with food."
        assert result["generated_tokens"] == 4
        assert result["backend"] == "ollama"
        url, payload = session.posts[0]
        assert url == "http://localhost:11434/api/chat"
        assert payload["stream"] is False
        assert payload["options"] == {"num_predict": 500, "temperature": 0.3}

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self):
        session = FakeSession(FakeResponse(404, "model not found"), FakeResponse(200, OLLAMA_REPLY))
        client = self._client(session)

        with pytest.raises(aiohttp.ClientResponseError) as exc:
            await client.chat([{"role": "user", "content": "hi"}])

        assert exc.value.status == 404
        assert len(session.posts) == 1
        assert client.get_statistics()["failure_count"] == 1

    @pytest.mark.asyncio
    async def test_server_error_retried(self):
        session = FakeSession(FakeResponse(503, "loading model"), FakeResponse(200, OLLAMA_REPLY))
        client = self._client(session)

        result = await client.chat([{"role": "user", "content": "hi"}])

        assert result["text"] == "Take with food."
        assert len(session.posts) == 2

    @pytest.mark.asyncio
    async def test_rate_limit_exhausts_attempts(self):
        session = FakeSession(*(FakeResponse(429, "busy") for _ in range(3)))
        client = self._client(session)

        with pytest.raises(aiohttp.ClientResponseError) as exc:
            await client.chat([{"role": "user", "content": "hi"}])

        assert exc.value.status == 429
        assert len(session.posts) == 3


class TestBaseChatClient:

    def test_only_chat_surface_is_abstract(self):
        assert BaseChatClient.__abstractmethods__ == {"backend_type", "model_name", "chat"}
        assert not hasattr(BaseChatClient, "health_check")


class TestFactories:

    def test_create_openai_client(self):
        client = create_client({"llm_backend": "openai", "openai_api_key": "sk-test", "openai_model": "gpt-4o"})

        assert isinstance(client, OpenAIChatClient)
        assert client.model_name == "gpt-4o"

    def test_create_ollama_client(self):
        client = create_client({"llm_backend": "ollama", "ollama_host": "http://gpu-box:11434/"})

        assert isinstance(client, OllamaChatClient)
        assert client.host == "http://gpu-box:11434"

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError):
            create_client({"llm_backend": "palm"})

    def test_service_mock_backend(self):
        assert isinstance(create_prescription_service({"llm_backend": "mock"}), MockLLMService)

    def test_service_falls_back_without_key(self):
        service = create_prescription_service({"llm_backend": "openai", "openai_api_key": None})

        assert isinstance(service, MockLLMService)

    def test_service_with_ollama(self):
        service = create_prescription_service({"llm_backend": "ollama"})

        assert isinstance(service, LLMPrescriptionService)
        assert isinstance(service.client, OllamaChatClient)

"""Pytest configuration and fixtures."""
import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from openai_chat.client import OpenAIClient
from openai_chat.models import ChatRequest, Message

TEST_API_KEY = "test-key"
TEST_BASE_URL = "https://api.openai.com/v1"


def build_success_body(
    content: str = "Hello! How can I help you today?",
    id: str = "chatcmpl-123",
    model: str = "gpt-4",
    finish_reason: Optional[str] = "stop"
) -> Dict[str, Any]:
    """Chat completion success body."""
    return {
        "id": id,
        "object": "chat.completion",
        "created": 1700000000,
        "model": model,
        "usage": {
            "prompt_tokens": 10,
            "completion_tokens": 20,
            "total_tokens": 30
        },
        "choices": [
            {
                "message": {
                    "role": "assistant",
                    "content": content
                },
                "finish_reason": finish_reason,
                "index": 0
            }
        ]
    }


def build_error_body(
    message: str = "Invalid API key provided",
    type: str = "invalid_request_error",
    code: str = "invalid_api_key"
) -> Dict[str, Any]:
    """API error envelope."""
    return {
        "error": {
            "message": message,
            "type": type,
            "param": None,
            "code": code
        }
    }


class ScriptedTransport:
    """Records requests and answers them with a per-test handler."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is None:
            raise AssertionError("No handler installed for this test")
        return self.handler(request)

    def respond(self, status_code: int, json_body: Any = None, text: Optional[str] = None) -> None:
        """Answer every request with a fixed response."""
        def handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json_body)
        self.handler = handler

    def raise_error(self, exc: Exception) -> None:
        """Make every request fail with exc."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc
        self.handler = handler

    @property
    def last_payload(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def scripted():
    """Scripted responder shared by the transport and the test."""
    return ScriptedTransport()


@pytest.fixture
def client(scripted):
    """Create OpenAIClient backed by the scripted transport."""
    return OpenAIClient(
        api_key=TEST_API_KEY,
        base_url=TEST_BASE_URL,
        transport=httpx.MockTransport(scripted)
    )


@pytest.fixture
def success_body():
    """Factory for chat completion success bodies."""
    return build_success_body


@pytest.fixture
def error_body():
    """Factory for API error envelopes."""
    return build_error_body


@pytest.fixture
def hello_request():
    """Single user message request."""
    return ChatRequest(model="gpt-4", messages=[Message.user("Hello!")])

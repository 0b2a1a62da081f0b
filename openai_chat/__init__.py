"""Typed async client for the chat completions API."""
from openai_chat.client import OpenAIClient, CHAT_COMPLETIONS_ENDPOINT
from openai_chat.errors import (
    OpenAIError,
    InvalidEndpointError,
    APIError,
    DecodingError,
    RequestTimeoutError,
    UnknownError,
    UNKNOWN_ERROR_MESSAGE,
)
from openai_chat.models import ChatRequest, ChatResponse, Choice, Message, Role, Usage
from openai_chat.publisher import ChatCompletionPublisher, Subscription

__all__ = [
    "OpenAIClient",
    "CHAT_COMPLETIONS_ENDPOINT",
    "OpenAIError",
    "InvalidEndpointError",
    "APIError",
    "DecodingError",
    "RequestTimeoutError",
    "UnknownError",
    "UNKNOWN_ERROR_MESSAGE",
    "ChatRequest",
    "ChatResponse",
    "Choice",
    "Message",
    "Role",
    "Usage",
    "ChatCompletionPublisher",
    "Subscription",
]

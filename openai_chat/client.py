"""Chat completions API client."""
import json
import logging
import re
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union
import httpx
from pydantic import BaseModel, ValidationError
from openai_chat.core.config import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT, Settings, get_settings
from openai_chat.errors import (
    APIError,
    DecodingError,
    InvalidEndpointError,
    RequestTimeoutError,
    UnknownError,
    UNKNOWN_ERROR_MESSAGE,
)
from openai_chat.models import ChatRequest, ChatResponse, ErrorResponse, Message, WireModel
from openai_chat.publisher import ChatCompletionPublisher

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

CHAT_COMPLETIONS_ENDPOINT = "chat/completions"

# Characters never allowed in a URL host (RFC 3986)
INVALID_HOST_CHARS = re.compile(r'[\s<>"{}|\\^`%]')


class OpenAIClient:
    """Client for the chat completions endpoint.

    Configuration is fixed at construction, so one instance can serve any
    number of sequential or concurrent calls.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        default_model: str = DEFAULT_MODEL
    ):
        """Initialize the client.

        Args:
            api_key: API key sent as a Bearer token
            timeout: Request timeout in seconds, enforced by the transport
            base_url: API base URL (override for gateways or tests)
            transport: Optional httpx transport; tests pass httpx.MockTransport
            default_model: Model used by send_message when none is given
        """
        self._api_key = api_key
        self._timeout = timeout
        self._base_url = base_url.rstrip('/')
        self._default_model = default_model

        # HTTP client
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "OpenAIClient":
        """Create a client from environment settings.

        Raises:
            ValueError: If no API key is configured
        """
        settings = settings or get_settings()
        if not settings.OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY is not configured")
        return cls(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.OPENAI_TIMEOUT,
            base_url=settings.OPENAI_BASE_URL,
            transport=transport,
            default_model=settings.OPENAI_DEFAULT_MODEL
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def default_model(self) -> str:
        return self._default_model

    def _get_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json"
        }

    def build_request(
        self,
        endpoint: str,
        body: Union[BaseModel, Mapping[str, Any]],
        method: str = "POST"
    ) -> httpx.Request:
        """Build an authenticated JSON request. Performs no I/O.

        Args:
            endpoint: Path relative to the base URL (e.g., "chat/completions")
            body: Request body; models are encoded without unset optional fields
            method: HTTP method

        Returns:
            The request, ready for execute()

        Raises:
            InvalidEndpointError: If base URL and endpoint do not form a valid URL
        """
        raw_url = f"{self._base_url}/{endpoint}"
        try:
            url = httpx.URL(raw_url)
        except httpx.InvalidURL as e:
            raise InvalidEndpointError(raw_url) from e
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidEndpointError(raw_url)
        if INVALID_HOST_CHARS.search(url.host):
            raise InvalidEndpointError(raw_url)
        if url.port is not None and not 0 < url.port < 65536:
            raise InvalidEndpointError(raw_url)

        if isinstance(body, WireModel):
            payload = body.to_payload()
        elif isinstance(body, BaseModel):
            payload = body.model_dump(mode="json", exclude_none=True)
        else:
            payload = dict(body)

        return self._client.build_request(
            method=method,
            url=url,
            content=json.dumps(payload).encode("utf-8"),
            headers=self._get_headers()
        )

    async def execute(self, request: httpx.Request, response_model: Type[T]) -> T:
        """Send a request and decode the response body.

        Args:
            request: Request from build_request()
            response_model: Model the success body is decoded into

        Returns:
            Decoded response_model instance

        Raises:
            RequestTimeoutError: Transport timed out
            UnknownError: Any other transport failure
            APIError: Status outside 200-299
            DecodingError: Success status with a body that does not match response_model
        """
        logger.debug(f"Sending {request.method} {request.url}")
        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError() from e
        except Exception as e:
            raise UnknownError(e) from e

        logger.debug(f"Received {response.status_code} from {request.url}")

        if not 200 <= response.status_code <= 299:
            try:
                message = ErrorResponse.model_validate_json(response.content).error.message
            except ValidationError:
                logger.debug(f"Could not decode error body: {response.text[:200]}")
                message = UNKNOWN_ERROR_MESSAGE
            raise APIError(response.status_code, message)

        try:
            return response_model.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodingError(response.text) from e

    async def create_chat_completion(self, request: ChatRequest) -> ChatResponse:
        """Create a chat completion.

        Args:
            request: Chat completion request

        Returns:
            ChatResponse from the API

        Raises:
            OpenAIError: Any of the client error kinds
        """
        http_request = self.build_request(CHAT_COMPLETIONS_ENDPOINT, request)
        logger.debug(f"Chat completion request: model={request.model}, messages={len(request.messages)}")
        return await self.execute(http_request, ChatResponse)

    def create_chat_completion_publisher(self, request: ChatRequest) -> ChatCompletionPublisher:
        """Single-value publisher over create_chat_completion.

        Nothing is sent until the publisher is subscribed to.
        """
        return ChatCompletionPublisher(lambda: self.create_chat_completion(request))

    async def send_message(
        self,
        content: str,
        model: Optional[str] = None,
        system_prompt: Optional[str] = None
    ) -> str:
        """Send a single user message and return the reply text.

        Returns an empty string when the response has no choices. Use
        create_chat_completion for a strict contract.

        Args:
            content: User message
            model: Model name; defaults to the client's default_model
            system_prompt: Optional system message placed before the user message

        Returns:
            Content of the first choice, or ""
        """
        messages: List[Message] = []
        if system_prompt is not None:
            messages.append(Message.system(system_prompt))
        messages.append(Message.user(content))

        request = ChatRequest(model=model or self._default_model, messages=messages)
        response = await self.create_chat_completion(request)
        reply = response.first_content
        return reply if reply is not None else ""

    async def aclose(self):
        """Close HTTP client."""
        await self._client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

"""Chat completion request/response models."""
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Message author role."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class WireModel(BaseModel):
    """Base for immutable wire records.

    Attribute names are the snake_case wire names. The camelCase spellings
    are accepted as input aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready dict, omitting unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class Message(WireModel):
    """Chat message model."""
    role: str  # "system", "user", "assistant"
    content: str
    name: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, v: Any) -> Any:
        """Transmit Role members as their string value."""
        if isinstance(v, Role):
            return v.value
        return v

    @classmethod
    def system(cls, content: str, name: Optional[str] = None) -> "Message":
        return cls(role=Role.SYSTEM, content=content, name=name)

    @classmethod
    def user(cls, content: str, name: Optional[str] = None) -> "Message":
        return cls(role=Role.USER, content=content, name=name)

    @classmethod
    def assistant(cls, content: str, name: Optional[str] = None) -> "Message":
        return cls(role=Role.ASSISTANT, content=content, name=name)


class ChatRequest(WireModel):
    """Chat completion request model.

    Numeric ranges are not checked here; the server rejects out-of-range
    values.
    """
    model: str
    messages: List[Message]
    temperature: Optional[float] = None
    top_p: Optional[float] = Field(None, validation_alias=AliasChoices("top_p", "topP"))
    n: Optional[int] = None
    stream: Optional[bool] = None
    stop: Optional[List[str]] = None
    max_tokens: Optional[int] = Field(None, validation_alias=AliasChoices("max_tokens", "maxTokens"))
    presence_penalty: Optional[float] = Field(
        None, validation_alias=AliasChoices("presence_penalty", "presencePenalty")
    )
    frequency_penalty: Optional[float] = Field(
        None, validation_alias=AliasChoices("frequency_penalty", "frequencyPenalty")
    )
    user: Optional[str] = None


class Choice(WireModel):
    """A single completion choice."""
    index: int
    message: Message
    finish_reason: Optional[str] = Field(
        None, validation_alias=AliasChoices("finish_reason", "finishReason")
    )


class Usage(WireModel):
    """Token usage counts."""
    prompt_tokens: int = Field(validation_alias=AliasChoices("prompt_tokens", "promptTokens"))
    completion_tokens: int = Field(
        validation_alias=AliasChoices("completion_tokens", "completionTokens")
    )
    total_tokens: int = Field(validation_alias=AliasChoices("total_tokens", "totalTokens"))


class ChatResponse(WireModel):
    """Chat completion response model."""
    id: str
    object: str
    created: int  # Unix seconds
    model: str
    choices: List[Choice]
    usage: Usage

    @property
    def first_content(self) -> Optional[str]:
        """Content of the first choice, or None when there are no choices."""
        if not self.choices:
            return None
        return self.choices[0].message.content


class ErrorDetail(WireModel):
    """Error details inside the API error envelope."""
    message: str
    type: Optional[str] = None
    param: Optional[str] = None
    code: Optional[str] = None


class ErrorResponse(WireModel):
    """API error envelope: {"error": {...}}."""
    error: ErrorDetail

"""Chat request, session and function-calling types."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

PROMPT_MSG = "prompt"
REPLY_MSG = "reply"

DEFAULT_MAX_TOKENS = 4096

MODEL_TO_TOKENS: dict[str, int] = {
    "gpt-3.5-turbo": 4096,
    "gpt-3.5-turbo-16k": 16384,
    "gpt-4": 8192,
    "gpt-4-32k": 32768,
    "chatglm_pro": 32768,
    "chatglm_std": 16384,
    "chatglm_lite": 4096,
    "ernie_bot_turbo": 8192,
    "general": 8192,
    "general2": 8192,
    "general3": 8192,
}


def get_model_max_token(model: str) -> int:
    """Return the context size of a model, 4096 when the model is unknown."""
    return MODEL_TO_TOKENS.get(model, DEFAULT_MAX_TOKENS)


def _plain(value: Any) -> Any:
    """Turn dataclasses and enums into JSON-ready values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {k: _plain(v) for k, v in dataclasses.asdict(value).items()}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass
class Message:
    role: str = ""
    content: str = ""


@dataclass
class ToolCall:
    type: str = ""
    name: str = ""
    arguments: str = ""


@dataclass
class Function:
    name: str = ""
    description: str = ""
    parameters: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "required": [], "properties": {}}
    )


@dataclass
class ApiRequest:
    """Body of a chat completion request sent to a model platform."""

    model: str = ""
    temperature: float = 0.0
    max_tokens: int = 0
    stream: bool = False
    messages: list[Any] = field(default_factory=list)
    prompt: list[Any] = field(default_factory=list)
    tools: list[Any] = field(default_factory=list)
    tool_choice: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialise the request, leaving out empty optional fields."""
        body: dict[str, Any] = {}
        if self.model:
            body["model"] = self.model
        body["temperature"] = self.temperature
        if self.max_tokens:
            body["max_tokens"] = self.max_tokens
        body["stream"] = self.stream
        if self.messages:
            body["messages"] = _plain(self.messages)
        if self.prompt:
            body["prompt"] = _plain(self.prompt)
        if self.tools:
            body["tools"] = _plain(self.tools)
        if self.tool_choice:
            body["tool_choice"] = self.tool_choice
        return body


@dataclass
class ChatModel:
    id: int = 0
    platform: str = ""
    value: str = ""
    weight: int = 0


@dataclass
class ChatSession:
    """A websocket chat session bound to a logged-in user."""

    session_id: str = ""
    client_ip: str = ""
    username: str = ""
    user_id: int = 0
    chat_id: str = ""
    model: ChatModel = field(default_factory=ChatModel)
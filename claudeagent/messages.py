"""Messages and content blocks exchanged with the CLI."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from .errors import MessageParseError

MESSAGE_TYPE_USER = "user"
MESSAGE_TYPE_ASSISTANT = "assistant"
MESSAGE_TYPE_SYSTEM = "system"
MESSAGE_TYPE_RESULT = "result"

CONTENT_BLOCK_TYPE_TEXT = "text"
CONTENT_BLOCK_TYPE_THINKING = "thinking"
CONTENT_BLOCK_TYPE_TOOL_USE = "tool_use"
CONTENT_BLOCK_TYPE_TOOL_RESULT = "tool_result"

_MISSING = object()


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise MessageParseError(
            f"{what} must be a JSON object, got {type(data).__name__}", data
        )
    return data


def _get(raw: Mapping[str, Any], key: str, kind: type | tuple[type, ...], default: Any) -> Any:
    """Fetch a field, accepting absence or null as the default."""
    value = raw.get(key, _MISSING)
    if value is _MISSING or value is None:
        return default
    wrong_bool = isinstance(value, bool) and bool not in (
        kind if isinstance(kind, tuple) else (kind,)
    )
    if not isinstance(value, kind) or wrong_bool:
        raise MessageParseError(
            f"field {key!r} has unexpected type {type(value).__name__}", dict(raw)
        )
    return value


@dataclass
class TextBlock:
    """Plain text content."""

    text: str
    type: ClassVar[str] = CONTENT_BLOCK_TYPE_TEXT

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TextBlock:
        raw = _mapping(data, "text block")
        return cls(text=_get(raw, "text", str, ""))


@dataclass
class ThinkingBlock:
    """Thinking content with its signature."""

    thinking: str
    signature: str = ""
    type: ClassVar[str] = CONTENT_BLOCK_TYPE_THINKING

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "thinking": self.thinking, "signature": self.signature}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThinkingBlock:
        raw = _mapping(data, "thinking block")
        return cls(
            thinking=_get(raw, "thinking", str, ""),
            signature=_get(raw, "signature", str, ""),
        )


@dataclass
class ToolUseBlock:
    """A request to run a tool."""

    id: str
    name: str
    input: dict[str, Any] = field(default_factory=dict)
    type: ClassVar[str] = CONTENT_BLOCK_TYPE_TOOL_USE

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "id": self.id, "name": self.name, "input": self.input}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ToolUseBlock:
        raw = _mapping(data, "tool use block")
        return cls(
            id=_get(raw, "id", str, ""),
            name=_get(raw, "name", str, ""),
            input=dict(_get(raw, "input", Mapping, {})),
        )


@dataclass
class ToolResultBlock:
    """The outcome of a tool run."""

    tool_use_id: str
    content: Any = None
    is_error: bool | None = None
    type: ClassVar[str] = CONTENT_BLOCK_TYPE_TOOL_RESULT

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": self.type,
            "tool_use_id": self.tool_use_id,
            "content": self.content,
        }
        if self.is_error is not None:
            out["is_error"] = self.is_error
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ToolResultBlock:
        raw = _mapping(data, "tool result block")
        return cls(
            tool_use_id=_get(raw, "tool_use_id", str, ""),
            content=raw.get("content"),
            is_error=_get(raw, "is_error", bool, None),
        )


ContentBlock = Union[TextBlock, ThinkingBlock, ToolUseBlock, ToolResultBlock]

_BLOCK_TYPES: dict[str, type] = {
    CONTENT_BLOCK_TYPE_TEXT: TextBlock,
    CONTENT_BLOCK_TYPE_THINKING: ThinkingBlock,
    CONTENT_BLOCK_TYPE_TOOL_USE: ToolUseBlock,
    CONTENT_BLOCK_TYPE_TOOL_RESULT: ToolResultBlock,
}


def parse_content_block(data: Mapping[str, Any]) -> ContentBlock | None:
    """Decode a content block; blocks of an unknown type yield None."""
    raw = _mapping(data, "content block")
    block_cls = _BLOCK_TYPES.get(raw.get("type"))  # type: ignore[arg-type]
    if block_cls is None:
        return None
    return block_cls.from_dict(raw)


def _parse_blocks(items: list[Any]) -> list[ContentBlock]:
    blocks = (parse_content_block(item) for item in items)
    return [block for block in blocks if block is not None]


@dataclass
class UserMessage:
    """A message from the user; content is text or a list of blocks."""

    content: str | list[ContentBlock]
    parent_tool_use_id: str | None = None
    type: ClassVar[str] = MESSAGE_TYPE_USER

    def to_dict(self) -> dict[str, Any]:
        content: Any = self.content
        if isinstance(content, list):
            content = [block.to_dict() for block in content]
        out: dict[str, Any] = {"type": self.type, "content": content}
        if self.parent_tool_use_id is not None:
            out["parent_tool_use_id"] = self.parent_tool_use_id
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UserMessage:
        raw = _mapping(data, "user message")
        parent = _get(raw, "parent_tool_use_id", str, None)
        content = raw.get("content")
        if isinstance(content, str):
            return cls(content=content, parent_tool_use_id=parent)
        if isinstance(content, list):
            return cls(content=_parse_blocks(content), parent_tool_use_id=parent)
        raise MessageParseError("user message content must be a string or a list", dict(raw))


@dataclass
class AssistantMessage:
    """A message from the assistant."""

    content: list[ContentBlock]
    model: str = ""
    parent_tool_use_id: str | None = None
    type: ClassVar[str] = MESSAGE_TYPE_ASSISTANT

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": self.type,
            "content": [block.to_dict() for block in self.content],
            "model": self.model,
        }
        if self.parent_tool_use_id is not None:
            out["parent_tool_use_id"] = self.parent_tool_use_id
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssistantMessage:
        raw = _mapping(data, "assistant message")
        return cls(
            content=_parse_blocks(_get(raw, "content", list, [])),
            model=_get(raw, "model", str, ""),
            parent_tool_use_id=_get(raw, "parent_tool_use_id", str, None),
        )


@dataclass
class SystemMessage:
    """A system message that keeps every field it arrived with."""

    subtype: str
    data: dict[str, Any] = field(default_factory=dict)
    type: ClassVar[str] = MESSAGE_TYPE_SYSTEM

    def to_dict(self) -> dict[str, Any]:
        return {**self.data, "type": self.type, "subtype": self.subtype}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SystemMessage:
        raw = _mapping(data, "system message")
        subtype = raw.get("subtype")
        return cls(subtype=subtype if isinstance(subtype, str) else "", data=dict(raw))


@dataclass
class ResultMessage:
    """The final result of a conversation turn."""

    subtype: str
    session_id: str
    duration_ms: int = 0
    duration_api_ms: int = 0
    is_error: bool = False
    num_turns: int = 0
    total_cost_usd: float | None = None
    usage: dict[str, Any] | None = None
    result: str | None = None
    type: ClassVar[str] = MESSAGE_TYPE_RESULT

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": self.type,
            "subtype": self.subtype,
            "duration_ms": self.duration_ms,
            "duration_api_ms": self.duration_api_ms,
            "is_error": self.is_error,
            "num_turns": self.num_turns,
            "session_id": self.session_id,
        }
        optional = {
            "total_cost_usd": self.total_cost_usd,
            "usage": self.usage,
            "result": self.result,
        }
        out.update({k: v for k, v in optional.items() if v is not None})
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResultMessage:
        raw = _mapping(data, "result message")
        cost = _get(raw, "total_cost_usd", (int, float), None)
        usage = _get(raw, "usage", Mapping, None)
        return cls(
            subtype=_get(raw, "subtype", str, ""),
            session_id=_get(raw, "session_id", str, ""),
            duration_ms=_get(raw, "duration_ms", int, 0),
            duration_api_ms=_get(raw, "duration_api_ms", int, 0),
            is_error=_get(raw, "is_error", bool, False),
            num_turns=_get(raw, "num_turns", int, 0),
            total_cost_usd=float(cost) if cost is not None else None,
            usage=dict(usage) if usage is not None else None,
            result=_get(raw, "result", str, None),
        )


Message = Union[UserMessage, AssistantMessage, SystemMessage, ResultMessage]


def to_json(message: Message | ContentBlock) -> str:
    """Serialize a message or content block to compact JSON."""
    return json.dumps(message.to_dict(), separators=(",", ":"))


@dataclass
class StreamMessage:
    """A message written to the CLI in streaming mode."""

    type: str
    message: Any = None
    parent_tool_use_id: str | None = None
    session_id: str = ""
    request_id: str = ""
    request: dict[str, Any] | None = None
    response: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.message is not None:
            out["message"] = self.message
        if self.parent_tool_use_id is not None:
            out["parent_tool_use_id"] = self.parent_tool_use_id
        if self.session_id:
            out["session_id"] = self.session_id
        if self.request_id:
            out["request_id"] = self.request_id
        if self.request:
            out["request"] = self.request
        if self.response:
            out["response"] = self.response
        return out


class MessageIterator(ABC):
    """A source of streamed messages.

    ``next`` returns the next message and raises StopIteration when the
    stream is exhausted.
    """

    @abstractmethod
    def next(self) -> Message:
        """Return the next message."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying resources."""

    def __iter__(self) -> Iterator[Message]:
        while True:
            try:
                yield self.next()
            except StopIteration:
                return

    def __enter__(self) -> MessageIterator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
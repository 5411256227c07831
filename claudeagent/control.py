"""Control protocol messages exchanged between the SDK and the CLI."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

CONTROL_TYPE_REQUEST = "control_request"
CONTROL_TYPE_RESPONSE = "control_response"
CONTROL_TYPE_CANCEL_REQUEST = "control_cancel_request"

CONTROL_SUBTYPE_INITIALIZE = "initialize"
CONTROL_SUBTYPE_CAN_USE_TOOL = "can_use_tool"
CONTROL_SUBTYPE_HOOK_CALLBACK = "hook_callback"
CONTROL_SUBTYPE_MCP_MESSAGE = "mcp_message"

CONTROL_SUBTYPE_SUCCESS = "success"
CONTROL_SUBTYPE_ERROR = "error"

HookCallbackResponse = dict


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


@dataclass
class RequestPayload:
    """A request subtype with its extra fields held inline."""

    subtype: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"subtype": self.subtype, **self.data}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RequestPayload:
        raw = _require_mapping(data)
        subtype = raw.get("subtype")
        return cls(
            subtype=subtype if isinstance(subtype, str) else "",
            data={k: v for k, v in raw.items() if k != "subtype"},
        )


@dataclass
class ResponsePayload:
    """The body of a control response."""

    subtype: str
    request_id: str
    response: dict[str, Any] | None = None
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"subtype": self.subtype, "request_id": self.request_id}
        if self.response:
            out["response"] = self.response
        if self.error:
            out["error"] = self.error
        return out


@dataclass
class ControlRequest:
    """A control request travelling in either direction."""

    request_id: str
    request: RequestPayload
    type: str = CONTROL_TYPE_REQUEST

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "request_id": self.request_id,
            "request": self.request.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ControlRequest:
        raw = _require_mapping(data)
        return cls(
            request_id=raw.get("request_id", ""),
            request=RequestPayload.from_dict(raw.get("request") or {}),
            type=raw.get("type", CONTROL_TYPE_REQUEST),
        )


@dataclass
class ControlResponse:
    """A control response wrapping its payload."""

    response: ResponsePayload
    type: str = CONTROL_TYPE_RESPONSE

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "response": self.response.to_dict()}


@dataclass
class HookMatcherConfig:
    """Hook registration sent to the CLI."""

    matcher: str
    hook_callback_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"matcher": self.matcher, "hookCallbackIds": list(self.hook_callback_ids)}


@dataclass
class InitializeRequest:
    """Initialization request carrying hook registrations."""

    hooks: dict[str, list[HookMatcherConfig]] | None = None
    subtype: str = CONTROL_SUBTYPE_INITIALIZE

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"subtype": self.subtype}
        if self.hooks:
            out["hooks"] = {
                event: [m.to_dict() for m in matchers]
                for event, matchers in self.hooks.items()
            }
        return out


@dataclass
class CanUseToolRequest:
    """A tool permission request sent by the CLI."""

    tool_name: str
    input: dict[str, Any] = field(default_factory=dict)
    permission_suggestions: list[Any] = field(default_factory=list)
    subtype: str = CONTROL_SUBTYPE_CAN_USE_TOOL

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CanUseToolRequest:
        raw = _require_mapping(data)
        return cls(
            tool_name=raw.get("tool_name", ""),
            input=dict(raw.get("input") or {}),
            permission_suggestions=list(raw.get("permission_suggestions") or []),
            subtype=raw.get("subtype", CONTROL_SUBTYPE_CAN_USE_TOOL),
        )


@dataclass
class HookCallbackRequest:
    """A hook callback request sent by the CLI."""

    callback_id: str
    input: dict[str, Any] = field(default_factory=dict)
    tool_use_id: str | None = None
    subtype: str = CONTROL_SUBTYPE_HOOK_CALLBACK

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HookCallbackRequest:
        raw = _require_mapping(data)
        return cls(
            callback_id=raw.get("callback_id", ""),
            input=dict(raw.get("input") or {}),
            tool_use_id=raw.get("tool_use_id"),
            subtype=raw.get("subtype", CONTROL_SUBTYPE_HOOK_CALLBACK),
        )


@dataclass
class PermissionResponse:
    """Answer to a can_use_tool request."""

    behavior: str
    updated_input: Any = None
    updated_permissions: list[Any] | None = None
    message: str = ""
    interrupt: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"behavior": self.behavior}
        if self.updated_input is not None:
            out["updatedInput"] = self.updated_input
        if self.updated_permissions:
            out["updatedPermissions"] = list(self.updated_permissions)
        if self.message:
            out["message"] = self.message
        if self.interrupt:
            out["interrupt"] = True
        return out
"""Hook events, hook matchers and helpers that build hook outputs."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

HookInput = dict
HookJSONOutput = dict
HookSpecificOutput = dict


class HookEvent(str, Enum):
    """Events that hooks can intercept."""

    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    USER_PROMPT_SUBMIT = "UserPromptSubmit"
    STOP = "Stop"
    SUBAGENT_STOP = "SubagentStop"
    PRE_COMPACT = "PreCompact"

    def __str__(self) -> str:
        return self.value


class PermissionDecision(str, Enum):
    """Decisions a PreToolUse hook can return."""

    ALLOW = "allow"
    DENY = "deny"
    ASK = "ask"

    def __str__(self) -> str:
        return self.value


@dataclass
class HookContext:
    """Context handed to hook callbacks; ``signal`` is reserved for aborts."""

    signal: Any = None


HookCallback = Callable[[Mapping[str, Any], Optional[str], HookContext], dict]


@dataclass
class HookMatcher:
    """A pattern and the callbacks to run when it matches."""

    matcher: str = ""
    hooks: list[HookCallback] = field(default_factory=list)


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass
class SyncHookJSONOutput:
    """Synchronous hook output with control and decision fields."""

    continue_: bool | None = None
    suppress_output: bool | None = None
    stop_reason: str = ""
    decision: str = ""
    system_message: str = ""
    reason: str = ""
    hook_specific_output: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.continue_ is not None:
            out["continue"] = self.continue_
        if self.suppress_output is not None:
            out["suppressOutput"] = self.suppress_output
        if self.stop_reason:
            out["stopReason"] = self.stop_reason
        if self.decision:
            out["decision"] = self.decision
        if self.system_message:
            out["systemMessage"] = self.system_message
        if self.reason:
            out["reason"] = self.reason
        if self.hook_specific_output:
            out["hookSpecificOutput"] = dict(self.hook_specific_output)
        return out


@dataclass
class AsyncHookJSONOutput:
    """Hook output that defers execution."""

    is_async: bool = True
    async_timeout: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"async": self.is_async}
        if self.async_timeout is not None:
            out["asyncTimeout"] = self.async_timeout
        return out


def new_pre_tool_use_output(
    decision: PermissionDecision | str,
    reason: str = "",
    updated_input: Mapping[str, Any] | None = None,
) -> HookJSONOutput:
    """Build a PreToolUse output carrying a permission decision."""
    hook_specific: dict[str, Any] = {
        "hookEventName": HookEvent.PRE_TOOL_USE.value,
        "permissionDecision": _plain(decision),
    }
    output: dict[str, Any] = {}
    if reason:
        output["reason"] = reason
        hook_specific["permissionDecisionReason"] = reason
    if updated_input is not None:
        hook_specific["updatedInput"] = dict(updated_input)
    output["hookSpecificOutput"] = hook_specific
    return output


def new_post_tool_use_output(additional_context: str = "") -> HookJSONOutput:
    """Build a PostToolUse output with optional additional context."""
    if not additional_context:
        return {}
    return {
        "hookSpecificOutput": {
            "hookEventName": HookEvent.POST_TOOL_USE.value,
            "additionalContext": additional_context,
        }
    }


def new_blocking_output(system_message: str = "", reason: str = "") -> HookJSONOutput:
    """Build an output that blocks execution."""
    output: dict[str, Any] = {"decision": "block"}
    if system_message:
        output["systemMessage"] = system_message
    if reason:
        output["reason"] = reason
    return output


def new_stop_output(stop_reason: str = "") -> HookJSONOutput:
    """Build an output that stops execution."""
    output: dict[str, Any] = {"continue": False}
    if stop_reason:
        output["stopReason"] = stop_reason
    return output


def new_async_output(timeout: int | None = None) -> HookJSONOutput:
    """Build an output that defers execution, with an optional timeout."""
    return AsyncHookJSONOutput(async_timeout=timeout).to_dict()
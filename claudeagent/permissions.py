"""Tool permission rules, updates and callback results."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class PermissionUpdateType(str, Enum):
    """Kinds of permission update."""

    ADD_RULES = "addRules"
    REPLACE_RULES = "replaceRules"
    REMOVE_RULES = "removeRules"
    SET_MODE = "setMode"
    ADD_DIRECTORIES = "addDirectories"
    REMOVE_DIRECTORIES = "removeDirectories"

    def __str__(self) -> str:
        return self.value


class PermissionDestination(str, Enum):
    """Where a permission update applies."""

    SESSION = "session"
    SETTINGS = "settings"

    def __str__(self) -> str:
        return self.value


@dataclass
class PermissionRule:
    """A rule for one tool."""

    tool_name: str
    rule_content: str

    def to_dict(self) -> dict[str, Any]:
        return {"toolName": self.tool_name, "ruleContent": self.rule_content}


@dataclass
class PermissionUpdate:
    """A permission update; the ``with_*`` methods set a field and return self."""

    type: PermissionUpdateType
    destination: PermissionDestination | None = None
    rules: list[PermissionRule] = field(default_factory=list)
    behavior: str | None = None
    mode: str | None = None
    directories: list[str] = field(default_factory=list)

    def with_destination(self, dest: PermissionDestination) -> PermissionUpdate:
        self.destination = PermissionDestination(dest)
        return self

    def with_rules(self, rules: list[PermissionRule]) -> PermissionUpdate:
        self.rules = list(rules)
        return self

    def with_behavior(self, behavior: str) -> PermissionUpdate:
        self.behavior = behavior
        return self

    def with_mode(self, mode: str) -> PermissionUpdate:
        self.mode = mode
        return self

    def with_directories(self, dirs: list[str]) -> PermissionUpdate:
        self.directories = list(dirs)
        return self

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": PermissionUpdateType(self.type).value}
        if self.destination is not None:
            out["destination"] = PermissionDestination(self.destination).value
        if self.rules:
            out["rules"] = [rule.to_dict() for rule in self.rules]
        if self.behavior is not None:
            out["behavior"] = self.behavior
        if self.mode is not None:
            out["mode"] = self.mode
        if self.directories:
            out["directories"] = list(self.directories)
        return out


@dataclass
class ToolPermissionContext:
    """Context for tool permission callbacks; ``signal`` is reserved for aborts."""

    signal: Any = None
    suggestions: list[PermissionUpdate] = field(default_factory=list)


@dataclass
class PermissionResultAllow:
    """Allow the tool call, optionally with new input or permissions."""

    updated_input: Any = None
    updated_permissions: list[PermissionUpdate] = field(default_factory=list)
    behavior: str = field(default="allow", init=False)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"behavior": self.behavior}
        if self.updated_input is not None:
            out["updatedInput"] = self.updated_input
        if self.updated_permissions:
            out["updatedPermissions"] = [u.to_dict() for u in self.updated_permissions]
        return out


@dataclass
class PermissionResultDeny:
    """Deny the tool call, optionally interrupting the conversation."""

    message: str = ""
    interrupt: bool = False
    behavior: str = field(default="deny", init=False)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"behavior": self.behavior}
        if self.message:
            out["message"] = self.message
        if self.interrupt:
            out["interrupt"] = True
        return out


PermissionResult = Union[PermissionResultAllow, PermissionResultDeny]

CanUseToolCallback = Callable[
    [str, Mapping[str, Any], ToolPermissionContext], PermissionResult
]


def new_permission_allow(
    updated_input: Any = None, updated_permissions: list[PermissionUpdate] | None = None
) -> PermissionResultAllow:
    """Create an allow result."""
    return PermissionResultAllow(
        updated_input=updated_input,
        updated_permissions=list(updated_permissions or []),
    )


def new_permission_deny(message: str = "", interrupt: bool = False) -> PermissionResultDeny:
    """Create a deny result."""
    return PermissionResultDeny(message=message, interrupt=interrupt)


def new_permission_rule(tool_name: str, rule_content: str) -> PermissionRule:
    """Create a permission rule."""
    return PermissionRule(tool_name=tool_name, rule_content=rule_content)


def new_permission_update(update_type: PermissionUpdateType | str) -> PermissionUpdate:
    """Create a permission update of the given type."""
    return PermissionUpdate(type=PermissionUpdateType(update_type))
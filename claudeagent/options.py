"""Configuration for CLI interactions, built with option functions."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

from .hooks import HookEvent, HookMatcher

DEFAULT_MAX_THINKING_TOKENS = 8000

_TRANSPORT_MARKER_KEY = "__transport_marker__"
_CUSTOM_TRANSPORT_MARKER = "custom_transport"


class PermissionMode(str, Enum):
    """How the CLI handles permission prompts."""

    DEFAULT = "default"
    ACCEPT_EDITS = "acceptEdits"
    PLAN = "plan"
    BYPASS_PERMISSIONS = "bypassPermissions"

    def __str__(self) -> str:
        return self.value


class McpServerType(str, Enum):
    """Transport used by an MCP server."""

    STDIO = "stdio"
    SSE = "sse"
    HTTP = "http"

    def __str__(self) -> str:
        return self.value


@dataclass
class McpStdioServerConfig:
    """An MCP server started as a subprocess speaking over stdio."""

    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    type: ClassVar[McpServerType] = McpServerType.STDIO


@dataclass
class McpSSEServerConfig:
    """An MCP server reached over Server-Sent Events."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    type: ClassVar[McpServerType] = McpServerType.SSE


@dataclass
class McpHTTPServerConfig:
    """An MCP server reached over HTTP."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    type: ClassVar[McpServerType] = McpServerType.HTTP


McpServerConfig = Union[McpStdioServerConfig, McpSSEServerConfig, McpHTTPServerConfig]


@dataclass
class AgentDefinition:
    """A named agent made available to the CLI."""

    description: str
    prompt: str
    tools: list[str] = field(default_factory=list)
    model: str | None = None


@dataclass
class Options:
    """Settings that control how the CLI is run."""

    allowed_tools: list[str] = field(default_factory=list)
    disallowed_tools: list[str] = field(default_factory=list)

    system_prompt: str | None = None
    append_system_prompt: str | None = None
    model: str | None = None
    max_thinking_tokens: int = DEFAULT_MAX_THINKING_TOKENS

    permission_mode: PermissionMode | None = None
    permission_prompt_tool_name: str | None = None

    continue_conversation: bool = False
    resume: str | None = None
    max_turns: int = 0
    settings: str | None = None
    include_partial_messages: bool = False
    fork_session: bool = False

    cwd: str | None = None
    add_dirs: list[str] = field(default_factory=list)
    user: str | None = None
    setting_sources: list[str] | None = None

    mcp_servers: dict[str, McpServerConfig] = field(default_factory=dict)
    max_buffer_size: int | None = None

    hooks: dict[str, list[HookMatcher]] = field(default_factory=dict)

    extra_args: dict[str, str | None] = field(default_factory=dict)
    extra_env: dict[str, str] = field(default_factory=dict)

    cli_path: str | None = None

    agents: dict[str, AgentDefinition] | None = field(default_factory=dict)

    def validate(self) -> None:
        """Raise ValueError if the options are inconsistent."""
        if self.max_thinking_tokens < 0:
            raise ValueError(
                f"MaxThinkingTokens must be non-negative, got {self.max_thinking_tokens}"
            )
        if self.max_turns < 0:
            raise ValueError(f"MaxTurns must be non-negative, got {self.max_turns}")
        allowed = set(self.allowed_tools)
        for tool in self.disallowed_tools:
            if tool in allowed:
                raise ValueError(
                    f"tool '{tool}' cannot be in both AllowedTools and DisallowedTools"
                )
        if self.max_buffer_size is not None and self.max_buffer_size <= 0:
            raise ValueError(
                f"MaxBufferSize must be positive, got {self.max_buffer_size}"
            )


Option = Callable[[Options], None]


def with_allowed_tools(*tools: str) -> Option:
    """Set the allowed tools."""
    def apply(o: Options) -> None:
        o.allowed_tools = list(tools)
    return apply


def with_disallowed_tools(*tools: str) -> Option:
    """Set the disallowed tools."""
    def apply(o: Options) -> None:
        o.disallowed_tools = list(tools)
    return apply


def with_system_prompt(prompt: str) -> Option:
    """Set the system prompt."""
    def apply(o: Options) -> None:
        o.system_prompt = prompt
    return apply


def with_append_system_prompt(prompt: str) -> Option:
    """Set text appended to the system prompt."""
    def apply(o: Options) -> None:
        o.append_system_prompt = prompt
    return apply


def with_model(model: str) -> Option:
    """Set the model."""
    def apply(o: Options) -> None:
        o.model = model
    return apply


def with_max_thinking_tokens(tokens: int) -> Option:
    """Set the maximum number of thinking tokens."""
    def apply(o: Options) -> None:
        o.max_thinking_tokens = tokens
    return apply


def with_permission_mode(mode: PermissionMode | str) -> Option:
    """Set the permission mode."""
    resolved = PermissionMode(mode)

    def apply(o: Options) -> None:
        o.permission_mode = resolved
    return apply


def with_permission_prompt_tool_name(tool_name: str) -> Option:
    """Set the tool used for permission prompts."""
    def apply(o: Options) -> None:
        o.permission_prompt_tool_name = tool_name
    return apply


def with_continue_conversation(continue_conversation: bool) -> Option:
    """Enable or disable continuing the previous conversation."""
    def apply(o: Options) -> None:
        o.continue_conversation = continue_conversation
    return apply


def with_resume(session_id: str) -> Option:
    """Set the session to resume."""
    def apply(o: Options) -> None:
        o.resume = session_id
    return apply


def with_cwd(cwd: str) -> Option:
    """Set the working directory."""
    def apply(o: Options) -> None:
        o.cwd = cwd
    return apply


def with_add_dirs(*dirs: str) -> Option:
    """Set extra directories for the context."""
    def apply(o: Options) -> None:
        o.add_dirs = list(dirs)
    return apply


def with_include_partial_messages(include: bool) -> Option:
    """Control whether partial assistant messages are emitted."""
    def apply(o: Options) -> None:
        o.include_partial_messages = include
    return apply


def with_fork_session(fork: bool) -> Option:
    """Control whether a resumed session forks to a new session id."""
    def apply(o: Options) -> None:
        o.fork_session = fork
    return apply


def with_setting_sources(*sources: str) -> Option:
    """Set the setting sources; none at all clears them."""
    def apply(o: Options) -> None:
        o.setting_sources = list(sources) if sources else None
    return apply


def with_agents(agents: Mapping[str, AgentDefinition] | None) -> Option:
    """Set the custom agents; None clears them."""
    copied = dict(agents) if agents is not None else None

    def apply(o: Options) -> None:
        o.agents = dict(copied) if copied is not None else None
    return apply


def with_user(user: str) -> Option:
    """Set the user to run the CLI as; an empty name clears it."""
    def apply(o: Options) -> None:
        o.user = user or None
    return apply


def with_max_buffer_size(size: int) -> Option:
    """Set the stdout buffer limit; a non-positive size clears it."""
    def apply(o: Options) -> None:
        o.max_buffer_size = size if size > 0 else None
    return apply


def with_mcp_servers(servers: Mapping[str, McpServerConfig]) -> Option:
    """Set the MCP server configurations."""
    def apply(o: Options) -> None:
        o.mcp_servers = dict(servers)
    return apply


def with_max_turns(turns: int) -> Option:
    """Set the maximum number of conversation turns."""
    def apply(o: Options) -> None:
        o.max_turns = turns
    return apply


def with_settings(settings: str) -> Option:
    """Set a settings file path or JSON string."""
    def apply(o: Options) -> None:
        o.settings = settings
    return apply


def with_extra_args(args: Mapping[str, str | None]) -> Option:
    """Set arbitrary extra CLI flags; None values become bare flags."""
    def apply(o: Options) -> None:
        o.extra_args = dict(args)
    return apply


def with_cli_path(path: str) -> Option:
    """Set a custom CLI path."""
    def apply(o: Options) -> None:
        o.cli_path = path
    return apply


def with_env(env: Mapping[str, str]) -> Option:
    """Merge environment variables; later values win for the same key."""
    def apply(o: Options) -> None:
        o.extra_env.update(env)
    return apply


def with_env_var(key: str, value: str) -> Option:
    """Set one environment variable."""
    def apply(o: Options) -> None:
        o.extra_env[key] = value
    return apply


def _event_key(event: HookEvent | str) -> str:
    return event.value if isinstance(event, HookEvent) else str(event)


def with_hooks(hooks: Mapping[HookEvent | str, Iterable[HookMatcher]]) -> Option:
    """Set the hook matchers for each given event, replacing earlier ones."""
    def apply(o: Options) -> None:
        for event, matchers in hooks.items():
            o.hooks[_event_key(event)] = list(matchers)
    return apply


def with_hook(event: HookEvent | str, matcher: HookMatcher) -> Option:
    """Append a single hook matcher for an event."""
    def apply(o: Options) -> None:
        o.hooks.setdefault(_event_key(event), []).append(matcher)
    return apply


def with_transport(transport: Any) -> Option:
    """Mark the options as using a custom transport."""
    del transport

    def apply(o: Options) -> None:
        o.extra_args[_TRANSPORT_MARKER_KEY] = _CUSTOM_TRANSPORT_MARKER
    return apply


def new_options(*opts: Option) -> Options:
    """Create options with defaults, then apply each option in turn."""
    options = Options()
    for opt in opts:
        opt(options)
    return options
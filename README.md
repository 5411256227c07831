# claudeagent

Building blocks for talking to the Claude Code CLI: typed messages and content
blocks, configuration options, hook outputs, tool-permission results,
control-protocol payloads and the errors the SDK raises. The package has no
dependencies outside the standard library.

## Installation

```
pip install claudeagent
```

For running the test suite:

```
pip install "claudeagent[test]"
pytest
```

## Options (`claudeagent.options`)

Options are built from a default set and a list of option functions, each of
which adjusts one setting:

```python
from claudeagent.options import (
    PermissionMode,
    new_options,
    with_allowed_tools,
    with_env_var,
    with_model,
    with_permission_mode,
)

options = new_options(
    with_allowed_tools("Read", "Write"),
    with_model("claude-sonnet"),
    with_permission_mode(PermissionMode.ACCEPT_EDITS),
    with_env_var("DEBUG", "1"),
)
options.validate()  # raises ValueError on conflicting or invalid settings
```

`new_options()` starts with `max_thinking_tokens` at 8000 and empty tool,
directory, MCP server, agent, hook, extra-argument and environment
collections; `setting_sources` starts as `None`.

`Options.validate()` raises `ValueError` when `max_thinking_tokens` or
`max_turns` is negative, when a tool is both allowed and disallowed, or when
`max_buffer_size` is set but not positive.

Some option functions have special cases:

- `with_env` and `with_env_var` merge into the environment; later values win.
- `with_setting_sources()` with no arguments clears the setting sources.
- `with_agents(None)` clears the agents; a mapping is copied.
- `with_user("")` clears the user.
- `with_max_buffer_size(n)` with `n <= 0` clears the limit.
- `with_hooks` replaces the matchers for each event it names; `with_hook`
  appends one matcher to an event.
- `with_transport(...)` only records a marker in `extra_args`.

MCP servers are described by `McpStdioServerConfig`, `McpSSEServerConfig` and
`McpHTTPServerConfig`, whose `type` is a `McpServerType`. Custom agents are
`AgentDefinition` values.

## Messages (`claudeagent.messages`)

Messages from the CLI are plain JSON objects. Each message and content block
class has `from_dict` and `to_dict`:

```python
from claudeagent.messages import AssistantMessage, TextBlock, to_json

msg = AssistantMessage.from_dict({
    "type": "assistant",
    "model": "claude-3",
    "content": [{"type": "text", "text": "Hello"}],
})
assert isinstance(msg.content[0], TextBlock)
print(to_json(msg))
```

The message classes are `UserMessage`, `AssistantMessage`, `SystemMessage`
(which keeps every field it arrived with) and `ResultMessage`; the content
blocks are `TextBlock`, `ThinkingBlock`, `ToolUseBlock` and `ToolResultBlock`.
`parse_content_block` returns `None` for an unknown block type, and such blocks
are skipped inside messages. A field of the wrong JSON type raises
`MessageParseError`.

`StreamMessage` is what is written to the CLI; empty fields are left out of its
`to_dict()`. `MessageIterator` is an abstract base for message sources: subclasses
implement `next()` (raising `StopIteration` at the end) and `close()`, and get
iteration and `with`-statement support.

## Hooks (`claudeagent.hooks`)

```python
from claudeagent.hooks import HookEvent, HookMatcher, new_pre_tool_use_output
from claudeagent.options import new_options, with_hook

def guard(hook_input, tool_use_id, context):
    if hook_input.get("tool_name") == "Bash":
        return new_pre_tool_use_output("deny", "shell is disabled", None)
    return {}

options = new_options(with_hook(HookEvent.PRE_TOOL_USE, HookMatcher("Bash", [guard])))
```

Other output helpers: `new_post_tool_use_output`, `new_blocking_output`,
`new_stop_output` and `new_async_output`. `SyncHookJSONOutput` and
`AsyncHookJSONOutput` build the same dictionaries from typed fields.
`PermissionDecision` lists the decisions `allow`, `deny` and `ask`.

## Permissions (`claudeagent.permissions`)

```python
from claudeagent.permissions import (
    PermissionDestination,
    PermissionUpdateType,
    new_permission_allow,
    new_permission_deny,
    new_permission_rule,
    new_permission_update,
)

update = (
    new_permission_update(PermissionUpdateType.ADD_RULES)
    .with_destination(PermissionDestination.SESSION)
    .with_rules([new_permission_rule("Bash", "allow echo")])
)

def can_use_tool(tool_name, tool_input, context):
    if tool_input.get("command") == "rm -rf /":
        return new_permission_deny("Dangerous command blocked", False)
    return new_permission_allow(None, [update])
```

`PermissionResultAllow`, `PermissionResultDeny`, `PermissionUpdate` and
`PermissionRule` each have a `to_dict()` using the CLI's field names.
`ToolPermissionContext` carries the CLI's permission suggestions.

## Control protocol (`claudeagent.control`)

Dataclasses for the control messages exchanged with the CLI:
`ControlRequest` and `RequestPayload` (with `from_dict`/`to_dict`; extra request
fields are kept inline), `ControlResponse` and `ResponsePayload`,
`InitializeRequest` with `HookMatcherConfig` registrations, the incoming
`CanUseToolRequest` and `HookCallbackRequest` (with `from_dict`), and
`PermissionResponse`. Constants such as `CONTROL_TYPE_REQUEST` and
`CONTROL_SUBTYPE_HOOK_CALLBACK` name the message types and subtypes.

## Errors (`claudeagent.errors`)

All errors derive from `SDKError`: `CLIConnectionError`, `CLINotFoundError`,
`ProcessError`, `CLIJSONDecodeError` and `MessageParseError`. Each class has an
`error_type` name such as `"process_error"`, and an underlying cause is chained
as `__cause__`. `ProcessError` adds the exit code and stderr to its message;
`CLIJSONDecodeError` shows at most the first 100 characters of the bad line.

## What this package does not do

It does not start or talk to the CLI itself: there is no subprocess transport,
client or one-shot query function, and nothing here runs hook callbacks or
permission callbacks on the CLI's behalf. The package provides the types and
payloads such a client would use.
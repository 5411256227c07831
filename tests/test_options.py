import pytest

from claudeagent.hooks import HookEvent, HookMatcher
from claudeagent.options import (
    AgentDefinition,
    McpHTTPServerConfig,
    McpServerType,
    McpSSEServerConfig,
    McpStdioServerConfig,
    Options,
    PermissionMode,
    new_options,
    with_add_dirs,
    with_agents,
    with_allowed_tools,
    with_append_system_prompt,
    with_cli_path,
    with_continue_conversation,
    with_cwd,
    with_disallowed_tools,
    with_env,
    with_env_var,
    with_extra_args,
    with_fork_session,
    with_hook,
    with_hooks,
    with_include_partial_messages,
    with_max_buffer_size,
    with_max_thinking_tokens,
    with_max_turns,
    with_mcp_servers,
    with_model,
    with_permission_mode,
    with_permission_prompt_tool_name,
    with_resume,
    with_setting_sources,
    with_settings,
    with_system_prompt,
    with_transport,
    with_user,
)


def test_defaults_values():
    o = new_options()
    assert o.max_thinking_tokens == 8000
    assert o.continue_conversation is False
    assert o.max_turns == 0
    assert o.allowed_tools == []
    assert o.disallowed_tools == []
    assert o.add_dirs == []
    assert o.mcp_servers == {}
    assert o.extra_args == {}
    assert o.extra_env == {}
    assert o.hooks == {}
    assert o.agents == {}


@pytest.mark.parametrize(
    "name",
    [
        "system_prompt",
        "append_system_prompt",
        "model",
        "permission_mode",
        "permission_prompt_tool_name",
        "resume",
        "settings",
        "cwd",
    ],
)
def test_defaults_none(name):
    assert getattr(new_options(), name) is None


def test_defaults_not_shared_between_instances():
    a = new_options()
    b = new_options()
    a.allowed_tools.append("Read")
    a.extra_env["X"] = "1"
    assert b.allowed_tools == []
    assert b.extra_env == {}


def test_valid_options_then_invalid():
    o = new_options()
    o.allowed_tools = ["Read", "Write"]
    assert o.validate() is None
    o.disallowed_tools = ["Write"]
    with pytest.raises(ValueError):
        o.validate()


@pytest.mark.parametrize(
    "setup, message",
    [
        (lambda o: setattr(o, "max_thinking_tokens", -100),
         "MaxThinkingTokens must be non-negative, got -100"),
        (lambda o: (setattr(o, "allowed_tools", ["Read", "Write"]),
                    setattr(o, "disallowed_tools", ["Write", "Bash"])),
         "tool 'Write' cannot be in both AllowedTools and DisallowedTools"),
        (lambda o: setattr(o, "max_turns", -5),
         "MaxTurns must be non-negative, got -5"),
        (lambda o: setattr(o, "max_buffer_size", 0),
         "MaxBufferSize must be positive, got 0"),
    ],
)
def test_validation_errors(setup, message):
    o = new_options()
    setup(o)
    with pytest.raises(ValueError) as exc:
        o.validate()
    assert str(exc.value) == message


@pytest.mark.parametrize(
    "config, expected",
    [
        (McpStdioServerConfig(command="node", args=["server.js"]), McpServerType.STDIO),
        (McpSSEServerConfig(url="https://example.com/sse"), McpServerType.SSE),
        (McpHTTPServerConfig(url="https://example.com/http"), McpServerType.HTTP),
    ],
)
def test_mcp_server_types(config, expected):
    assert config.type == expected


@pytest.mark.parametrize(
    "mode, expected",
    [
        (PermissionMode.DEFAULT, "default"),
        (PermissionMode.ACCEPT_EDITS, "acceptEdits"),
        (PermissionMode.PLAN, "plan"),
        (PermissionMode.BYPASS_PERMISSIONS, "bypassPermissions"),
    ],
)
def test_permission_mode_values(mode, expected):
    assert str(mode) == expected
    assert PermissionMode(expected) is mode


@pytest.mark.parametrize(
    "value, member",
    [
        ("stdio", McpServerType.STDIO),
        ("sse", McpServerType.SSE),
        ("http", McpServerType.HTTP),
    ],
)
def test_mcp_server_type_values(value, member):
    assert McpServerType(value) is member
    assert str(McpServerType(value)) == value


def test_simple_setters():
    o = new_options(
        with_allowed_tools("Read", "Write"),
        with_disallowed_tools("Bash"),
        with_system_prompt("sys"),
        with_append_system_prompt("more"),
        with_model("claude-3"),
        with_max_thinking_tokens(100),
        with_permission_prompt_tool_name("prompt_tool"),
        with_continue_conversation(True),
        with_resume("session-1"),
        with_cwd("/tmp"),
        with_add_dirs("/a", "/b"),
        with_include_partial_messages(True),
        with_fork_session(True),
        with_max_turns(7),
        with_settings("{}"),
        with_cli_path("/usr/bin/claude"),
    )
    assert o.allowed_tools == ["Read", "Write"]
    assert o.disallowed_tools == ["Bash"]
    assert o.system_prompt == "sys"
    assert o.append_system_prompt == "more"
    assert o.model == "claude-3"
    assert o.max_thinking_tokens == 100
    assert o.permission_prompt_tool_name == "prompt_tool"
    assert o.continue_conversation is True
    assert o.resume == "session-1"
    assert o.cwd == "/tmp"
    assert o.add_dirs == ["/a", "/b"]
    assert o.include_partial_messages is True
    assert o.fork_session is True
    assert o.max_turns == 7
    assert o.settings == "{}"
    assert o.cli_path == "/usr/bin/claude"


def test_permission_mode_from_string():
    o = new_options(with_permission_mode("plan"))
    assert o.permission_mode is PermissionMode.PLAN


def test_permission_mode_invalid():
    with pytest.raises(ValueError):
        with_permission_mode("nonsense")


def test_setting_sources():
    assert new_options(with_setting_sources("user", "project")).setting_sources == [
        "user",
        "project",
    ]
    o = new_options(with_setting_sources("user"), with_setting_sources())
    assert o.setting_sources is None


def test_agents_copied_and_cleared():
    agents = {"reviewer": AgentDefinition(description="d", prompt="p")}
    o = new_options(with_agents(agents))
    agents["other"] = AgentDefinition(description="x", prompt="y")
    assert list(o.agents) == ["reviewer"]
    assert new_options(with_agents(None)).agents is None


def test_user():
    assert new_options(with_user("alice")).user == "alice"
    assert new_options(with_user("alice"), with_user("")).user is None


@pytest.mark.parametrize("size, expected", [(1024, 1024), (0, None), (-5, None)])
def test_max_buffer_size(size, expected):
    assert new_options(with_max_buffer_size(size)).max_buffer_size == expected


def test_mcp_servers():
    server = McpStdioServerConfig(command="node")
    o = new_options(with_mcp_servers({"local": server}))
    assert o.mcp_servers == {"local": server}


def test_extra_args():
    o = new_options(with_extra_args({"--verbose": None, "--level": "2"}))
    assert o.extra_args == {"--verbose": None, "--level": "2"}


def test_env_merges_and_overrides():
    o = new_options(
        with_env({"A": "1", "B": "2"}),
        with_env_var("B", "3"),
        with_env({"C": "4"}),
    )
    assert o.extra_env == {"A": "1", "B": "3", "C": "4"}


def test_hooks_replace_and_append():
    first = HookMatcher(matcher="Bash")
    second = HookMatcher(matcher="Write")
    third = HookMatcher(matcher="Read")
    o = new_options(
        with_hook(HookEvent.PRE_TOOL_USE, first),
        with_hook("PreToolUse", second),
    )
    assert o.hooks == {"PreToolUse": [first, second]}
    o = new_options(
        with_hook(HookEvent.PRE_TOOL_USE, first),
        with_hooks({HookEvent.PRE_TOOL_USE: [third], "PostToolUse": [second]}),
    )
    assert o.hooks == {"PreToolUse": [third], "PostToolUse": [second]}


def test_transport_marker():
    o = new_options(with_transport(object()))
    assert o.extra_args == {"__transport_marker__": "custom_transport"}


def test_options_apply_in_order():
    o = new_options(with_model("a"), with_model("b"))
    assert o.model == "b"


def test_options_constructor_matches_new_options():
    assert Options() == new_options()
import pytest

from claudeagent.permissions import (
    PermissionDestination,
    PermissionResultAllow,
    PermissionResultDeny,
    PermissionUpdateType,
    ToolPermissionContext,
    new_permission_allow,
    new_permission_deny,
    new_permission_rule,
    new_permission_update,
)


@pytest.mark.parametrize(
    "update_type, expected",
    [
        (PermissionUpdateType.ADD_RULES, "addRules"),
        (PermissionUpdateType.REPLACE_RULES, "replaceRules"),
        (PermissionUpdateType.REMOVE_RULES, "removeRules"),
        (PermissionUpdateType.SET_MODE, "setMode"),
        (PermissionUpdateType.ADD_DIRECTORIES, "addDirectories"),
        (PermissionUpdateType.REMOVE_DIRECTORIES, "removeDirectories"),
    ],
)
def test_permission_update_type_values(update_type, expected):
    assert new_permission_update(update_type).to_dict() == {"type": expected}
    assert new_permission_update(expected).type is update_type


@pytest.mark.parametrize(
    "destination, expected",
    [
        (PermissionDestination.SESSION, "session"),
        (PermissionDestination.SETTINGS, "settings"),
    ],
)
def test_permission_destination_values(destination, expected):
    update = new_permission_update(PermissionUpdateType.ADD_RULES).with_destination(destination)
    assert update.to_dict() == {"type": "addRules", "destination": expected}


def test_new_permission_rule():
    rule = new_permission_rule("Bash", "allow all")
    assert rule.tool_name == "Bash"
    assert rule.rule_content == "allow all"
    assert rule.to_dict() == {"toolName": "Bash", "ruleContent": "allow all"}


def test_new_permission_update_basic():
    update = new_permission_update(PermissionUpdateType.ADD_RULES)
    assert update.type == PermissionUpdateType.ADD_RULES
    assert update.to_dict() == {"type": "addRules"}


def test_new_permission_update_rejects_unknown_type():
    with pytest.raises(ValueError):
        new_permission_update("bogus")


def test_permission_update_builder():
    rules = [
        new_permission_rule("Bash", "allow echo commands"),
        new_permission_rule("Write", "allow writes to /tmp"),
    ]
    update = (
        new_permission_update(PermissionUpdateType.ADD_RULES)
        .with_destination(PermissionDestination.SESSION)
        .with_behavior("allow")
        .with_rules(rules)
    )
    assert update.type == PermissionUpdateType.ADD_RULES
    assert update.destination == PermissionDestination.SESSION
    assert update.behavior == "allow"
    assert len(update.rules) == 2
    assert update.to_dict() == {
        "type": "addRules",
        "destination": "session",
        "behavior": "allow",
        "rules": [
            {"toolName": "Bash", "ruleContent": "allow echo commands"},
            {"toolName": "Write", "ruleContent": "allow writes to /tmp"},
        ],
    }


def test_permission_update_with_mode():
    update = new_permission_update(PermissionUpdateType.SET_MODE).with_mode("acceptEdits")
    assert update.mode == "acceptEdits"
    assert update.to_dict() == {"type": "setMode", "mode": "acceptEdits"}


def test_permission_update_with_directories():
    update = new_permission_update(PermissionUpdateType.ADD_DIRECTORIES).with_directories(
        ["/path/to/dir1", "/path/to/dir2"]
    )
    assert len(update.directories) == 2
    assert update.directories[0] == "/path/to/dir1"


def test_new_permission_allow():
    updates = [
        new_permission_update(PermissionUpdateType.ADD_RULES).with_rules(
            [new_permission_rule("Bash", "allow echo")]
        )
    ]
    result = new_permission_allow({"command": "echo 'safe command'"}, updates)
    assert result.behavior == "allow"
    assert result.updated_input == {"command": "echo 'safe command'"}
    assert len(result.updated_permissions) == 1
    assert result.to_dict() == {
        "behavior": "allow",
        "updatedInput": {"command": "echo 'safe command'"},
        "updatedPermissions": [
            {"type": "addRules", "rules": [{"toolName": "Bash", "ruleContent": "allow echo"}]}
        ],
    }


def test_new_permission_deny():
    result = new_permission_deny("Command is too dangerous", True)
    assert result.behavior == "deny"
    assert result.message == "Command is too dangerous"
    assert result.interrupt is True
    assert result.to_dict() == {
        "behavior": "deny",
        "message": "Command is too dangerous",
        "interrupt": True,
    }


def test_permission_result_variants():
    assert isinstance(new_permission_allow(None, None), PermissionResultAllow)
    assert new_permission_allow(None, None).to_dict() == {"behavior": "allow"}
    assert isinstance(new_permission_deny("error", False), PermissionResultDeny)
    assert new_permission_deny("error", False).to_dict() == {
        "behavior": "deny",
        "message": "error",
    }


def test_tool_permission_context():
    suggestions = [
        new_permission_update(PermissionUpdateType.ADD_RULES).with_rules(
            [new_permission_rule("Bash", "suggested rule")]
        )
    ]
    ctx = ToolPermissionContext(suggestions=suggestions)
    assert len(ctx.suggestions) == 1
    assert ctx.suggestions[0].rules[0].rule_content == "suggested rule"
    assert ToolPermissionContext().suggestions == []


def test_can_use_tool_callback():
    def callback(tool_name, tool_input, ctx):
        if tool_name == "Bash" and tool_input.get("command") == "rm -rf /":
            return new_permission_deny("Dangerous command blocked", False)
        return new_permission_allow(None, None)

    ctx = ToolPermissionContext()
    allowed = callback("Bash", {"command": "echo hello"}, ctx)
    assert isinstance(allowed, PermissionResultAllow)
    assert allowed.behavior == "allow"

    denied = callback("Bash", {"command": "rm -rf /"}, ctx)
    assert isinstance(denied, PermissionResultDeny)
    assert denied.behavior == "deny"
    assert denied.message == "Dangerous command blocked"
"""Typed messages, options, hooks, permission results, control payloads and errors for the Claude Code CLI."""

__version__ = "0.1.0"

__all__ = ["control", "errors", "hooks", "messages", "options", "permissions"]
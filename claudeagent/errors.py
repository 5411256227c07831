"""Exception hierarchy raised by the SDK."""

from __future__ import annotations

from typing import Any

MAX_LINE_DISPLAY_LENGTH = 100


class SDKError(Exception):
    """Base class for every error raised by the SDK."""

    error_type = "base_error"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class CLIConnectionError(SDKError):
    """Connecting to or talking with the CLI failed."""

    error_type = "connection_error"


class CLINotFoundError(SDKError):
    """The CLI executable could not be found."""

    error_type = "cli_not_found_error"

    def __init__(self, message: str, path: str = "") -> None:
        if path:
            message = f"{message}: {path}"
        super().__init__(message)
        self.path = path


class ProcessError(SDKError):
    """The CLI subprocess failed."""

    error_type = "process_error"

    def __init__(self, message: str, exit_code: int = 0, stderr: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr

    def __str__(self) -> str:
        text = self.message
        if self.exit_code != 0:
            text = f"{text} (exit code: {self.exit_code})"
        if self.stderr:
            text = f"{text}\nError output: {self.stderr}"
        return text


class CLIJSONDecodeError(SDKError):
    """A line of CLI output was not valid JSON."""

    error_type = "json_decode_error"

    def __init__(
        self, line: str, position: int = 0, cause: BaseException | None = None
    ) -> None:
        shown = line[:MAX_LINE_DISPLAY_LENGTH]
        super().__init__(f"Failed to decode JSON: {shown}...")
        self.line = line
        self.position = position
        self.original_error = cause
        if cause is not None:
            self.__cause__ = cause


class MessageParseError(SDKError):
    """A decoded message did not have the expected structure."""

    error_type = "message_parse_error"

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.data = data
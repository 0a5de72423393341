"""
Custom exceptions for vsswriters.

This module provides custom exception classes with user-friendly messaging
that include:
- Clear error descriptions
- Technical details for debugging
- Actionable suggestions for resolution

All exceptions follow a consistent pattern of providing both machine-readable
error codes and human-readable messages with suggestions.
"""

from dataclasses import dataclass, field
from typing import Optional, Any
from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes for vsswriters errors."""
    # Configuration errors (1xx)
    CONFIG_MISSING_REQUIRED = "E101"
    CONFIG_INVALID_VALUE = "E102"
    CONFIG_FILE_NOT_FOUND = "E103"
    CONFIG_PARSE_ERROR = "E104"

    # Command execution errors (2xx)
    HOST_UNREACHABLE = "E201"
    COMMAND_FAILED = "E202"
    COMMAND_TIMEOUT = "E203"
    COMMAND_NOT_FOUND = "E204"

    # Output parsing errors (3xx)
    PARSE_MISSING_MARKER = "E301"
    PARSE_INCOMPLETE_BLOCK = "E302"

    # Internal errors (9xx)
    INTERNAL_ERROR = "E901"


@dataclass
class WriterError:
    """
    Structured error information for vsswriters.

    Attributes:
        code: Machine-readable error code.
        message: User-facing error message.
        details: Technical details for debugging.
        suggestion: How to fix the issue.
        context: Additional context information.
    """
    code: ErrorCode
    message: str
    details: str = ""
    suggestion: str = ""
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        lines = [f"[{self.code.value}] {self.message}"]
        if self.details:
            lines.append(f"  Details: {self.details}")
        if self.suggestion:
            lines.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(lines)


class VSSWritersException(Exception):
    """
    Base exception class for vsswriters.

    All custom exceptions inherit from this class and provide
    structured error information.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR,
                 details: str = "", suggestion: str = "", **context):
        self.error = WriterError(
            code=code,
            message=message,
            details=details,
            suggestion=suggestion,
            context=context
        )
        super().__init__(str(self.error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def suggestion(self) -> str:
        return self.error.suggestion


class ConfigurationError(VSSWritersException):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - No usable hosts after parsing the host list
        - Invalid worker count or timeout
        - Config file not found or not valid YAML
    """

    def __init__(self, message: str, parameter: str = None,
                 expected: Any = None, actual: Any = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.CONFIG_INVALID_VALUE):
        details_parts = []
        if parameter:
            details_parts.append(f"Parameter: {parameter}")
        if expected is not None:
            details_parts.append(f"Expected: {expected}")
        if actual is not None:
            details_parts.append(f"Actual: {actual}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            parameter=parameter,
            expected=expected,
            actual=actual
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.CONFIG_MISSING_REQUIRED: "Provide the required parameter via command line or config file",
            ErrorCode.CONFIG_INVALID_VALUE: "Check the parameter value and correct it",
            ErrorCode.CONFIG_FILE_NOT_FOUND: "Verify the config file path exists",
            ErrorCode.CONFIG_PARSE_ERROR: "Check config file syntax (YAML format)",
        }
        return suggestions.get(code, "Check the configuration and try again")


class ExecutionFailure(VSSWritersException):
    """
    Raised when the diagnostic command could not be run on a host.

    Examples:
        - Command returns a non-zero exit code
        - Command times out
        - Command executable not found
    """

    def __init__(self, message: str, host: str = None, command: str = None,
                 exit_code: int = None, stderr: str = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.COMMAND_FAILED):
        details_parts = []
        if host:
            details_parts.append(f"Host: {host}")
        if command:
            # Truncate long commands
            cmd_display = command[:200] + "..." if len(command) > 200 else command
            details_parts.append(f"Command: {cmd_display}")
        if exit_code is not None:
            details_parts.append(f"Exit code: {exit_code}")
        if stderr:
            # Truncate long error output
            stderr_display = stderr[:500] + "..." if len(stderr) > 500 else stderr
            details_parts.append(f"Error output: {stderr_display}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code, exit_code),
            host=host,
            command=command,
            exit_code=exit_code,
            stderr=stderr
        )

    @property
    def host(self) -> Optional[str]:
        return self.error.context.get('host')

    @staticmethod
    def _default_suggestion(code: ErrorCode, exit_code: int = None) -> str:
        suggestions = {
            ErrorCode.HOST_UNREACHABLE: "Verify host is online and SSH is configured",
            ErrorCode.COMMAND_FAILED: "Check command output for specific errors",
            ErrorCode.COMMAND_TIMEOUT: "Increase --timeout or check host load",
            ErrorCode.COMMAND_NOT_FOUND: "Run against a host that provides the diagnostic command",
        }
        suggestion = suggestions.get(code, "Check the host and try again")

        # ssh reserves 255 for its own connection errors
        if exit_code == 255:
            suggestion = suggestions[ErrorCode.HOST_UNREACHABLE]
        elif exit_code == 127:
            suggestion = suggestions[ErrorCode.COMMAND_NOT_FOUND]

        return suggestion


class HostUnreachableError(ExecutionFailure):
    """Raised when a remote host cannot be reached or authenticated against."""

    def __init__(self, message: str, host: str = None, stderr: str = None,
                 suggestion: str = None):
        super().__init__(
            message,
            host=host,
            exit_code=255,
            stderr=stderr,
            suggestion=suggestion,
            code=ErrorCode.HOST_UNREACHABLE
        )


class ParseError(VSSWritersException):
    """
    Raised (or reported) when a block of command output is malformed.

    Attributes:
        block_index: Zero-based index of the block within the trimmed body.
        marker: The marker that was expected but missing, or 'incomplete block'.
        field: Name of the record field being extracted.
        line: The offending line text, if any.
        host: Host the output came from, if known.
        line_count: Number of lines present, for incomplete blocks.
    """

    INCOMPLETE_BLOCK = "incomplete block"

    def __init__(self, block_index: int, marker: str, field: str = None,
                 line: str = None, host: str = None, line_count: int = None):
        self.block_index = block_index
        self.marker = marker
        self.field = field
        self.line = line
        self.host = host
        self.line_count = line_count

        if marker == self.INCOMPLETE_BLOCK:
            code = ErrorCode.PARSE_INCOMPLETE_BLOCK
            message = f"Block {block_index} is incomplete"
            if line_count is not None:
                message += f" ({line_count} lines)"
        else:
            code = ErrorCode.PARSE_MISSING_MARKER
            message = f"Block {block_index} is missing marker {marker!r}"
            if field:
                message += f" for {field}"
        if host:
            message = f"{host}: {message}"

        details_parts = []
        if line is not None:
            details_parts.append(f"Line: {line!r}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts),
            suggestion="Check that the host runs a compatible version of the diagnostic command",
            block_index=block_index,
            marker=marker,
            field=field,
            host=host
        )

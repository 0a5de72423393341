"""
Centralized error message templates for vsswriters.

This module provides:
- Consistent error message templates
- User-friendly formatting
- Actionable suggestions

Usage:
    from vsswriters.error_messages import format_error, ERROR_MESSAGES

    # Format a known error
    msg = format_error('HOST_UNREACHABLE', host='node1')

    # Get raw template
    template = ERROR_MESSAGES['HOST_UNREACHABLE']
"""

from typing import Dict, Any


# Error message templates with placeholders
ERROR_MESSAGES: Dict[str, str] = {
    # Command execution errors
    'HOST_UNREACHABLE': (
        "Cannot reach host: {host}\n"
        "Please verify:\n"
        "  - The hostname/IP is correct\n"
        "  - The host is online and reachable\n"
        "  - SSH access is configured (key-based authentication)\n"
        "Test with: ssh {host} hostname"
    ),

    'COMMAND_FAILED': (
        "Diagnostic command failed on {host} with exit code {exit_code}.\n"
        "Command: {command}\n"
        "This may indicate:\n"
        "  - The command requires an elevated (administrator) session\n"
        "  - The snapshot service is not running\n"
        "Check the error output for specific details."
    ),

    'COMMAND_TIMEOUT': (
        "Diagnostic command on {host} timed out after {timeout} seconds.\n"
        "Consider increasing the timeout with --timeout <seconds>."
    ),

    # Parse errors
    'PARSE_MISSING_MARKER': (
        "Malformed writer block {block_index} from {host}: "
        "marker {marker!r} not found for {field}.\n"
        "The block was skipped."
    ),

    'PARSE_INCOMPLETE_BLOCK': (
        "Output from {host} ends with an incomplete writer block ({lines} of {expected} lines).\n"
        "The partial block was skipped."
    ),

    # Configuration errors
    'CONFIG_FILE_NOT_FOUND': (
        "Configuration file not found: {path}\n"
        "Please ensure the file exists and the path is correct.\n"
        "You can specify a different config file with: --config-file <path>"
    ),

    'CONFIG_PARSE_ERROR': (
        "Failed to parse configuration file: {path}\n"
        "Error: {error}\n"
        "Please check the file syntax (YAML format expected)."
    ),

    # General errors
    'INTERNAL_ERROR': (
        "An internal error occurred: {error}\n"
        "This is likely a bug in vsswriters.\n"
        "Include the full error message and stack trace when reporting it."
    ),
}


def format_error(error_key: str, **kwargs) -> str:
    """
    Format an error message with the given parameters.

    Args:
        error_key: Key for the error message template.
        **kwargs: Parameters to substitute in the template.

    Returns:
        Formatted error message string.

    Example:
        >>> format_error('COMMAND_TIMEOUT', host='node1', timeout=60)
        'Diagnostic command on node1 timed out after 60 seconds...'
    """
    template = ERROR_MESSAGES.get(error_key)
    if template is None:
        return f"Unknown error: {error_key}\nContext: {kwargs}"

    try:
        return template.format(**kwargs)
    except KeyError as e:
        # Return template with available substitutions and note missing ones
        return f"{template}\n(Missing format parameter: {e})"


class ErrorFormatter:
    """
    Helper class for formatting errors with consistent styling.

    Provides methods for formatting different types of errors
    with optional color support.
    """

    # ANSI color codes
    COLORS = {
        'reset': '\033[0m',
        'bold': '\033[1m',
        'red': '\033[91m',
        'yellow': '\033[93m',
        'cyan': '\033[96m',
    }

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if enabled."""
        if self.use_colors and color in self.COLORS:
            return f"{self.COLORS[color]}{text}{self.COLORS['reset']}"
        return text

    def format_error_header(self, code: str, title: str) -> str:
        header = f"[{code}] {title}"
        return self._color(header, 'red')

    def format_suggestion(self, suggestion: str) -> str:
        prefix = self._color("Suggestion:", 'cyan')
        return f"{prefix} {suggestion}"

    def format_details(self, details: Dict[str, Any]) -> str:
        lines = []
        for key, value in details.items():
            key_styled = self._color(f"{key}:", 'bold')
            lines.append(f"  {key_styled} {value}")
        return "\n".join(lines)

    def format_exception(self, exc) -> str:
        """
        Format a VSSWritersException (or anything carrying a WriterError).

        Args:
            exc: Exception with an ``error`` attribute.

        Returns:
            Fully formatted error string.
        """
        error = exc.error
        details = {'Details': error.details} if error.details else None
        return self.format_full_error(error.code.value, error.message,
                                      details=details, suggestion=error.suggestion)

    def format_full_error(self, code: str, title: str,
                          details: Dict[str, Any] = None,
                          suggestion: str = None) -> str:
        """
        Format a complete error message.

        Args:
            code: Error code.
            title: Error title/message.
            details: Optional dictionary of details.
            suggestion: Optional suggestion text.

        Returns:
            Fully formatted error string.
        """
        parts = [self.format_error_header(code, title)]

        if details:
            parts.append(self.format_details(details))

        if suggestion:
            parts.append("")
            parts.append(self.format_suggestion(suggestion))

        return "\n".join(parts)

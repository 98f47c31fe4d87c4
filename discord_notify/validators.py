"""
Field validators for discord-notify

Each validator returns an (is_valid, message) tuple. Length bounds are
inclusive and measured on the escaped form of the value, the same form the
original shell tool measured before embedding it in a JSON string literal.
"""

import os
import re
from typing import Tuple


# Discord limits
MAX_USERNAME_LENGTH = 80
MAX_MESSAGE_LENGTH = 2000
MAX_TITLE_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 4096

AVATAR_URL_PATTERN = re.compile(r"^https?://[a-zA-Z0-9.-]+(:[0-9]+)?(/.*)?$")
COLOR_PATTERN = re.compile(r"^[0-9a-fA-F]{6}$")

# A backslash that does not start \n, \t or \r, or a trailing backslash
_LONE_BACKSLASH = re.compile(r"\\([^ntr])|\\$")


def escape_string(value: str) -> str:
    """
    Escape a string for embedding in a JSON literal inside a single-quoted
    shell argument.

    Only used to measure length: request bodies are encoded by json/requests.

    Args:
        value: Raw user input

    Returns:
        The escaped string
    """
    escaped = value.replace("\n", "\\n")
    escaped = _LONE_BACKSLASH.sub(lambda m: "\\\\" + (m.group(1) or ""), escaped)
    escaped = escaped.replace('"', '\\"')
    escaped = escaped.replace("'", "'\\''")
    return escaped


def validate_length(value: str, label: str, minimum: int, maximum: int) -> Tuple[bool, str]:
    """
    Check that the escaped form of a value fits inside [minimum, maximum].

    Args:
        value: Raw user input
        label: Human readable field name used in the message
        minimum: Smallest accepted length
        maximum: Largest accepted length

    Returns:
        Tuple of (is_valid, message)
    """
    length = len(escape_string(value))
    if length < minimum or length > maximum:
        return False, f"{label} must be between {minimum} and {maximum} characters"
    return True, f"Valid {label.lower()}"


def validate_username(value: str) -> Tuple[bool, str]:
    return validate_length(value, "Username", 1, MAX_USERNAME_LENGTH)


def validate_message(value: str) -> Tuple[bool, str]:
    return validate_length(value, "Message", 1, MAX_MESSAGE_LENGTH)


def validate_title(value: str) -> Tuple[bool, str]:
    return validate_length(value, "Title", 1, MAX_TITLE_LENGTH)


def validate_description(value: str) -> Tuple[bool, str]:
    return validate_length(value, "Description", 1, MAX_DESCRIPTION_LENGTH)


def validate_avatar_url(url: str) -> Tuple[bool, str]:
    """Accept scheme://host[:port][/path] with an http or https scheme."""
    if not AVATAR_URL_PATTERN.match(url):
        return False, "Invalid avatar url"
    return True, "Valid avatar url"


def validate_color(value: str) -> Tuple[bool, str]:
    """Accept six hex digits with an optional leading '#'."""
    color = value[1:] if value.startswith("#") else value
    if not COLOR_PATTERN.match(color):
        return False, f"Invalid color: {color}"
    return True, "Valid color"


def parse_color(value: str) -> int:
    """
    Convert a hex color code to the decimal value Discord expects.

    Args:
        value: Color such as "#1a2b3c" or "1a2b3c"

    Returns:
        Decimal color value (1715004 for 1a2b3c)

    Raises:
        ValueError: If the value is not a 6-digit hex color
    """
    is_valid, message = validate_color(value)
    if not is_valid:
        raise ValueError(message)
    return int(value.lstrip("#"), 16)


def validate_file_path(file_path: str) -> Tuple[bool, str]:
    """
    Validate that a file can be uploaded as an attachment.

    Args:
        file_path: Path to the file

    Returns:
        Tuple of (is_valid, message)
    """
    if not os.path.exists(file_path):
        return False, "The file does not exist"

    if os.path.isdir(file_path) or not os.path.isfile(file_path):
        return False, "The file is not a regular file"

    if os.path.getsize(file_path) == 0:
        return False, "The file is empty"

    if not os.access(file_path, os.R_OK):
        return False, "You are not authorized to read the file"

    return True, "Valid file"

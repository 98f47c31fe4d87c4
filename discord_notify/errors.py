"""
Error taxonomy for discord-notify

Every failure raised by a pipeline stage is a DiscordNotifyError carrying the
process exit status it maps to, plus a finer-grained internal code.
"""

from typing import Optional


EXIT_SUCCESS = 0
EXIT_MISSING_DEPENDENCY = 1
EXIT_INVALID_ARGUMENTS = 2
EXIT_INVALID_WEBHOOK = 3
EXIT_SEND_FAILED = 4

# Internal codes for option failures, one per validator
CODE_USERNAME = 2
CODE_MESSAGE = 3
CODE_TITLE = 4
CODE_DESCRIPTION = 5
CODE_AVATAR = 6
CODE_COLOR = 7
CODE_FILE = 8
CODE_UNKNOWN_OPTION = 9
CODE_MISSING_ARGUMENT = 10


class DiscordNotifyError(Exception):
    """Base class for all discord-notify failures."""

    exit_code = 1

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.exit_code


class DependencyError(DiscordNotifyError):
    """A required third-party library is not importable."""

    exit_code = EXIT_MISSING_DEPENDENCY


class OptionError(DiscordNotifyError):
    """A flag value or the configuration is malformed."""

    exit_code = EXIT_INVALID_ARGUMENTS


class WebhookError(DiscordNotifyError):
    """No webhook could be resolved, or it failed validation or the probe."""

    exit_code = EXIT_INVALID_WEBHOOK


class SendError(DiscordNotifyError):
    """The final POST failed or returned a non-2xx status."""

    exit_code = EXIT_SEND_FAILED

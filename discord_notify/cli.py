"""
Command-line interface for discord-notify

Pipeline: parse options -> resolve webhook -> verify webhook -> build payload
-> send. Each stage raises a DiscordNotifyError whose exit_code becomes the
process status.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence, Tuple

from .config import NotificationOptions, SenderConfig
from .errors import (
    CODE_AVATAR,
    CODE_COLOR,
    CODE_DESCRIPTION,
    CODE_FILE,
    CODE_MESSAGE,
    CODE_MISSING_ARGUMENT,
    CODE_TITLE,
    CODE_UNKNOWN_OPTION,
    CODE_USERNAME,
    EXIT_SUCCESS,
    DiscordNotifyError,
    OptionError,
    SendError,
)
from .logging_config import setup_logging
from .message_builder import select_payload
from .resolver import resolve_webhook_url
from .validators import (
    parse_color,
    validate_avatar_url,
    validate_color,
    validate_description,
    validate_file_path,
    validate_message,
    validate_title,
    validate_username,
)
from .webhook_client import DiscordWebhookClient

logger = logging.getLogger(__name__)

PROG = "discord-notify"

USAGE_NOTES = """\
Notes:
  - The -w option can be used to specify the webhook url directly or via a file.
  - If the -w option is not specified, the webhook url is read from
    $HOME/.discord_webhook or the DISCORD_WEBHOOK_URL environment variable.
  - You must specify at least -m, -t, -d or -f.
  - If -f is used, -m, -t and -d are ignored.

Exit status:
  0 success, 1 missing dependency, 2 invalid arguments,
  3 invalid webhook, 4 send failure
"""


class ValidatedStore(argparse.Action):
    """Store an option value only after its validator accepts it."""

    def __init__(
        self,
        option_strings,
        dest,
        validator: Callable[[str], Tuple[bool, str]] = None,
        converter: Optional[Callable[[str], object]] = None,
        error_code: Optional[int] = None,
        **kwargs
    ):
        super().__init__(option_strings, dest, **kwargs)
        self.validator = validator
        self.converter = converter
        self.error_code = error_code

    def __call__(self, parser, namespace, values, option_string=None):
        is_valid, message = self.validator(values)
        if not is_valid:
            parser.print_usage(sys.stderr)
            raise OptionError(message, code=self.error_code)
        setattr(namespace, self.dest, self.converter(values) if self.converter else values)


class NotifyArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises OptionError instead of exiting."""

    def error(self, message):
        self.print_usage(sys.stderr)
        if "expected one argument" in message:
            raise OptionError(message, code=CODE_MISSING_ARGUMENT)
        raise OptionError(message, code=CODE_UNKNOWN_OPTION)


def build_parser() -> NotifyArgumentParser:
    parser = NotifyArgumentParser(
        prog=PROG,
        allow_abbrev=False,
        description="Send a message, an embed or a file to a Discord channel through a webhook.",
        epilog=USAGE_NOTES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-w", "--webhook",
        dest="webhook_url",
        metavar="URL_OR_FILE",
        help="Webhook url, or path to a file containing it",
    )
    parser.add_argument(
        "-u", "--username",
        action=ValidatedStore,
        validator=validate_username,
        error_code=CODE_USERNAME,
        help="Override the webhook's username (1-80 characters)",
    )
    parser.add_argument(
        "-m", "--message",
        action=ValidatedStore,
        validator=validate_message,
        error_code=CODE_MESSAGE,
        help="Message content (1-2000 characters)",
    )
    parser.add_argument(
        "-t", "--title",
        action=ValidatedStore,
        validator=validate_title,
        error_code=CODE_TITLE,
        help="Embed title (1-256 characters)",
    )
    parser.add_argument(
        "-d", "--description",
        action=ValidatedStore,
        validator=validate_description,
        error_code=CODE_DESCRIPTION,
        help="Embed description (1-4096 characters)",
    )
    parser.add_argument(
        "-a", "--avatar",
        dest="avatar_url",
        metavar="AVATAR_URL",
        action=ValidatedStore,
        validator=validate_avatar_url,
        error_code=CODE_AVATAR,
        help="Override the webhook's avatar (http or https url)",
    )
    parser.add_argument(
        "-c", "--color",
        metavar="#COLOR_HEX",
        action=ValidatedStore,
        validator=validate_color,
        converter=parse_color,
        error_code=CODE_COLOR,
        help="Embed accent color, e.g. #1a2b3c",
    )
    parser.add_argument(
        "-f", "--file",
        dest="file_path",
        metavar="PATH",
        action=ValidatedStore,
        validator=validate_file_path,
        error_code=CODE_FILE,
        help="File to upload instead of a text message",
    )
    return parser


def parse_options(argv: Sequence[str], parser: Optional[argparse.ArgumentParser] = None) -> NotificationOptions:
    """
    Parse and validate command-line arguments.

    Args:
        argv: Arguments without the program name
        parser: Parser to use, defaults to build_parser()

    Returns:
        Validated NotificationOptions (webhook_url still unresolved)

    Raises:
        OptionError: On an invalid value, unknown flag or missing content
        SystemExit: With status 0 when -h is given
    """
    if parser is None:
        parser = build_parser()

    if not argv:
        parser.print_usage(sys.stderr)
        raise OptionError("No options provided", code=1)

    namespace = parser.parse_args(list(argv))
    options = NotificationOptions(**vars(namespace))

    if not options.has_content():
        raise OptionError("You must specify at least -m, -t, -d or -f", code=CODE_FILE)

    if options.is_file_mode() and (options.message or options.title or options.description):
        logger.info("File given: ignoring message, title and description")

    return options


def run(
    argv: Sequence[str],
    config: Optional[SenderConfig] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> int:
    """
    Run the whole pipeline once.

    Returns:
        EXIT_SUCCESS

    Raises:
        DiscordNotifyError: From the first stage that fails
    """
    options = parse_options(argv)

    if config is None:
        config = SenderConfig.load(config_path, env=env)
    setup_logging(config.log_level)

    options.webhook_url = resolve_webhook_url(options.webhook_url, home=home, env=env)

    client = DiscordWebhookClient(options.webhook_url, timeout=config.http.timeout)
    client.verify()

    try:
        payload = select_payload(options)
    except OSError as e:
        raise SendError(f"Cannot read file {options.file_path}: {e.strerror}") from e

    client.send(payload)
    return EXIT_SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        return run(argv)
    except DiscordNotifyError as e:
        print(f"{PROG} - {e.message}", file=sys.stderr)
        logger.debug(f"{type(e).__name__} (internal code {e.code})")
        return e.exit_code

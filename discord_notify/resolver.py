"""
Webhook URL resolution.

Precedence:
1. -w naming a readable file: the URL is read from the file
2. -w given as a literal string: used as-is
3. $HOME/.discord_webhook
4. DISCORD_WEBHOOK_URL
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .errors import WebhookError
from .webhook_client import sanitize_webhook_for_logging

logger = logging.getLogger(__name__)

WEBHOOK_ENV_VAR = "DISCORD_WEBHOOK_URL"
WEBHOOK_FILENAME = ".discord_webhook"


def _is_readable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def _read_url_file(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read().strip()


def resolve_webhook_url(
    webhook_arg: Optional[str] = None,
    home: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Determine the webhook URL to post to.

    Args:
        webhook_arg: Value of the -w flag, a URL or a path to a file holding one
        home: Home directory, defaults to $HOME
        env: Environment mapping, defaults to os.environ

    Returns:
        The resolved webhook URL

    Raises:
        WebhookError: If no source provides a URL
    """
    env = os.environ if env is None else env

    if webhook_arg:
        if _is_readable_file(webhook_arg):
            logger.debug(f"Reading webhook url from {webhook_arg}")
            return _read_url_file(webhook_arg)
        return webhook_arg

    if home is None:
        home = env.get("HOME") or str(Path.home())

    home_file = os.path.join(home, WEBHOOK_FILENAME)
    if _is_readable_file(home_file):
        logger.debug(f"Reading webhook url from {home_file}")
        return _read_url_file(home_file)

    if url := env.get(WEBHOOK_ENV_VAR):
        logger.debug(f"Using webhook url from {WEBHOOK_ENV_VAR}: {sanitize_webhook_for_logging(url)}")
        return url

    raise WebhookError("No webhook url provided")

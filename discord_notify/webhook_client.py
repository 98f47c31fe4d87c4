"""
Discord webhook client for discord-notify

Verifies a webhook with a HEAD probe and posts the built payload to it.
"""

import logging
import re
from typing import Optional, Tuple

import requests

from .errors import SendError, WebhookError
from .message_builder import MODE_FILE, Payload, describe_payload

logger = logging.getLogger(__name__)


WEBHOOK_URL_PATTERN = re.compile(r"^https://discord\.com/api/webhooks/[0-9]+/[a-zA-Z0-9_\-]+$")

DEFAULT_TIMEOUT = (10.0, 30.0)


def validate_webhook_url(url: str) -> Tuple[bool, str]:
    """
    Validate a Discord webhook URL.

    Args:
        url: The webhook URL to validate

    Returns:
        Tuple of (is_valid, message)
    """
    if not url:
        return False, "Webhook URL is empty"

    if not WEBHOOK_URL_PATTERN.match(url):
        return False, "Invalid webhook url"

    return True, "Valid Discord webhook URL"


def sanitize_webhook_for_logging(url: str) -> str:
    """
    Sanitize a webhook URL for safe logging (hide the token portion).

    Args:
        url: The webhook URL

    Returns:
        Sanitized URL safe for logging
    """
    if not url:
        return ""

    # Pattern: https://discord.com/api/webhooks/{id}/{token}
    match = re.match(r"(https?://[^/]+/api/webhooks/\d+/)(.+)", url)
    if match:
        return f"{match.group(1)}[REDACTED]"

    return "[REDACTED_WEBHOOK_URL]"


def sanitize_token_from_text(text: str, webhook_url: str) -> str:
    """
    Remove every occurrence of the webhook URL and its token from a text.

    Args:
        text: Text that may echo the webhook (response body, exception message)
        webhook_url: The webhook URL whose token must not leak

    Returns:
        The text with the URL and token replaced by [REDACTED]
    """
    if not text or not webhook_url:
        return text

    sanitized = text.replace(webhook_url, sanitize_webhook_for_logging(webhook_url))

    match = re.match(r"https?://[^/]+/api/webhooks/\d+/([^/?#]+)", webhook_url)
    if match:
        sanitized = sanitized.replace(match.group(1), "[REDACTED]")

    return sanitized


class DiscordWebhookClient:
    """
    Client for verifying a webhook and sending one payload to it.

    No retries and no rate-limit handling: one probe, one send.
    """

    def __init__(self, webhook_url: str, timeout: Optional[Tuple[float, float]] = None):
        """
        Initialize the Discord webhook client.

        Args:
            webhook_url: The Discord webhook URL
            timeout: (connect, read) timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout or DEFAULT_TIMEOUT

    def validate(self) -> Tuple[bool, str]:
        """Validate the webhook URL shape."""
        return validate_webhook_url(self.webhook_url)

    def probe(self) -> int:
        """
        Send a HEAD request to the webhook.

        Returns:
            The HTTP status code

        Raises:
            WebhookError: If the request cannot be made
        """
        try:
            response = requests.head(self.webhook_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug(f"Probe error: {sanitize_token_from_text(str(e), self.webhook_url)}")
            raise WebhookError("Invalid webhook url", code=2) from e
        return response.status_code

    def verify(self) -> None:
        """
        Check the URL shape, then probe it.

        Only an exact 200 counts as a valid webhook.

        Raises:
            WebhookError: If the URL is malformed or the probe fails
        """
        is_valid, message = self.validate()
        if not is_valid:
            raise WebhookError(message, code=1)

        status = self.probe()
        logger.debug(f"Probe of {sanitize_webhook_for_logging(self.webhook_url)} returned {status}")
        if status != 200:
            raise WebhookError("Invalid webhook url", code=2)

    def send(self, payload: Payload) -> requests.Response:
        """
        POST a payload to the webhook.

        Args:
            payload: Built file or text payload

        Returns:
            The response object of a 2xx request

        Raises:
            SendError: On a transport error or a non-2xx status
        """
        logger.info(
            f"Sending {describe_payload(payload)} as {payload.content_type} "
            f"to {sanitize_webhook_for_logging(self.webhook_url)}"
        )

        try:
            if payload.mode == MODE_FILE:
                response = requests.post(
                    self.webhook_url,
                    files=payload.files,
                    timeout=self.timeout
                )
            else:
                response = requests.post(
                    self.webhook_url,
                    json=payload.json_body,
                    timeout=self.timeout
                )
        except requests.exceptions.Timeout as e:
            raise SendError("Request timed out") from e
        except requests.exceptions.RequestException as e:
            raise SendError(f"Request failed: {sanitize_token_from_text(str(e), self.webhook_url)}") from e

        if not 200 <= response.status_code < 300:
            logger.debug(f"Response body: {sanitize_token_from_text(response.text[:500], self.webhook_url)}")
            raise SendError(f"Request failed with response: {response.status_code}")

        logger.info(f"Discord accepted the message ({response.status_code})")
        return response

"""Tests for discord_notify/webhook_client.py with mocked network responses."""

import unittest
from unittest.mock import MagicMock, patch

import requests

from discord_notify.errors import EXIT_INVALID_WEBHOOK, EXIT_SEND_FAILED, SendError, WebhookError
from discord_notify.message_builder import MODE_FILE, MODE_TEXT, Payload
from discord_notify.webhook_client import (
    DiscordWebhookClient,
    sanitize_token_from_text,
    sanitize_webhook_for_logging,
    validate_webhook_url,
)

WEBHOOK_URL = "https://discord.com/api/webhooks/123456789/SuperSecretToken123"


def make_response(status_code, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


class TestValidateWebhookUrl(unittest.TestCase):
    """Test validate_webhook_url function."""

    def test_valid_url(self):
        self.assertTrue(validate_webhook_url(WEBHOOK_URL)[0])
        self.assertTrue(validate_webhook_url("https://discord.com/api/webhooks/1/a_b-C")[0])

    def test_empty_url(self):
        self.assertEqual(validate_webhook_url(""), (False, "Webhook URL is empty"))

    def test_rejected_shapes(self):
        rejected = [
            "http://discord.com/api/webhooks/123/abc",
            "https://discordapp.com/api/webhooks/123/abc",
            "https://discord.com/api/webhooks/abc/abc",
            "https://discord.com/api/webhooks/123/abc/",
            "https://discord.com/api/webhooks/123/",
            "https://example.com/api/webhooks/123/abc",
        ]
        for url in rejected:
            with self.subTest(url=url):
                self.assertEqual(validate_webhook_url(url), (False, "Invalid webhook url"))


class TestSanitize(unittest.TestCase):
    """Webhook tokens must never reach logs or error messages."""

    def test_sanitize_webhook_for_logging(self):
        self.assertEqual(
            sanitize_webhook_for_logging(WEBHOOK_URL),
            "https://discord.com/api/webhooks/123456789/[REDACTED]",
        )
        self.assertEqual(sanitize_webhook_for_logging("not a webhook"), "[REDACTED_WEBHOOK_URL]")
        self.assertEqual(sanitize_webhook_for_logging(""), "")

    def test_sanitize_token_from_text(self):
        text = f"URL: {WEBHOOK_URL}, token SuperSecretToken123 again"
        sanitized = sanitize_token_from_text(text, WEBHOOK_URL)
        self.assertNotIn("SuperSecretToken123", sanitized)
        self.assertEqual(sanitized.count("[REDACTED]"), 2)


class TestVerify(unittest.TestCase):
    """Test the shape check and HEAD probe."""

    @patch("discord_notify.webhook_client.requests.head")
    def test_probe_200_accepted(self, mock_head):
        mock_head.return_value = make_response(200)
        client = DiscordWebhookClient(WEBHOOK_URL, timeout=(1.0, 2.0))

        client.verify()

        mock_head.assert_called_once_with(WEBHOOK_URL, timeout=(1.0, 2.0))

    @patch("discord_notify.webhook_client.requests.head")
    def test_probe_404_rejected(self, mock_head):
        mock_head.return_value = make_response(404)

        with self.assertRaises(WebhookError) as cm:
            DiscordWebhookClient(WEBHOOK_URL).verify()

        self.assertEqual(cm.exception.exit_code, EXIT_INVALID_WEBHOOK)
        self.assertEqual(cm.exception.message, "Invalid webhook url")

    @patch("discord_notify.webhook_client.requests.head")
    def test_probe_204_rejected(self, mock_head):
        """Only an exact 200 passes the probe."""
        mock_head.return_value = make_response(204)

        with self.assertRaises(WebhookError):
            DiscordWebhookClient(WEBHOOK_URL).verify()

    @patch("discord_notify.webhook_client.requests.head")
    def test_malformed_url_never_probed(self, mock_head):
        with self.assertRaises(WebhookError) as cm:
            DiscordWebhookClient("https://example.com/hook").verify()

        self.assertEqual(cm.exception.code, 1)
        mock_head.assert_not_called()

    @patch("discord_notify.webhook_client.requests.head")
    def test_probe_network_error(self, mock_head):
        mock_head.side_effect = requests.exceptions.ConnectionError(f"cannot reach {WEBHOOK_URL}")

        with self.assertRaises(WebhookError) as cm:
            DiscordWebhookClient(WEBHOOK_URL).verify()

        self.assertNotIn("SuperSecretToken123", cm.exception.message)

    def test_default_timeout(self):
        self.assertEqual(DiscordWebhookClient(WEBHOOK_URL).timeout, (10.0, 30.0))


class TestSend(unittest.TestCase):
    """Test the dispatcher."""

    def setUp(self):
        self.client = DiscordWebhookClient(WEBHOOK_URL, timeout=(1.0, 2.0))
        self.text_payload = Payload(mode=MODE_TEXT, json_body={"content": "hello"})
        self.file_payload = Payload(
            mode=MODE_FILE,
            files={"file": ("report.txt", b"data", "text/plain")},
        )

    @patch("discord_notify.webhook_client.requests.post")
    def test_text_payload_sent_as_json(self, mock_post):
        mock_post.return_value = make_response(204)

        response = self.client.send(self.text_payload)

        self.assertEqual(response.status_code, 204)
        mock_post.assert_called_once_with(WEBHOOK_URL, json={"content": "hello"}, timeout=(1.0, 2.0))

    @patch("discord_notify.webhook_client.requests.post")
    def test_file_payload_sent_as_multipart(self, mock_post):
        mock_post.return_value = make_response(200)

        self.client.send(self.file_payload)

        mock_post.assert_called_once_with(
            WEBHOOK_URL,
            files={"file": ("report.txt", b"data", "text/plain")},
            timeout=(1.0, 2.0),
        )

    @patch("discord_notify.webhook_client.requests.post")
    def test_send_logs_content_type_without_token(self, mock_post):
        mock_post.return_value = make_response(204)

        with self.assertLogs("discord_notify.webhook_client", level="INFO") as cm:
            self.client.send(self.text_payload)

        self.assertIn("as application/json", cm.output[0])
        self.assertNotIn("SuperSecretToken123", "\n".join(cm.output))

    @patch("discord_notify.webhook_client.requests.post")
    def test_any_2xx_is_success(self, mock_post):
        for status in (200, 201, 204, 299):
            with self.subTest(status=status):
                mock_post.return_value = make_response(status)
                self.assertEqual(self.client.send(self.text_payload).status_code, status)

    @patch("discord_notify.webhook_client.requests.post")
    def test_non_2xx_fails_with_status(self, mock_post):
        for status in (199, 301, 400, 429, 500):
            with self.subTest(status=status):
                mock_post.return_value = make_response(status, text=f"echo {WEBHOOK_URL}")
                with self.assertRaises(SendError) as cm:
                    self.client.send(self.text_payload)
                self.assertEqual(cm.exception.exit_code, EXIT_SEND_FAILED)
                self.assertEqual(cm.exception.message, f"Request failed with response: {status}")

    @patch("discord_notify.webhook_client.requests.post")
    def test_no_retry(self, mock_post):
        mock_post.return_value = make_response(500)

        with self.assertRaises(SendError):
            self.client.send(self.text_payload)

        self.assertEqual(mock_post.call_count, 1)

    @patch("discord_notify.webhook_client.requests.post")
    def test_network_error_does_not_leak_token(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError(f"Max retries exceeded with url: {WEBHOOK_URL}")

        with self.assertRaises(SendError) as cm:
            self.client.send(self.text_payload)

        self.assertNotIn("SuperSecretToken123", cm.exception.message)
        self.assertIn("[REDACTED]", cm.exception.message)

    @patch("discord_notify.webhook_client.requests.post")
    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.exceptions.ReadTimeout("slow")

        with self.assertRaises(SendError) as cm:
            self.client.send(self.text_payload)

        self.assertEqual(cm.exception.message, "Request timed out")


if __name__ == "__main__":
    unittest.main()

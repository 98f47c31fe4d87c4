"""
discord-notify

Send a message, an embed or a file to a Discord channel through a webhook.
Organized into modules:
- cli: option parsing and the send pipeline
- resolver: webhook url lookup (flag, file, home file, environment)
- webhook_client: webhook verification and dispatch
- message_builder: JSON and multipart payloads
- validators: per-field input rules

Nothing third-party is imported here so the dependency check in __main__ can
run first.
"""

__version__ = "1.0.0"

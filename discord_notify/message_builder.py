"""
Discord payload building for discord-notify

Builds either a JSON text/embed payload or a multipart file payload from the
validated options.
"""

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .config import NotificationOptions


MODE_TEXT = "text"
MODE_FILE = "file"

CONTENT_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".json": "application/json",
    ".txt": "text/plain",
    ".log": "text/plain",
    ".csv": "text/csv",
    ".pdf": "application/pdf",
    ".zip": "application/zip",
}


@dataclass
class Payload:
    """A request body ready for the dispatcher."""
    mode: str
    json_body: Optional[Dict[str, Any]] = None
    files: Optional[Dict[str, Tuple[str, bytes, str]]] = None

    @property
    def content_type(self) -> str:
        if self.mode == MODE_FILE:
            return "multipart/form-data"
        return "application/json"


class EmbedBuilder:
    """Collects embed fields; the embed only exists once a title or description is added."""

    def __init__(self):
        self._embed: Optional[Dict[str, Any]] = None

    @property
    def is_open(self) -> bool:
        return self._embed is not None

    def add(self, key: str, value: Any) -> "EmbedBuilder":
        if self._embed is None:
            self._embed = {}
        self._embed[key] = value
        return self

    def set_color(self, color: Optional[int]) -> "EmbedBuilder":
        # Color never opens an embed on its own
        if self.is_open and color is not None:
            self._embed["color"] = str(color)
        return self

    def build(self) -> Optional[Dict[str, Any]]:
        return self._embed


def build_text_payload(options: NotificationOptions) -> Dict[str, Any]:
    """
    Build the JSON body for a text message.

    Keys are emitted in the order content, username, avatar_url, embeds and
    only for fields that are set.

    Args:
        options: Validated notification options

    Returns:
        Dictionary ready for json serialization
    """
    payload: Dict[str, Any] = {}

    if options.message:
        payload["content"] = options.message

    if options.username:
        payload["username"] = options.username

    if options.avatar_url:
        payload["avatar_url"] = options.avatar_url

    embed = EmbedBuilder()
    if options.title:
        embed.add("title", options.title)
    if options.description:
        embed.add("description", options.description)
    embed.set_color(options.color)

    if embed.is_open:
        payload["embeds"] = [embed.build()]

    return payload


def serialize_text_payload(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False)


def get_content_type(filename: str) -> str:
    """Get content type based on file extension."""
    ext = os.path.splitext(filename)[1].lower()
    return CONTENT_TYPES.get(ext, "application/octet-stream")


def build_file_payload(file_path: str) -> Dict[str, Tuple[str, bytes, str]]:
    """
    Build the multipart body for a file upload.

    Args:
        file_path: Path to an existing, readable file

    Returns:
        requests-style files mapping with a single "file" field
    """
    filename = os.path.basename(file_path)
    with open(file_path, "rb") as f:
        data = f.read()
    return {"file": (filename, data, get_content_type(filename))}


def select_payload(options: NotificationOptions) -> Payload:
    """
    Pick file or text mode and build the matching payload.

    A file path wins: message, title and description are ignored in file mode.
    """
    if options.is_file_mode():
        return Payload(mode=MODE_FILE, files=build_file_payload(options.file_path))
    return Payload(mode=MODE_TEXT, json_body=build_text_payload(options))


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "256 KB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} bytes"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.2f} GB"


def describe_payload(payload: Payload) -> str:
    """One-line summary of a payload for logging."""
    if payload.mode == MODE_FILE:
        filename, data, content_type = payload.files["file"]
        return f"File: {filename} ({format_file_size(len(data))}) [{content_type}]"
    keys = ", ".join(payload.json_body.keys())
    size = len(serialize_text_payload(payload.json_body).encode("utf-8"))
    return f"JSON payload ({size} bytes) with keys: {keys}"

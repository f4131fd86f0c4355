# gmail_bridge/message_body.py
"""Turn a Gmail `format=full` payload tree into readable plain text."""
import base64
import logging
import re

LOGGER = logging.getLogger(__name__)

NO_READABLE_TEXT = "(No readable text found in email)"
UNDECODABLE_CONTENT = "(Unable to decode email content)"
NO_SUBJECT = "(No Subject)"
UNKNOWN_SENDER = "(Unknown Sender)"

_STYLE_BLOCK = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_SCRIPT_BLOCK = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]*>?")
_WHITESPACE = re.compile(r"\s")


def decode_inline_data(encoded) -> str:
    """Decode a base64url `body.data` blob. Never raises."""
    if not encoded:
        return ""

    data = _WHITESPACE.sub("", encoded).replace("-", "+").replace("_", "/")
    data += "=" * ((4 - len(data) % 4) % 4)

    try:
        raw = base64.b64decode(data, validate=True)
    except ValueError as e:
        LOGGER.warning("Base64 decoding failed: %s", e)
        return UNDECODABLE_CONTENT
    return raw.decode("utf-8", errors="replace")


def strip_html(html: str) -> str:
    """Drop style/script blocks, then swap every remaining tag for a space."""
    text = _STYLE_BLOCK.sub("", html)
    text = _SCRIPT_BLOCK.sub("", text)
    return _ANY_TAG.sub(" ", text)


def _inline_data(part):
    return (part.get("body") or {}).get("data")


def find_part(parts, mime_type: str):
    """
    Depth-first search for the first part of `mime_type` that carries inline data.
    Siblings are visited in order; a matching part without data is skipped.
    """
    for part in parts or []:
        if part.get("mimeType") == mime_type and _inline_data(part):
            return part
        found = find_part(part.get("parts"), mime_type)
        if found:
            return found
    return None


def resolve_body(payload, snippet=None) -> str:
    """
    Best plain-text rendition of a message payload.

    Order: inline text/plain, nested text/plain, inline text/html (stripped),
    nested text/html (stripped), snippet, then NO_READABLE_TEXT.
    """
    if payload is None:
        return snippet or ""

    if payload.get("mimeType") == "text/plain" and _inline_data(payload):
        return decode_inline_data(_inline_data(payload))

    plain_part = find_part(payload.get("parts"), "text/plain")
    if plain_part:
        return decode_inline_data(_inline_data(plain_part))

    if payload.get("mimeType") == "text/html" and _inline_data(payload):
        return strip_html(decode_inline_data(_inline_data(payload)))

    html_part = find_part(payload.get("parts"), "text/html")
    if html_part:
        return strip_html(decode_inline_data(_inline_data(html_part)))

    return snippet or NO_READABLE_TEXT


def get_header(headers, name: str, default: str = "") -> str:
    """Value of the first header called `name` (case-insensitive), else `default`."""
    wanted = name.lower()
    for header in headers or []:
        if (header.get("name") or "").lower() == wanted:
            return header.get("value", "")
    return default

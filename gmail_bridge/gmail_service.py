# gmail_bridge/gmail_service.py
import json
import logging

import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .message_body import NO_SUBJECT, UNKNOWN_SENDER, get_header, resolve_body

LOGGER = logging.getLogger(__name__)

UNREAD_INBOX_QUERY = "is:unread label:INBOX"


class GmailListError(Exception):
    """The messages.list call failed; carries the upstream status and body."""

    def __init__(self, status: int, message: str, raw: str):
        super().__init__(message)
        self.status = status
        self.message = message
        self.raw = raw


class GmailFetchError(Exception):
    pass


def get_gmail_service(access_token: str):
    """
    Build a Gmail API client from a user's OAuth access token.
    A bare token cannot be refreshed, so a 401 is surfaced as an HttpError.
    """
    creds = Credentials(token=access_token)
    http = AuthorizedHttp(creds, http=httplib2.Http(), refresh_status_codes=())
    return build("gmail", "v1", http=http, cache_discovery=False)


def describe_http_error(error: HttpError) -> str:
    status = error.resp.status
    raw = http_error_text(error)
    try:
        details = json.loads(raw)
    except ValueError:
        if len(raw) < 200:
            return f"Google API Error: {raw}"
    else:
        message = details.get("error") if isinstance(details, dict) else None
        if isinstance(message, dict) and message.get("message"):
            return f"Google API Error: {message['message']}"
    return f"Google API Error ({status}): {error.resp.reason}"


def http_error_text(error: HttpError) -> str:
    content = error.content or b""
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


def fetch_latest_unread(service):
    """Return the newest unread INBOX message in `format=full`, or None."""
    try:
        results = service.users().messages().list(
            userId="me", q=UNREAD_INBOX_QUERY, maxResults=1
        ).execute()
    except HttpError as e:
        detail = describe_http_error(e)
        LOGGER.error("❌ Gmail list failed (%s): %s", e.resp.status, detail)
        raise GmailListError(e.resp.status, detail, http_error_text(e)) from e

    messages = results.get("messages", [])
    if not messages:
        LOGGER.info("No unread emails found")
        return None

    msg_id = messages[0]["id"]
    try:
        return service.users().messages().get(userId="me", id=msg_id, format="full").execute()
    except HttpError as e:
        raise GmailFetchError(f"Gmail Get API failed: {http_error_text(e)}") from e


def summarize_message(message: dict) -> dict:
    """Reduce a full Gmail message to id, subject, sender and readable body."""
    payload = message.get("payload") or {}
    headers = payload.get("headers", [])

    return {
        "id": message.get("id"),
        "subject": get_header(headers, "Subject", NO_SUBJECT),
        "from": get_header(headers, "From", UNKNOWN_SENDER),
        "body": resolve_body(message.get("payload"), message.get("snippet")),
    }


def sync_latest_unread(access_token: str):
    """Fetch and summarize the newest unread message for the token's owner."""
    service = get_gmail_service(access_token)
    message = fetch_latest_unread(service)
    if message is None:
        return None

    summary = summarize_message(message)
    LOGGER.info("✅ Fetched latest unread message %s", summary["id"])
    return summary

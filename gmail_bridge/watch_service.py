# gmail_bridge/watch_service.py
import logging

from google.auth.exceptions import RefreshError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .config import GMAIL_MODIFY_SCOPE, WATCHED_LABEL_IDS, WatchSettings, load_watch_settings
from .gmail_service import http_error_text

LOGGER = logging.getLogger(__name__)


class WatchError(Exception):
    pass


def format_private_key(key: str) -> str:
    """PEM keys pasted into env vars often arrive with literal '\\n' sequences."""
    return key.replace("\\n", "\n")


def build_service_account_credentials(info: dict, subject=None):
    """
    Service-account credentials for the Gmail modify scope.
    google-auth signs the RS256 assertion and exchanges it for an access token on first use.
    """
    info = dict(info, private_key=format_private_key(info["private_key"]))
    creds = service_account.Credentials.from_service_account_info(info, scopes=[GMAIL_MODIFY_SCOPE])
    if subject:
        creds = creds.with_subject(subject)
    return creds


def get_gmail_service(settings: WatchSettings):
    creds = build_service_account_credentials(settings.service_account_info, settings.delegated_user)
    return build("gmail", "v1", credentials=creds, cache_discovery=False)


def register_watch(settings: WatchSettings = None) -> dict:
    """Point Gmail push notifications for the INBOX at the configured Pub/Sub topic."""
    settings = settings or load_watch_settings()
    service = get_gmail_service(settings)
    request_body = {
        "labelIds": WATCHED_LABEL_IDS,
        "topicName": settings.topic_path,
    }

    try:
        watch = service.users().watch(userId="me", body=request_body).execute()
    except RefreshError as e:
        raise WatchError(f"Failed to get access token: {e}") from e
    except HttpError as e:
        raise WatchError(f"Gmail API watch request failed: {http_error_text(e)}") from e

    LOGGER.info("✅ Gmail watch registered on %s", settings.topic_path)
    LOGGER.info("History ID: %s", watch.get("historyId"))
    return watch

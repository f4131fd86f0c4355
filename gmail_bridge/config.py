# gmail_bridge/config.py
import json
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

GMAIL_MODIFY_SCOPE = "https://www.googleapis.com/auth/gmail.modify"
WATCHED_LABEL_IDS = ["INBOX"]

CORS_ALLOW_ORIGINS = ["*"]
CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


@dataclass
class WatchSettings:
    service_account_info: dict
    project_id: str
    pubsub_topic: str
    delegated_user: Optional[str] = None

    @property
    def topic_path(self) -> str:
        return f"projects/{self.project_id}/topics/{self.pubsub_topic}"


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO")


def get_service_account_info() -> dict:
    """Parse the service-account key stored in GOOGLE_SERVICE_ACCOUNT_JSON."""
    raw = os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON")
    if not raw:
        raise ValueError("GOOGLE_SERVICE_ACCOUNT_JSON is not set.")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON: {e}") from e


def load_watch_settings() -> WatchSettings:
    """Read everything the watch registration needs, failing on the first gap."""
    info = get_service_account_info()
    pubsub_topic = os.getenv("GCP_PUBSUB_TOPIC_NAME")

    if not info.get("private_key") or not info.get("client_email") or not info.get("project_id") or not pubsub_topic:
        raise ValueError("Missing required environment variables from service account or pubsub topic.")

    return WatchSettings(
        service_account_info=info,
        project_id=info["project_id"],
        pubsub_topic=pubsub_topic,
        delegated_user=os.getenv("GMAIL_DELEGATED_USER") or None,
    )

import base64
from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError


def b64url(text) -> str:
    raw = text.encode("utf-8") if isinstance(text, str) else text
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def make_http_error(status: int, content: bytes, reason: str = "Error") -> HttpError:
    resp = httplib2.Response({"status": status})
    resp.reason = reason
    return HttpError(resp, content)


@pytest.fixture
def gmail_client():
    """MagicMock standing in for googleapiclient's Gmail resource chain."""
    return MagicMock()

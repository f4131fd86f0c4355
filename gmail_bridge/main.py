import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .config import CORS_ALLOW_HEADERS, CORS_ALLOW_ORIGINS
from .gmail_service import GmailListError, sync_latest_unread
from .logging_config import configure_logging
from .watch_service import register_watch

configure_logging()
LOGGER = logging.getLogger(__name__)

app = FastAPI(title="Gmail Bridge")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=CORS_ALLOW_HEADERS,
)


def _error(message: str, status_code: int = 500, **extra) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.api_route("/start-gmail-watch", methods=["GET", "POST"])
async def start_gmail_watch():
    """Register (or refresh) the Gmail INBOX watch using the service account."""
    try:
        watch = await run_in_threadpool(register_watch)
    except Exception as e:
        LOGGER.error("🔥 Error in Gmail Watch function: %s", e)
        return _error(str(e))
    return {"success": True, "data": watch}


@app.post("/gmail-sync")
async def gmail_sync(request: Request):
    """Return the newest unread INBOX message for the caller's access token."""
    try:
        data = await request.json()
        access_token = data.get("accessToken") if isinstance(data, dict) else None
        if not access_token:
            return _error("Missing Google Access Token.", status_code=400)

        email = await run_in_threadpool(sync_latest_unread, access_token)
    except GmailListError as e:
        return _error(e.message, status_code=e.status, raw=e.raw)
    except Exception as e:
        LOGGER.error("🔥 Error in Gmail Sync function: %s", e)
        return _error(str(e))

    if email is None:
        return {"found": False, "message": "No unread emails found."}
    return {"found": True, "email": email}

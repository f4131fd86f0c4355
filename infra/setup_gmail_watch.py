# === setup_gmail_watch.py ===
# Registers the INBOX watch directly, without going through the HTTP service.
# Gmail expires watches after 7 days; rerun (or hit /start-gmail-watch) to renew.
from gmail_bridge.logging_config import configure_logging
from gmail_bridge.watch_service import register_watch


def main():
    configure_logging()
    watch = register_watch()
    print("✅ Gmail watch registered")
    print("History ID:", watch.get("historyId"))
    print("Expires:", watch.get("expiration"))
    return watch


if __name__ == "__main__":
    main()

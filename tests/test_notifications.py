import json

import httpx
import respx

from invoice_form.core.config import settings
from invoice_form.services.notifications import (
    LoggingNotifier,
    Notification,
    RecordingNotifier,
    TeamsWebhookNotifier,
    get_notifier,
)


WARNING = Notification(type="warning", title="Invalid Price", message="Item price must be greater than zero.")


def test_recording_notifier_keeps_order():
    notifier = RecordingNotifier()
    assert notifier.last is None

    notifier.notify(WARNING)
    notifier.notify(Notification(title="Tax Required", message="Tax amount must be greater than zero."))

    assert len(notifier.notifications) == 2
    assert notifier.last.title == "Tax Required"


def test_teams_skips_without_webhook():
    notifier = TeamsWebhookNotifier(webhook_url="")
    notifier.notify(WARNING)
    assert notifier.last_result["status"] == "skipped"


@respx.mock
def test_teams_posts_adaptive_card():
    route = respx.post("https://example.com/webhook").mock(return_value=httpx.Response(200))
    notifier = TeamsWebhookNotifier(webhook_url="https://example.com/webhook")

    notifier.notify(WARNING)

    assert notifier.last_result == {"status": "sent", "http_status": 200}
    card = json.loads(route.calls.last.request.content)
    body = card["attachments"][0]["content"]["body"]
    assert body[0]["text"] == "Invalid Price"
    assert body[1]["text"] == "Item price must be greater than zero."


@respx.mock
def test_teams_transport_error_is_not_raised():
    respx.post("https://example.com/webhook").mock(side_effect=httpx.ConnectError("boom"))
    notifier = TeamsWebhookNotifier(webhook_url="https://example.com/webhook")

    notifier.notify(WARNING)

    assert notifier.last_result["status"] == "failed"


def test_get_notifier_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "teams_webhook_url", None)
    assert isinstance(get_notifier(), LoggingNotifier)

    monkeypatch.setattr(settings, "teams_webhook_url", "https://example.com/webhook")
    notifier = get_notifier()
    assert isinstance(notifier, TeamsWebhookNotifier)
    assert notifier.webhook_url == "https://example.com/webhook"


def test_logging_notifier_does_not_raise():
    LoggingNotifier().notify(WARNING)

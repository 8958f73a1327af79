"""
Notification sinks for validation failures.

The validator hands every failure to exactly one sink. Rendering the warning
(desktop dialog, web toast, Teams message) is up to the sink.
"""

import json
from abc import ABC, abstractmethod
from typing import Literal

import httpx
from loguru import logger
from pydantic import BaseModel

from ..core.config import settings


class Notification(BaseModel):
    type: Literal["warning"] = "warning"
    title: str
    message: str


class NotificationSink(ABC):
    """
    Abstract base class for validation notification sinks.

    Implementations must not raise: a sink that cannot deliver should log and
    return, so the validation result is never affected by delivery.
    """

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        pass


class RecordingNotifier(NotificationSink):
    """Keeps notifications in memory (HTTP responses and tests)"""

    def __init__(self):
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None


class LoggingNotifier(NotificationSink):
    def notify(self, notification: Notification) -> None:
        logger.warning(
            "Validation warning",
            title=notification.title,
            message=notification.message,
        )


# Lightweight warning card for a Teams Incoming Webhook.
ADAPTIVE_CARD_TEMPLATE = {
    "type": "message",
    "attachments": [{
        "contentType": "application/vnd.microsoft.card.adaptive",
        "content": {
            "$schema": "http://adaptivecards.io/schemas/adaptive-card.json",
            "type": "AdaptiveCard",
            "version": "1.4",
            "body": [
                {"type": "TextBlock", "weight": "Bolder", "size": "Medium", "color": "Warning", "text": ""},
                {"type": "TextBlock", "wrap": True, "text": ""}
            ]
        }
    }]
}


class TeamsWebhookNotifier(NotificationSink):
    def __init__(self, webhook_url: str | None = None, timeout: float = 10):
        self.webhook_url = webhook_url if webhook_url is not None else settings.teams_webhook_url
        self.timeout = timeout
        self.last_result: dict | None = None

    def build_card(self, notification: Notification) -> dict:
        card = json.loads(json.dumps(ADAPTIVE_CARD_TEMPLATE))
        body = card["attachments"][0]["content"]["body"]
        body[0]["text"] = notification.title
        body[1]["text"] = notification.message
        return card

    def post(self, notification: Notification) -> dict:
        if not self.webhook_url:
            return {"status": "skipped", "reason": "TEAMS_WEBHOOK_URL not set"}

        with httpx.Client(timeout=self.timeout) as client:
            r = client.post(self.webhook_url, json=self.build_card(notification))
            return {"status": "sent", "http_status": r.status_code}

    def notify(self, notification: Notification) -> None:
        try:
            self.last_result = self.post(notification)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to post validation warning to Teams: {e}")
            self.last_result = {"status": "failed", "reason": str(e)}


def get_notifier() -> NotificationSink:
    """Teams when a webhook is configured, otherwise the log."""
    if settings.teams_webhook_url:
        return TeamsWebhookNotifier(settings.teams_webhook_url)
    return LoggingNotifier()

"""
String lookup for validation dialog copy.

Keys follow ``dialog:validation:<section>:<reason>:title|message``. Unknown
keys resolve to themselves so a missing translation is visible in the UI
instead of failing the request.
"""

import json
from pathlib import Path

from loguru import logger

from ..core.config import settings


CATALOG: dict[str, dict[str, str]] = {
    "en": {
        "dialog:validation:recipient:empty:title": "Recipient Required",
        "dialog:validation:recipient:empty:message": "Please select an existing contact or enter the details of a new one.",
        "dialog:validation:recipient:requiredFields:title": "Missing Recipient Details",
        "dialog:validation:recipient:requiredFields:message": "Full name and email are required for a new contact.",
        "dialog:validation:recipient:email:title": "Invalid Email",
        "dialog:validation:recipient:email:message": "Please enter a valid email address for the recipient.",
        "dialog:validation:rows:noRows:title": "No Items",
        "dialog:validation:rows:noRows:message": "An invoice needs at least one item.",
        "dialog:validation:rows:emptyDescription:title": "Missing Description",
        "dialog:validation:rows:emptyDescription:message": "Every item needs a description.",
        "dialog:validation:rows:priceZero:title": "Invalid Price",
        "dialog:validation:rows:priceZero:message": "Item price must be greater than zero.",
        "dialog:validation:rows:qtyZero:title": "Invalid Quantity",
        "dialog:validation:rows:qtyZero:message": "Item quantity must be greater than zero.",
        "dialog:validation:dueDate:selectedDate:title": "Due Date Required",
        "dialog:validation:dueDate:selectedDate:message": "Please pick a due date or disable it in the invoice settings.",
        "dialog:validation:currency:missing:title": "Currency Required",
        "dialog:validation:currency:missing:message": "Please choose a currency or disable it in the invoice settings.",
        "dialog:validation:discount:amount:title": "Discount Required",
        "dialog:validation:discount:amount:message": "Discount amount must be greater than zero.",
        "dialog:validation:tax:amount:title": "Tax Required",
        "dialog:validation:tax:amount:message": "Tax amount must be greater than zero.",
        "dialog:validation:note:content:title": "Note Required",
        "dialog:validation:note:content:message": "Please write a note or disable it in the invoice settings.",
    },
}


def load_overrides(path: str | None) -> dict[str, str]:
    """Read a JSON object of key -> text; an unreadable file yields no overrides."""
    if not path:
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not load message overrides", path=path, error=str(e))
        return {}
    if not isinstance(data, dict):
        logger.warning("Message overrides must be a JSON object", path=path)
        return {}
    return {str(k): str(v) for k, v in data.items()}


class StringLookup:
    def __init__(self, locale: str = "en", overrides: dict[str, str] | None = None):
        self.locale = locale
        self._strings = {**CATALOG.get("en", {}), **CATALOG.get(locale, {}), **(overrides or {})}

    def t(self, key: str) -> str:
        return self._strings.get(key, key)

    __call__ = t


def get_string_lookup() -> StringLookup:
    return StringLookup(settings.locale, load_overrides(settings.messages_file))

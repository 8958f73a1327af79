"""
Shared fixtures for the invoice form tests.

``form_data`` is a complete form that passes validation with every optional
section required; ``minimal_form_data`` requires none of them.
"""

import uuid
from unittest.mock import Mock

import pytest

from invoice_form.services.messages import StringLookup
from invoice_form.services.notifications import NotificationSink
from invoice_form.services.validation import FormValidator


ALL_REQUIRED = {
    "dueDate": True,
    "currency": True,
    "discount": True,
    "tax": True,
    "note": True,
}

NONE_REQUIRED = {key: False for key in ALL_REQUIRED}


@pytest.fixture
def form_data():
    return {
        "recipient": {
            "newRecipient": True,
            "select": {},
            "new": {
                "fullname": "Jane Cooper",
                "email": "jane.cooper@example.com",
                "company": "Cooper & Sons",
                "phone": "+1 555 0100",
            },
        },
        "rows": [
            {
                "id": str(uuid.uuid4()),
                "description": "Website redesign",
                "price": "1200.00",
                "quantity": 1,
            },
        ],
        "dueDate": {"selectedDate": "2025-12-31T00:00:00"},
        "currency": {"code": "USD", "symbol": "$"},
        "discount": {"type": "percentage", "amount": 10},
        "tax": {"amount": 10, "method": "reverse", "tin": "123-456-789"},
        "note": {"content": "Thanks for your business."},
        "settings": {"open": False, "required_fields": dict(ALL_REQUIRED)},
        "savedSettings": {
            "tax": {"amount": 10, "method": "reverse", "tin": "123-456-789"},
            "currency": "USD",
            "required_fields": dict(ALL_REQUIRED),
        },
    }


@pytest.fixture
def minimal_form_data():
    return {
        "recipient": {
            "newRecipient": True,
            "select": {
                "id": str(uuid.uuid4()),
                "fullname": "Acme Accounts",
                "email": "accounts@acme.example",
                "company": "Acme Corp",
                "phone": "+61 2 9000 0000",
            },
            "new": {
                "fullname": "John Smith",
                "email": "john.smith@example.com",
            },
        },
        "rows": [
            {"id": str(uuid.uuid4()), "description": "Consulting", "price": "150.00", "quantity": 8},
            {"id": str(uuid.uuid4()), "description": "Travel", "price": "80.50", "quantity": 2},
        ],
        "dueDate": {},
        "currency": {},
        "discount": {},
        "tax": {},
        "note": {},
        "settings": {"open": False, "required_fields": dict(NONE_REQUIRED)},
        "savedSettings": {
            "tax": {},
            "currency": "USD",
            "required_fields": dict(NONE_REQUIRED),
        },
    }


@pytest.fixture
def lookup():
    return StringLookup("en")


@pytest.fixture
def notifier():
    """Mock notification sink matching NotificationSink interface"""
    return Mock(spec=NotificationSink)


@pytest.fixture
def validator(notifier, lookup):
    return FormValidator(notifier=notifier, lookup=lookup)

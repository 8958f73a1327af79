"""
Validation gate for invoice form data.

Each section has a ``check_*`` function that returns the failure it found (or
``None``). ``FormValidator`` chains the checks in a fixed order, stops at the
first failure and reports it to a notification sink, so the user sees one
warning at a time: the most specific one for the first broken section.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable

from loguru import logger
from pydantic import BaseModel, TypeAdapter

from ..models.form import (
    ContactRecord,
    Currency,
    Discount,
    DueDate,
    FormState,
    Note,
    OPTIONAL_SECTIONS,
    RecipientState,
    Row,
    Section,
    Tax,
)
from .messages import StringLookup, get_string_lookup
from .notifications import Notification, NotificationSink, get_notifier


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class FailureReason(str, Enum):
    EMPTY_RECIPIENT = "empty"
    MISSING_REQUIRED_FIELD = "requiredFields"
    INVALID_EMAIL_FORMAT = "email"
    NO_ROWS = "noRows"
    EMPTY_DESCRIPTION = "emptyDescription"
    ZERO_PRICE = "priceZero"
    ZERO_QUANTITY = "qtyZero"
    MISSING_DUE_DATE = "selectedDate"
    MISSING_CURRENCY = "missing"
    ZERO_AMOUNT = "amount"
    EMPTY_CONTENT = "content"


@dataclass(frozen=True)
class ValidationFailure:
    section: Section
    reason: FailureReason
    row: int | None = None  # index of the offending row, rows section only

    @property
    def key(self) -> str:
        return f"{self.section.value}:{self.reason.value}"

    @property
    def title_key(self) -> str:
        return f"dialog:validation:{self.key}:title"

    @property
    def message_key(self) -> str:
        return f"dialog:validation:{self.key}:message"


Check = Callable[[], ValidationFailure | None]


def first_failure(checks: Iterable[Check]) -> ValidationFailure | None:
    """Run checks in order and return the first failure; later checks never run."""
    for check in checks:
        failure = check()
        if failure is not None:
            return failure
    return None


def _as_number(value: Any) -> float:
    """Numeric value of a form input; blanks, junk, NaN and infinities count as zero."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# ========== SECTION CHECKS ==========

def check_recipient(recipient: RecipientState) -> ValidationFailure | None:
    # A contact picked from the address book was validated when it was saved
    if not recipient.new_recipient:
        return None

    contact: ContactRecord = recipient.new
    if contact.is_empty():
        return ValidationFailure(Section.RECIPIENT, FailureReason.EMPTY_RECIPIENT)
    if _blank(contact.fullname) or _blank(contact.email):
        return ValidationFailure(Section.RECIPIENT, FailureReason.MISSING_REQUIRED_FIELD)
    if not EMAIL_PATTERN.match(contact.email.strip()):
        return ValidationFailure(Section.RECIPIENT, FailureReason.INVALID_EMAIL_FORMAT)
    return None


def check_rows(rows: list[Row]) -> ValidationFailure | None:
    if not rows:
        return ValidationFailure(Section.ROWS, FailureReason.NO_ROWS)

    for index, row in enumerate(rows):
        if _blank(row.description):
            return ValidationFailure(Section.ROWS, FailureReason.EMPTY_DESCRIPTION, index)
        if _as_number(row.price) <= 0:
            return ValidationFailure(Section.ROWS, FailureReason.ZERO_PRICE, index)
        if _as_number(row.quantity) <= 0:
            return ValidationFailure(Section.ROWS, FailureReason.ZERO_QUANTITY, index)
    return None


def check_due_date(required: bool, due_date: DueDate | None) -> ValidationFailure | None:
    if not required:
        return None
    if due_date is None or due_date.selected_date is None:
        return ValidationFailure(Section.DUE_DATE, FailureReason.MISSING_DUE_DATE)
    return None


def check_currency(required: bool, currency: Currency | None) -> ValidationFailure | None:
    # Presence only: code/symbol come from a picker and are not checked here
    if required and currency is None:
        return ValidationFailure(Section.CURRENCY, FailureReason.MISSING_CURRENCY)
    return None


def check_discount(required: bool, discount: Discount | None) -> ValidationFailure | None:
    if required and (discount is None or _as_number(discount.amount) <= 0):
        return ValidationFailure(Section.DISCOUNT, FailureReason.ZERO_AMOUNT)
    return None


def check_tax(required: bool, tax: Tax | None) -> ValidationFailure | None:
    if required and (tax is None or _as_number(tax.amount) <= 0):
        return ValidationFailure(Section.TAX, FailureReason.ZERO_AMOUNT)
    return None


def check_note(required: bool, note: Note | None) -> ValidationFailure | None:
    if required and (note is None or _blank(note.content)):
        return ValidationFailure(Section.NOTE, FailureReason.EMPTY_CONTENT)
    return None


GATED_CHECKS: dict[Section, Callable[[bool, Any], ValidationFailure | None]] = {
    Section.DUE_DATE: check_due_date,
    Section.CURRENCY: check_currency,
    Section.DISCOUNT: check_discount,
    Section.TAX: check_tax,
    Section.NOTE: check_note,
}


def check_form(form: FormState) -> ValidationFailure | None:
    """First failure across all sections, in dispatch order."""
    required = form.required_sections()
    checks: list[Check] = [
        lambda: check_recipient(form.recipient),
        lambda: check_rows(form.rows),
    ]
    for section in OPTIONAL_SECTIONS:
        checks.append(
            lambda section=section: GATED_CHECKS[section](required[section], form.section(section))
        )
    return first_failure(checks)


# ========== VALIDATOR ==========

_ROWS = TypeAdapter(list[Row])


def _coerce(model: type[BaseModel], value: Any) -> Any:
    """Parse raw section JSON into its model; models and None pass through."""
    if isinstance(value, dict):
        return model.model_validate(value)
    return value


class FormValidator:
    """
    Runs the section checks and reports the first failure.

    Every ``validate_*`` method returns a bool. On failure it sends exactly one
    warning notification whose title and message come from the string lookup;
    on success nothing is sent.

    The validator holds no per-call state, so one instance can be shared as
    long as its notifier can.
    """

    def __init__(self, notifier: NotificationSink | None = None, lookup: StringLookup | None = None):
        self.notifier = notifier or get_notifier()
        self.lookup = lookup or get_string_lookup()

    def notification_for(self, failure: ValidationFailure) -> Notification:
        return Notification(
            type="warning",
            title=self.lookup.t(failure.title_key),
            message=self.lookup.t(failure.message_key),
        )

    def _report(self, failure: ValidationFailure | None) -> bool:
        if failure is None:
            return True
        logger.info(
            "Form validation failed",
            section=failure.section.value,
            reason=failure.reason.value,
            row=failure.row,
        )
        self.notifier.notify(self.notification_for(failure))
        return False

    def run(self, form: FormState | dict) -> ValidationFailure | None:
        """Validate a whole form and return the reported failure, if any."""
        if isinstance(form, dict):
            form = FormState.model_validate(form)
        failure = check_form(form)
        if self._report(failure):
            logger.info("Form validation passed", rows=len(form.rows))
        return failure

    def validate_form_data(self, form: FormState | dict) -> bool:
        return self.run(form) is None

    def validate_recipient(self, recipient: RecipientState | dict) -> bool:
        return self._report(check_recipient(_coerce(RecipientState, recipient)))

    def validate_rows(self, rows: list[Row | dict]) -> bool:
        return self._report(check_rows(_ROWS.validate_python(rows or [])))

    def validate_due_date(self, required: bool, due_date: DueDate | dict | None) -> bool:
        return self._report(check_due_date(required, _coerce(DueDate, due_date)))

    def validate_currency(self, required: bool, currency: Currency | dict | None) -> bool:
        return self._report(check_currency(required, _coerce(Currency, currency)))

    def validate_discount(self, required: bool, discount: Discount | dict | None) -> bool:
        return self._report(check_discount(required, _coerce(Discount, discount)))

    def validate_tax(self, required: bool, tax: Tax | dict | None) -> bool:
        return self._report(check_tax(required, _coerce(Tax, tax)))

    def validate_note(self, required: bool, note: Note | dict | None) -> bool:
        return self._report(check_note(required, _coerce(Note, note)))


_default_validator: FormValidator | None = None


def get_form_validator() -> FormValidator:
    """
    Get the shared validator instance.

    Created on first use so settings (webhook URL, locale) are read after the
    application configured them.
    """
    global _default_validator
    if _default_validator is None:
        _default_validator = FormValidator()
    return _default_validator


def validate_form_data(form: FormState | dict) -> bool:
    return get_form_validator().validate_form_data(form)


def validate_recipient(recipient: RecipientState | dict) -> bool:
    return get_form_validator().validate_recipient(recipient)


def validate_rows(rows: list[Row | dict]) -> bool:
    return get_form_validator().validate_rows(rows)


def validate_due_date(required: bool, due_date: DueDate | dict | None) -> bool:
    return get_form_validator().validate_due_date(required, due_date)


def validate_currency(required: bool, currency: Currency | dict | None) -> bool:
    return get_form_validator().validate_currency(required, currency)


def validate_discount(required: bool, discount: Discount | dict | None) -> bool:
    return get_form_validator().validate_discount(required, discount)


def validate_tax(required: bool, tax: Tax | dict | None) -> bool:
    return get_form_validator().validate_tax(required, tax)


def validate_note(required: bool, note: Note | dict | None) -> bool:
    return get_form_validator().validate_note(required, note)

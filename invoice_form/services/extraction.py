"""
Reduce raw invoice form state to the payload handed to persistence/rendering.

Only call this for a form that already passed ``validate_form_data``; the
extractor does not re-validate, and its output for an invalid form is
undefined.
"""

from typing import Any

from loguru import logger

from ..models.form import (
    FormState,
    NewContact,
    OPTIONAL_SECTIONS,
    RecipientState,
    Section,
)


def _recipient_payload(recipient: RecipientState) -> dict[str, Any]:
    contact = recipient.contact()
    if isinstance(contact, NewContact):
        # company/phone are not asked for when a contact is typed in
        return {"fullname": contact.fullname, "email": contact.email}
    return {
        "fullname": contact.fullname,
        "email": contact.email,
        "company": contact.company,
        "phone": contact.phone,
        "id": contact.id,
    }


def _section_payload(form: FormState, section: Section) -> Any:
    value = form.section(section)
    if section is Section.DUE_DATE:
        return value.selected_date
    if section is Section.DISCOUNT:
        return {"type": value.type, "amount": value.amount}
    if section is Section.NOTE:
        return value.content
    # currency and tax pass through as entered
    return value.model_dump(by_alias=True, exclude_unset=True)


def get_invoice_data(form: FormState | dict) -> dict[str, Any]:
    """
    Build the invoice payload from a validated form.

    Args:
        form: FormState (or its raw JSON dict) that passed validation

    Returns:
        Dictionary with ``recipient`` and ``rows`` plus one key for every
        optional section marked required in ``settings.required_fields``.
        Sections that are not required are absent, never ``None``.
    """
    if isinstance(form, dict):
        form = FormState.model_validate(form)

    invoice: dict[str, Any] = {
        Section.RECIPIENT.value: _recipient_payload(form.recipient),
        Section.ROWS.value: [row.model_dump(exclude_unset=True) for row in form.rows],
    }

    required = form.required_sections()
    for section in OPTIONAL_SECTIONS:
        if required[section]:
            invoice[section.value] = _section_payload(form, section)

    logger.debug(
        "Invoice data extracted",
        sections=list(invoice),
        rows=len(form.rows),
        new_recipient=form.recipient.new_recipient,
    )
    return invoice

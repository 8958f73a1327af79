"""
Raw invoice form state as produced by the invoice editor UI.

The models mirror the editor's JSON (camelCase keys) and are deliberately
lenient: every section may be partially filled, and deciding whether that is
acceptable is the validator's job, not the parser's.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Section(str, Enum):
    """Logical groups of invoice data, in validation order."""
    RECIPIENT = "recipient"
    ROWS = "rows"
    DUE_DATE = "dueDate"
    CURRENCY = "currency"
    DISCOUNT = "discount"
    TAX = "tax"
    NOTE = "note"


# Sections controlled by settings.required_fields
OPTIONAL_SECTIONS = (
    Section.DUE_DATE,
    Section.CURRENCY,
    Section.DISCOUNT,
    Section.TAX,
    Section.NOTE,
)


class FormModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ContactRecord(FormModel):
    id: str | int | None = None
    fullname: str | None = None
    email: str | None = None
    company: str | None = None
    phone: str | None = None

    def is_empty(self) -> bool:
        """True when not a single field (known or extra) carries a value"""
        return all(
            value is None or (isinstance(value, str) and not value.strip())
            for value in self.model_dump().values()
        )


class NewContact(BaseModel):
    """Contact typed in by the user while creating the invoice"""
    kind: Literal["new"] = "new"
    fullname: str | None = None
    email: str | None = None
    company: str | None = None
    phone: str | None = None


class SelectedContact(BaseModel):
    """Existing contact picked from the address book"""
    kind: Literal["selected"] = "selected"
    id: str | int | None = None
    fullname: str | None = None
    email: str | None = None
    company: str | None = None
    phone: str | None = None


_CONTACT_FIELDS = {"id", "fullname", "email", "company", "phone"}


class RecipientState(FormModel):
    new_recipient: bool = Field(False, alias="newRecipient")
    select: ContactRecord = Field(default_factory=ContactRecord)
    new: ContactRecord = Field(default_factory=ContactRecord)

    def contact(self) -> NewContact | SelectedContact:
        """Return whichever sub-record is authoritative for this form."""
        if self.new_recipient:
            return NewContact(**self.new.model_dump(include=_CONTACT_FIELDS - {"id"}))
        return SelectedContact(**self.select.model_dump(include=_CONTACT_FIELDS))


class Row(FormModel):
    id: str | int | None = None
    description: str | None = None
    price: int | float | str | None = None  # editor sends numeric strings
    quantity: int | float | str | None = None


class DueDate(FormModel):
    # date, datetime, ISO string or a {date, months, years} mapping
    selected_date: Any = Field(None, alias="selectedDate")


class Currency(FormModel):
    code: str | None = None
    symbol: str | None = None


class Discount(FormModel):
    type: str | None = None  # "flat" or "percentage"; not enforced
    amount: int | float | str | None = None


class Tax(FormModel):
    amount: int | float | str | None = None
    method: str | None = None
    tin: str | None = None


class Note(FormModel):
    content: str | None = None


class RequiredFields(FormModel):
    due_date: bool = Field(False, alias="dueDate")
    currency: bool = False
    discount: bool = False
    tax: bool = False
    note: bool = False

    def as_map(self) -> dict[Section, bool]:
        """
        Section -> required lookup shared by extraction and validation.

        Recipient and rows are always mandatory and are not part of the map.
        """
        return {
            Section.DUE_DATE: self.due_date,
            Section.CURRENCY: self.currency,
            Section.DISCOUNT: self.discount,
            Section.TAX: self.tax,
            Section.NOTE: self.note,
        }


class FormSettings(FormModel):
    open: bool = False
    required_fields: RequiredFields = Field(default_factory=RequiredFields)


class SavedSettings(FormModel):
    """Persisted defaults snapshot; carried along but never validated"""
    tax: Tax | None = None
    currency: str | None = None
    required_fields: RequiredFields = Field(default_factory=RequiredFields)


class FormState(FormModel):
    recipient: RecipientState = Field(default_factory=RecipientState)
    rows: list[Row] = Field(default_factory=list)
    due_date: DueDate | None = Field(default_factory=DueDate, alias="dueDate")
    currency: Currency | None = None
    discount: Discount | None = Field(default_factory=Discount)
    tax: Tax | None = Field(default_factory=Tax)
    note: Note | None = Field(default_factory=Note)
    settings: FormSettings = Field(default_factory=FormSettings)
    saved_settings: SavedSettings | None = Field(None, alias="savedSettings")

    def required_sections(self) -> dict[Section, bool]:
        return self.settings.required_fields.as_map()

    def section(self, section: Section) -> Any:
        """Raw value of a section, looked up by its wire name."""
        return getattr(self, _SECTION_ATTRS[section])


_SECTION_ATTRS = {
    Section.RECIPIENT: "recipient",
    Section.ROWS: "rows",
    Section.DUE_DATE: "due_date",
    Section.CURRENCY: "currency",
    Section.DISCOUNT: "discount",
    Section.TAX: "tax",
    Section.NOTE: "note",
}

from fastapi import APIRouter, HTTPException
from loguru import logger
from pydantic import BaseModel
from ...models.form import FormState
from ...services.extraction import get_invoice_data
from ...services.notifications import Notification, RecordingNotifier
from ...services.validation import FormValidator

router = APIRouter(prefix="/invoices", tags=["invoices"])


class ValidateResponse(BaseModel):
    """Response from /invoices/validate endpoint"""
    valid: bool
    failure: str | None = None  # e.g. "rows:priceZero"
    notification: Notification | None = None


def _run_validation(form: FormState) -> ValidateResponse:
    # Fresh sink per request: concurrent submissions never see each other's warnings
    notifier = RecordingNotifier()
    validator = FormValidator(notifier=notifier)
    failure = validator.run(form)
    return ValidateResponse(
        valid=failure is None,
        failure=failure.key if failure else None,
        notification=notifier.last,
    )


@router.post("/validate", response_model=ValidateResponse)
async def validate_form(form: FormState):
    """
    Validate invoice form data before it is saved.

    Sections are checked in order (recipient, rows, dueDate, currency,
    discount, tax, note) and only the first failure is reported.

    Example response for a zero-priced item:
    {
        "valid": false,
        "failure": "rows:priceZero",
        "notification": {
            "type": "warning",
            "title": "Invalid Price",
            "message": "Item price must be greater than zero."
        }
    }
    """
    return _run_validation(form)


@router.post("/prepare")
async def prepare_invoice(form: FormState):
    """Validate the form and, if it passes, return the invoice payload to persist"""
    result = _run_validation(form)
    if not result.valid:
        raise HTTPException(
            status_code=422,
            detail={
                "failure": result.failure,
                "notification": result.notification.model_dump() if result.notification else None,
            },
        )

    invoice = get_invoice_data(form)
    logger.info("Invoice payload prepared", sections=list(invoice))
    return {"invoice": invoice}

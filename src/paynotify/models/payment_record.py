"""
Payment record model - one transaction row of the shared sheet.
"""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field

from paynotify.models.period import Period
from paynotify.models.status import StatusTag


class PaymentRecord(BaseModel):
    """A row of the payment data sheet."""

    row_number: int = Field(..., description="1-based sheet row number", ge=1)
    company_name: str = Field("", description="Recipient company")
    agent_name: str = Field("", description="Agent name")
    payment_month: Optional[date] = Field(
        None, description="Payment month, None when the cell is not a valid date"
    )
    raw_payment_month: Any = Field(None, description="Payment month cell as read")
    amount: Any = Field(None, description="Payment amount")
    bank_account: str = Field("", description="Bank account text")
    email: str = Field("", description="Recipient email address")
    check_value: Any = Field(None, description="Check column, zero/blank when ok")
    status: StatusTag = Field(StatusTag.BLANK, description="Workflow status tag")

    @property
    def has_valid_payment_month(self) -> bool:
        return self.payment_month is not None

    @property
    def period(self) -> Optional[Period]:
        if self.payment_month is None:
            return None
        return Period.from_date(self.payment_month)

    def with_status(self, status: StatusTag) -> "PaymentRecord":
        return self.model_copy(update={"status": status})

    def __str__(self) -> str:
        return f"row {self.row_number} ({self.company_name} / {self.agent_name})"

"""
Composition of the notification email for an approved record.
"""

import re
from typing import List

from paynotify.config import MailConfig
from paynotify.exceptions import InvalidRecipientError
from paynotify.models import PaymentRecord, Period
from paynotify.services.gmail import OutgoingMessage
from paynotify.utils import format_amount

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def split_addresses(value: str) -> List[str]:
    """Split a cell holding one or more addresses separated by , or ;"""
    if not value:
        return []
    parts = re.split(r"[,;]", value)
    return [part.strip() for part in parts if part.strip()]


def recipients_for(record: PaymentRecord) -> List[str]:
    addresses = split_addresses(record.email)
    if not addresses or not all(EMAIL_PATTERN.match(a) for a in addresses):
        raise InvalidRecipientError(record.row_number, record.email)
    return addresses


def compose_notification(
    record: PaymentRecord,
    period: Period,
    attachment_name: str,
    attachment: bytes,
    mail_config: MailConfig,
    currency_symbol: str = "¥",
) -> OutgoingMessage:
    fields = {
        "company": record.company_name,
        "agent": record.agent_name,
        "period": period.label,
        "amount": format_amount(record.amount, currency_symbol),
        "bank_account": record.bank_account,
    }
    return OutgoingMessage(
        to=recipients_for(record),
        cc=split_addresses(mail_config.cc or ""),
        subject=mail_config.subject_template.format(**fields),
        body=mail_config.body_template.format(**fields),
        attachment_name=attachment_name,
        attachment=attachment,
        from_name=mail_config.sender_name,
        from_address=mail_config.sender_alias,
    )

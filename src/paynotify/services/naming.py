"""
Deterministic PDF naming shared by generation and distribution.

Generation tries the base name first and falls back to the base name
plus a uniqueness suffix when the base name is taken. Distribution does
not know which slot a record landed in, so it looks for the unique name
first and then the base name.
"""

from dataclasses import dataclass
from typing import Collection, List

from paynotify.exceptions import NamingCollisionError
from paynotify.models import PaymentRecord, Period

NAME_SUFFIX = "_Payment_Notification"
PDF_EXTENSION = ".pdf"
PATH_SEPARATORS = ("/", "\\")


@dataclass(frozen=True)
class NotificationName:
    base_name: str
    unique_name: str

    @classmethod
    def build(
        cls, prefix: str, agent_name: str, company_name: str, row_number: int
    ) -> "NotificationName":
        stem = f"{prefix}_{name_component(agent_name)}{NAME_SUFFIX}"
        suffix = unique_suffix(name_component(company_name), row_number)
        return cls(
            base_name=f"{stem}{PDF_EXTENSION}",
            unique_name=f"{stem}{suffix}{PDF_EXTENSION}",
        )

    @classmethod
    def for_record(cls, record: PaymentRecord, period: Period) -> "NotificationName":
        return cls.build(
            period.prefix, record.agent_name, record.company_name, record.row_number
        )

    def lookup_order(self) -> List[str]:
        """Names to try when locating an existing file."""
        return [self.unique_name, self.base_name]


def name_component(value: str) -> str:
    """Replace path separators so a name always stays inside its folder."""
    for separator in PATH_SEPARATORS:
        value = value.replace(separator, "_")
    return value


def unique_suffix(company_name: str, row_number: int) -> str:
    return f"_{company_name}_{row_number}"


def choose_file_name(
    name: NotificationName, existing_names: Collection[str], folder_name: str = ""
) -> str:
    """
    Pick the name a new PDF is saved under.

    Only two slots exist per base name. When both are already taken the
    record is not disambiguated further.
    """
    if name.base_name not in existing_names:
        return name.base_name
    if name.unique_name not in existing_names:
        return name.unique_name
    raise NamingCollisionError(name.base_name, name.unique_name, folder_name)

"""Customer record and reminder wire models."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

# Servers hand out numeric ids; they are echoed back exactly as received.
RecordId = Union[int, str]


class Category(str, Enum):
    """Summary cards a user can expand."""

    VISITORS = "visitors"
    SHOPPERS = "shoppers"
    REGISTERED_CUSTOMERS = "registeredCustomers"


# Categories served by GET /customers/{category}/
LIST_CATEGORIES: tuple[Category, ...] = (Category.VISITORS, Category.SHOPPERS)

CATEGORY_TITLES: dict[Category, str] = {
    Category.VISITORS: "Visitors",
    Category.SHOPPERS: "Shoppers",
}


class CustomerRecord(BaseModel):
    """Customer record as returned by the list endpoints.

    Unknown server fields are kept so a reconciled copy never loses data
    the screen does not know about.
    """

    # Display fields arrive as numbers from some backends (phone numbers,
    # numeric names); only a structurally invalid id disqualifies a record.
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: Optional[RecordId] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    salesperson_name: Optional[str] = None
    description: Optional[str] = None
    visit_type: Optional[str] = None
    reminder_datetime: Optional[str] = None

    @property
    def has_id(self) -> bool:
        return self.id is not None and str(self.id).strip() != ""

    @property
    def is_editable(self) -> bool:
        """Only visitors carry editable feedback and a reminder control."""
        return self.visit_type == Category.VISITORS.value

    def merged(self, **confirmed: Optional[str]) -> "CustomerRecord":
        """Return a copy with server-confirmed fields merged in."""
        return self.model_copy(update=confirmed)


class ReminderPayload(BaseModel):
    """Body of GET/POST /reminders/{id}/."""

    model_config = ConfigDict(extra="ignore")

    reminder_datetime: Optional[str] = None


class FeedbackPayload(BaseModel):
    """Body of PUT /customers/{id}/update/."""

    model_config = ConfigDict(extra="ignore")

    description: Optional[str] = None

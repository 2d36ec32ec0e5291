from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..core.enums import Gender


@dataclass(frozen=True)
class Person:
    """Domain entity: a member record (ChurchCRM ``person_per``).

    Plain data object; computed values live in ``profile.formatting``.
    """

    person_id: int
    title: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    suffix: Optional[str] = None
    gender: Gender = Gender.UNKNOWN
    birth_year: Optional[int] = None
    birth_month: Optional[int] = None
    birth_day: Optional[int] = None
    membership_date: Optional[date] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    home_phone: Optional[str] = None
    cell_phone: Optional[str] = None
    email: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    date_entered: Optional[datetime] = None
    entered_by: Optional[int] = None
    date_last_edited: Optional[datetime] = None
    edited_by: Optional[int] = None


@dataclass(frozen=True)
class PersonCustom:
    """Sparse extension row (``person_custom``): raw slot values c1..c20.

    Values are kept as the driver returned them; typing is applied by the
    static field definitions, never inferred from the data.
    """

    person_id: int
    values: Mapping[str, Any] = field(default_factory=dict)

    def get(self, slot: str) -> Any:
        return self.values.get(slot)


@dataclass(frozen=True)
class DropdownOption:
    """Lookup row (``list_lst``) keyed by (list_id, option_id)."""

    list_id: int
    option_id: int
    sequence: int
    label: str


# Raw person_per columns an end user may change through the portal.
EDITABLE_FIELDS: tuple[str, ...] = (
    "per_Address1",
    "per_Address2",
    "per_City",
    "per_State",
    "per_Zip",
    "per_HomePhone",
    "per_CellPhone",
    "per_Email",
)

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional

from ..core.enums import Gender
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_date, optional_int
from .custom_fields import CUSTOM_FIELD_SLOTS
from .model import EDITABLE_FIELDS, Person, PersonCustom
from .repository import PersonRepository

_PERSON_COLUMNS = """
    per_ID, per_Title, per_FirstName, per_MiddleName, per_LastName, per_Suffix,
    per_Gender, per_BirthYear, per_BirthMonth, per_BirthDay, per_MembershipDate,
    per_Address1, per_Address2, per_City, per_State, per_Zip, per_Country,
    per_HomePhone, per_CellPhone, per_Email,
    per_Facebook, per_Twitter, per_LinkedIn,
    per_DateEntered, per_EnteredBy, per_DateLastEdited, per_EditedBy
"""


def _gender(value) -> Gender:
    try:
        return Gender(int(value or 0))
    except ValueError:
        return Gender.UNKNOWN


def _to_person(r: dict) -> Person:
    return Person(
        person_id=int(r["per_ID"]),
        title=r.get("per_Title"),
        first_name=r.get("per_FirstName"),
        middle_name=r.get("per_MiddleName"),
        last_name=r.get("per_LastName"),
        suffix=r.get("per_Suffix"),
        gender=_gender(r.get("per_Gender")),
        birth_year=optional_int(r.get("per_BirthYear")),
        birth_month=optional_int(r.get("per_BirthMonth")),
        birth_day=optional_int(r.get("per_BirthDay")),
        membership_date=normalize_mysql_date(r.get("per_MembershipDate")),
        address1=r.get("per_Address1"),
        address2=r.get("per_Address2"),
        city=r.get("per_City"),
        state=r.get("per_State"),
        zip=r.get("per_Zip"),
        country=r.get("per_Country"),
        home_phone=r.get("per_HomePhone"),
        cell_phone=r.get("per_CellPhone"),
        email=r.get("per_Email"),
        facebook=r.get("per_Facebook"),
        twitter=r.get("per_Twitter"),
        linkedin=r.get("per_LinkedIn"),
        date_entered=r.get("per_DateEntered"),
        entered_by=optional_int(r.get("per_EnteredBy")),
        date_last_edited=r.get("per_DateLastEdited"),
        edited_by=optional_int(r.get("per_EditedBy")),
    )


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, person_id: int) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PERSON_COLUMNS} FROM person_per WHERE per_ID=%s", (person_id,))
            row = fetchone(cur)
            return _to_person(row) if row else None

    def get_custom(self, person_id: int) -> Optional[PersonCustom]:
        slots = ", ".join(CUSTOM_FIELD_SLOTS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT per_ID, {slots} FROM person_custom WHERE per_ID=%s", (person_id,))
            row = fetchone(cur)
            if not row:
                return None
            return PersonCustom(
                person_id=int(row["per_ID"]),
                values={slot: row.get(slot) for slot in CUSTOM_FIELD_SLOTS},
            )

    def update_fields(
        self,
        person_id: int,
        *,
        fields: Mapping[str, str],
        edited_at: datetime,
        edited_by: int,
    ) -> None:
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Refusing to update non-editable columns: {sorted(unknown)}")

        # Column names come from the fixed allow-list above, values are bound.
        columns = [name for name in EDITABLE_FIELDS if name in fields]
        assignments = [f"{name}=%s" for name in columns] + ["per_DateLastEdited=%s", "per_EditedBy=%s"]
        params = [fields[name] for name in columns] + [edited_at, int(edited_by), int(person_id)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE person_per SET {', '.join(assignments)} WHERE per_ID=%s",
                tuple(params),
            )

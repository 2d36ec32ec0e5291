from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

import qrcode

from ..common.datetime_utils import format_date, isoformat, now_local
from ..core.exceptions import NotFoundError
from .custom_fields import CUSTOM_FIELDS, MEMBER_NUMBER_SLOT, dropdown_list_ids
from .formatting import (
    DropdownLookup,
    format_custom_fields,
    gender_label,
    get_age,
    get_birth_date,
    get_full_address,
    get_full_name,
    group_dropdown_options,
)
from .model import EDITABLE_FIELDS, Person, PersonCustom
from .repository import DropdownOptionRepository, PersonRepository

logger = logging.getLogger(__name__)


def filter_editable_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only allow-listed keys whose value is neither None nor ''.

    Unknown keys are dropped silently. Empty values are dropped so a caller
    can submit a whole form without blanking the fields it left unset.
    """
    return {
        name: data[name]
        for name in EDITABLE_FIELDS
        if name in data and data[name] is not None and data[name] != ""
    }


class ProfileService:
    """Use case: read/update the caller's own member record."""

    def __init__(
        self,
        people: PersonRepository,
        options: DropdownOptionRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._people = people
        self._options = options
        self._clock = clock

    # -- reads -----------------------------------------------------------

    def _load(self, person_id: int) -> tuple[Person, Optional[PersonCustom]]:
        person = self._people.get_by_id(int(person_id))
        if person is None:
            raise NotFoundError("Profile not found.")
        return person, self._people.get_custom(person.person_id)

    def _lookup(self) -> DropdownLookup:
        return DropdownLookup(self._options.list_for_lists(dropdown_list_ids()))

    def _personal(self, p: Person) -> dict:
        birth = get_birth_date(p.birth_year, p.birth_month, p.birth_day)
        return {
            "title": p.title,
            "first_name": p.first_name,
            "middle_name": p.middle_name,
            "last_name": p.last_name,
            "suffix": p.suffix,
            "full_name": get_full_name(p.first_name, p.middle_name, p.last_name),
            "gender": int(p.gender),
            "gender_label": gender_label(p.gender),
            "birth_date": format_date(birth),
            "age": get_age(p.birth_year, p.birth_month, p.birth_day, now=self._clock()),
            "membership_date": format_date(p.membership_date),
        }

    @staticmethod
    def _address(p: Person) -> dict:
        return {
            "line1": p.address1,
            "line2": p.address2,
            "city": p.city,
            "state": p.state,
            "zip": p.zip,
            "country": p.country,
            "full": get_full_address(p.address1, p.address2, p.city, p.state, p.zip, p.country),
        }

    @staticmethod
    def _contact(p: Person) -> dict:
        return {"home_phone": p.home_phone, "cell_phone": p.cell_phone, "email": p.email}

    @staticmethod
    def _social(p: Person) -> dict:
        return {"facebook": p.facebook, "twitter": p.twitter, "linkedin": p.linkedin}

    def _format_profile(self, person: Person, custom: Optional[PersonCustom]) -> dict:
        return {
            "id": person.person_id,
            "personal": self._personal(person),
            "address": self._address(person),
            "contact": self._contact(person),
            "social": self._social(person),
            "custom_fields": format_custom_fields(custom, self._lookup()),
            "audit": {
                "created_at": isoformat(person.date_entered),
                "created_by": person.entered_by,
                "updated_at": isoformat(person.date_last_edited),
                "updated_by": person.edited_by,
            },
        }

    def get_profile(self, person_id: int) -> dict:
        person, custom = self._load(person_id)
        return self._format_profile(person, custom)

    def get_member_view(self, person_id: int) -> dict:
        """Flat person block nested under ``person`` in the authenticated-user view."""
        person, custom = self._load(person_id)
        view = {"id": person.person_id}
        view.update(self._personal(person))
        view["address"] = self._address(person)
        view["contact"] = self._contact(person)
        view["social"] = self._social(person)
        view["custom_fields"] = format_custom_fields(custom, self._lookup())
        return view

    # -- writes ----------------------------------------------------------

    def update_profile(self, person_id: int, data: Mapping[str, Any], *, editor_id: int) -> dict:
        person, _ = self._load(person_id)

        try:
            update_data = filter_editable_fields(data)
            self._people.update_fields(
                person.person_id,
                fields=update_data,
                edited_at=self._clock(),
                edited_by=int(editor_id),
            )
        except Exception as e:
            logger.error(
                "Profile update failed person_id=%s editor_id=%s error=%s",
                person.person_id,
                editor_id,
                e,
            )
            raise

        logger.info(
            "Profile updated person_id=%s editor_id=%s fields_updated=%s",
            person.person_id,
            editor_id,
            sorted(update_data),
        )
        return self.get_profile(person.person_id)

    # -- reference data --------------------------------------------------

    def get_custom_field_definitions(self) -> dict:
        return {
            "fields": {d.slot: d.describe() for d in CUSTOM_FIELDS},
            "dropdown_options": group_dropdown_options(self._options.list_all()),
        }

    # -- QR --------------------------------------------------------------

    def get_qr_identity(self, person_id: int) -> dict:
        person, custom = self._load(person_id)
        return {
            "person_id": str(person.person_id),
            "full_name": get_full_name(person.first_name, person.middle_name, person.last_name),
            "member_number": custom.get(MEMBER_NUMBER_SLOT) if custom is not None else None,
        }

    def render_qr_png(self, person_id: int) -> bytes:
        identity = self.get_qr_identity(person_id)
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(identity["person_id"])
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

"""Pure formatting helpers shared by the profile and authenticated-user views."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Optional

from ..common.datetime_utils import format_date
from ..core.enums import CustomFieldType, Gender
from .custom_fields import CUSTOM_FIELDS, CustomFieldDefinition
from .model import DropdownOption, PersonCustom


def _present(parts: Iterable[Optional[str]]) -> list[str]:
    return [str(p) for p in parts if p not in (None, "")]


def get_full_name(first: Optional[str], middle: Optional[str], last: Optional[str]) -> str:
    return " ".join(_present((first, middle, last)))


def get_full_address(*parts: Optional[str]) -> Optional[str]:
    present = _present(parts)
    return ", ".join(present) if present else None


def get_birth_date(year: Optional[int], month: Optional[int], day: Optional[int]) -> Optional[date]:
    if not (year and month and day):
        return None
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def get_age(
    year: Optional[int],
    month: Optional[int],
    day: Optional[int],
    *,
    now: Optional[datetime] = None,
) -> Optional[int]:
    birth = get_birth_date(year, month, day)
    if birth is None:
        return None
    today = (now or datetime.now()).date()
    earlier, later = (birth, today) if birth <= today else (today, birth)
    return later.year - earlier.year - ((later.month, later.day) < (earlier.month, earlier.day))


def gender_label(gender: Any) -> str:
    try:
        value = Gender(int(gender))
    except (TypeError, ValueError):
        return ""
    return {Gender.MALE: "Male", Gender.FEMALE: "Female"}.get(value, "")


class DropdownLookup:
    """Two-level (list_id, option_id) -> label map.

    Lookups always use the composite pair even though option ids happen to
    be unique across lists in current data.
    """

    def __init__(self, options: Iterable[DropdownOption]):
        self._labels: dict[tuple[int, int], str] = {
            (int(o.list_id), int(o.option_id)): o.label for o in options
        }

    def label(self, list_id: int, option_id: Any) -> Optional[str]:
        try:
            key = (int(list_id), int(option_id))
        except (TypeError, ValueError):
            return None
        return self._labels.get(key)


def format_custom_value(definition: CustomFieldDefinition, raw: Any, lookup: DropdownLookup) -> Any:
    if definition.type == CustomFieldType.DROPDOWN:
        if not raw or definition.list_id is None:
            return None
        return lookup.label(definition.list_id, raw)
    if definition.type == CustomFieldType.DATE:
        return format_date(raw)
    return raw


def format_custom_fields(custom: Optional[PersonCustom], lookup: DropdownLookup) -> dict[str, Any]:
    """Always returns all twenty semantic keys; missing row or value -> None."""
    out: dict[str, Any] = {}
    for definition in CUSTOM_FIELDS:
        raw = custom.get(definition.slot) if custom is not None else None
        out[definition.name] = format_custom_value(definition, raw, lookup)
    return out


def group_dropdown_options(options: Iterable[DropdownOption]) -> dict[str, list[dict]]:
    """Group options by list id (string keys for JSON), each ordered by sequence."""
    grouped: dict[str, list[DropdownOption]] = {}
    for option in options:
        grouped.setdefault(str(option.list_id), []).append(option)
    return {
        list_id: [
            {"id": o.option_id, "label": o.label, "sequence": o.sequence}
            for o in sorted(items, key=lambda o: (o.sequence, o.option_id))
        ]
        for list_id, items in grouped.items()
    }

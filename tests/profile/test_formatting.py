from datetime import date, datetime

from member_portal.common.datetime_utils import format_date, format_datetime
from member_portal.core.enums import Gender
from member_portal.profile.custom_fields import CUSTOM_FIELDS
from member_portal.profile.formatting import (
    DropdownLookup,
    format_custom_fields,
    gender_label,
    get_age,
    get_birth_date,
    get_full_address,
    get_full_name,
    group_dropdown_options,
)
from member_portal.profile.model import DropdownOption, PersonCustom

NOW = datetime(2026, 10, 19, 9, 30)


def test_full_name_skips_empty_middle_name():
    assert get_full_name("John", "", "Doe") == "John Doe"
    assert get_full_name("John", None, "Doe") == "John Doe"
    assert get_full_name("Maria", "Grace", "Tan") == "Maria Grace Tan"


def test_full_name_with_nothing_is_empty_string():
    assert get_full_name(None, "", None) == ""


def test_full_address_joins_present_parts():
    assert get_full_address("Jl. Raha No. 1", None, "Jakarta", "", "12345", "Indonesia") == (
        "Jl. Raha No. 1, Jakarta, 12345, Indonesia"
    )
    assert get_full_address(None, "", None) is None


def test_birth_date_needs_all_three_parts():
    assert get_birth_date(1985, 5, 20) == date(1985, 5, 20)
    assert get_birth_date(1985, 5, None) is None
    assert get_birth_date(0, 5, 20) is None
    assert get_birth_date(1985, 2, 30) is None


def test_age_counts_whole_years():
    assert get_age(1985, 5, 20, now=NOW) == 41
    # Birthday later in the year has not happened yet.
    assert get_age(1985, 12, 1, now=NOW) == 40
    assert get_age(1985, 10, 19, now=NOW) == 41


def test_age_is_none_for_incomplete_birth_date():
    assert get_age(1985, None, 20, now=NOW) is None
    assert get_age(None, None, None, now=NOW) is None
    assert get_age(1985, 2, 30, now=NOW) is None


def test_age_for_future_birth_date_is_absolute():
    assert get_age(2030, 1, 1, now=NOW) == 3


def test_gender_label():
    assert gender_label(Gender.MALE) == "Male"
    assert gender_label(2) == "Female"
    assert gender_label(0) == ""
    assert gender_label(None) == ""


def test_dropdown_lookup_uses_list_and_option_pair():
    lookup = DropdownLookup([DropdownOption(list_id=24, option_id=1, sequence=1, label="Anggota Sidi")])

    assert lookup.label(24, 1) == "Anggota Sidi"
    assert lookup.label(24, "1") == "Anggota Sidi"
    # Same option id under another list is a different option.
    assert lookup.label(25, 1) is None
    assert lookup.label(24, "x") is None


def test_custom_fields_always_have_twenty_keys():
    out = format_custom_fields(None, DropdownLookup([]))

    assert len(out) == 20
    assert list(out) == [d.name for d in CUSTOM_FIELDS]
    assert all(v is None for v in out.values())


def test_custom_fields_resolve_by_declared_type():
    lookup = DropdownLookup(
        [
            DropdownOption(list_id=24, option_id=1, sequence=1, label="Anggota Sidi"),
            DropdownOption(list_id=31, option_id=5, sequence=1, label="Wilayah 1"),
        ]
    )
    custom = PersonCustom(
        person_id=1,
        values={
            "c1": "GKI-0001",
            "c2": 1,
            "c6": datetime(1999, 4, 4, 0, 0),
            "c7": "0000-00-00",
            "c17": "5",
            "c18": 99,
            "c19": "GKI Kwitang",
        },
    )

    out = format_custom_fields(custom, lookup)

    assert out["member_number"] == "GKI-0001"
    assert out["membership_status"] == "Anggota Sidi"
    assert out["baptism_date"] == "1999-04-04"
    assert out["confirmation_date"] is None
    assert out["region"] == "Wilayah 1"
    # Dangling option reference is tolerated.
    assert out["blood_type"] is None
    assert out["church_before"] == "GKI Kwitang"
    assert out["education"] is None


def test_group_dropdown_options_orders_by_sequence():
    grouped = group_dropdown_options(
        [
            DropdownOption(list_id=25, option_id=4, sequence=2, label="S1"),
            DropdownOption(list_id=24, option_id=1, sequence=1, label="Anggota Sidi"),
            DropdownOption(list_id=25, option_id=3, sequence=1, label="SMA"),
        ]
    )

    assert set(grouped) == {"24", "25"}
    assert [o["label"] for o in grouped["25"]] == ["SMA", "S1"]
    assert grouped["24"] == [{"id": 1, "label": "Anggota Sidi", "sequence": 1}]


def test_date_helpers():
    assert format_date(date(2005, 6, 12)) == "2005-06-12"
    assert format_date("2005-06-12 00:00:00") == "2005-06-12"
    assert format_date(None) is None
    assert format_datetime(datetime(2026, 9, 6, 6, 55)) == "2026-09-06 06:55:00"

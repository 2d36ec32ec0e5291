from __future__ import annotations

import pytest

from member_portal.core.exceptions import NotFoundError
from member_portal.profile.service import filter_editable_fields


def test_profile_groups_and_computed_values(profile_service):
    profile = profile_service.get_profile(1)

    assert profile["id"] == 1
    assert profile["personal"]["full_name"] == "John Doe"
    assert profile["personal"]["age"] == 41
    assert profile["personal"]["birth_date"] == "1985-05-20"
    assert profile["personal"]["gender_label"] == "Male"
    assert profile["personal"]["membership_date"] == "2005-06-12"
    assert profile["address"]["full"] == "Jl. Raha No. 1, Jakarta, DKI Jakarta, 12345, Indonesia"
    assert profile["contact"]["email"] == "jdoe@example.org"
    assert profile["social"] == {"facebook": None, "twitter": None, "linkedin": None}
    assert profile["audit"]["created_at"] == "2020-01-01T09:00:00"
    assert profile["audit"]["updated_at"] is None


def test_profile_custom_fields_are_resolved(profile_service):
    custom = profile_service.get_profile(1)["custom_fields"]

    assert len(custom) == 20
    assert custom["member_number"] == "GKI-0001"
    assert custom["membership_status"] == "Anggota Sidi"
    assert custom["education"] == "S1"
    assert custom["baptism_date"] == "1999-04-04"
    assert custom["blood_type"] is None


def test_profile_without_custom_row_still_has_twenty_nulls(profile_service):
    custom = profile_service.get_profile(2)["custom_fields"]

    assert len(custom) == 20
    assert set(custom.values()) == {None}


def test_unknown_person_is_not_found(profile_service):
    with pytest.raises(NotFoundError):
        profile_service.get_profile(404)


def test_filter_editable_fields_drops_unknown_and_empty():
    data = {
        "per_Email": "new@example.org",
        "per_City": "",
        "per_Zip": None,
        "per_FirstName": "Mallory",
        "per_ID": 99,
    }

    assert filter_editable_fields(data) == {"per_Email": "new@example.org"}


def test_update_only_touches_allow_listed_fields(profile_service, people, fixed_now):
    before = people.get_by_id(1)

    profile = profile_service.update_profile(
        1,
        {"per_Email": "john@example.org", "per_FirstName": "Mallory", "per_City": "Bandung"},
        editor_id=1,
    )

    after = people.get_by_id(1)
    assert after.email == "john@example.org"
    assert after.city == "Bandung"
    assert after.first_name == before.first_name
    assert after.date_last_edited == fixed_now
    assert after.edited_by == 1
    assert profile["contact"]["email"] == "john@example.org"
    assert profile["audit"]["updated_at"] == fixed_now.isoformat()
    assert profile["audit"]["updated_by"] == 1


def test_empty_string_does_not_clear_a_field(profile_service, people):
    profile_service.update_profile(1, {"per_Address1": "", "per_HomePhone": None}, editor_id=1)

    after = people.get_by_id(1)
    assert after.address1 == "Jl. Raha No. 1"
    assert after.home_phone == "021-555-0101"


def test_update_with_nothing_editable_still_stamps_audit(profile_service, people, fixed_now):
    profile_service.update_profile(1, {"per_LastName": "Smith"}, editor_id=2)

    assert people.update_calls[-1]["fields"] == {}
    after = people.get_by_id(1)
    assert after.last_name == "Doe"
    assert after.date_last_edited == fixed_now
    assert after.edited_by == 2


def test_failed_update_leaves_record_unchanged(profile_service, people):
    people.fail_on_update = RuntimeError("connection lost")
    before = people.get_by_id(1)

    with pytest.raises(RuntimeError, match="connection lost"):
        profile_service.update_profile(1, {"per_Email": "x@example.org"}, editor_id=1)

    assert people.get_by_id(1) == before


def test_update_unknown_person_is_not_found(profile_service, people):
    with pytest.raises(NotFoundError):
        profile_service.update_profile(404, {"per_Email": "x@example.org"}, editor_id=404)

    assert people.update_calls == []


def test_custom_field_definitions(profile_service):
    defs = profile_service.get_custom_field_definitions()

    assert len(defs["fields"]) == 20
    assert defs["fields"]["c1"] == {
        "name": "member_number",
        "label": "Nomor Anggota",
        "label_en": "Member Number",
        "type": "text",
        "editable": False,
    }
    assert defs["fields"]["c2"]["type"] == "dropdown"
    assert defs["fields"]["c2"]["list_id"] == 24
    assert defs["fields"]["c6"]["type"] == "date"
    assert "list_id" not in defs["fields"]["c6"]
    assert all(f["editable"] is False for f in defs["fields"].values())

    assert [o["label"] for o in defs["dropdown_options"]["24"]] == ["Anggota Sidi", "Anggota Baptis"]
    assert [o["sequence"] for o in defs["dropdown_options"]["25"]] == [1, 2]


def test_qr_identity(profile_service):
    assert profile_service.get_qr_identity(1) == {
        "person_id": "1",
        "full_name": "John Doe",
        "member_number": "GKI-0001",
    }


def test_qr_identity_without_custom_row(profile_service):
    assert profile_service.get_qr_identity(2)["member_number"] is None


def test_qr_png_is_a_png(profile_service):
    png = profile_service.render_qr_png(1)

    assert png.startswith(b"\x89PNG\r\n\x1a\n")

"""Static schema for the twenty positional custom-field slots (c1..c20)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import CustomFieldType


@dataclass(frozen=True)
class CustomFieldDefinition:
    slot: str
    name: str
    label: str
    label_en: str
    type: CustomFieldType
    list_id: Optional[int] = None
    editable: bool = False

    def describe(self) -> dict:
        out = {
            "name": self.name,
            "label": self.label,
            "label_en": self.label_en,
            "type": self.type.value,
            "editable": self.editable,
        }
        if self.list_id is not None:
            out["list_id"] = self.list_id
        return out


def _text(slot: str, name: str, label: str, label_en: str) -> CustomFieldDefinition:
    return CustomFieldDefinition(slot, name, label, label_en, CustomFieldType.TEXT)


def _date(slot: str, name: str, label: str, label_en: str) -> CustomFieldDefinition:
    return CustomFieldDefinition(slot, name, label, label_en, CustomFieldType.DATE)


def _dropdown(slot: str, name: str, label: str, label_en: str, list_id: int) -> CustomFieldDefinition:
    return CustomFieldDefinition(slot, name, label, label_en, CustomFieldType.DROPDOWN, list_id=list_id)


CUSTOM_FIELDS: tuple[CustomFieldDefinition, ...] = (
    _text("c1", "member_number", "Nomor Anggota", "Member Number"),
    _dropdown("c2", "membership_status", "Status Keanggotaan", "Membership Status", 24),
    _dropdown("c3", "education", "Pendidikan", "Education", 25),
    _dropdown("c4", "occupation", "Pekerjaan", "Occupation", 26),
    _dropdown("c5", "ethnicity", "Etnis", "Ethnicity", 27),
    _date("c6", "baptism_date", "Tanggal Baptis", "Baptism Date"),
    _date("c7", "confirmation_date", "Tanggal Sidi", "Confirmation Date"),
    _date("c8", "transfer_in_date", "Tgl. Atestasi Masuk", "Transfer In Date"),
    _date("c9", "transfer_out_date", "Tgl. Atestasi Keluar", "Transfer Out Date"),
    _date("c10", "death_date", "Tanggal Meninggal", "Death Date"),
    _date("c11", "dkh_date", "Tanggal DKH", "DKH Date"),
    _date("c12", "ex_dkh_date", "Tanggal Ex. DKH", "Ex. DKH Date"),
    _date("c13", "ex_dkh4_date", "Tanggal Ex. DKH-4", "Ex. DKH-4 Date"),
    _dropdown("c14", "transfer_reason_1", "Alasan-1 Mutasi", "Transfer Reason 1", 28),
    _dropdown("c15", "transfer_reason_2", "Alasan-2 Mutasi", "Transfer Reason 2", 29),
    _dropdown("c16", "transfer_reason_3", "Alasan-3 Mutasi", "Transfer Reason 3", 30),
    _dropdown("c17", "region", "Wilayah", "Region", 31),
    _dropdown("c18", "blood_type", "Gol. Darah", "Blood Type", 32),
    _text("c19", "church_before", "Asal Gereja", "Church Origin"),
    _dropdown("c20", "expertise", "Bidang Keahlian", "Area of Expertise", 41),
)

CUSTOM_FIELD_SLOTS: tuple[str, ...] = tuple(d.slot for d in CUSTOM_FIELDS)

MEMBER_NUMBER_SLOT = "c1"


def dropdown_list_ids() -> tuple[int, ...]:
    return tuple(d.list_id for d in CUSTOM_FIELDS if d.list_id is not None)

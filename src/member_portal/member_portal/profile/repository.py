from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping, Optional, Protocol, Sequence

from .model import DropdownOption, Person, PersonCustom


class PersonRepository(Protocol):
    """Repository interface for member records.

    Note (DIP): the service layer depends on this interface, not on MySQL.
    """

    def get_by_id(self, person_id: int) -> Optional[Person]:
        raise NotImplementedError

    def get_custom(self, person_id: int) -> Optional[PersonCustom]:
        raise NotImplementedError

    def update_fields(
        self,
        person_id: int,
        *,
        fields: Mapping[str, str],
        edited_at: datetime,
        edited_by: int,
    ) -> None:
        """Write ``fields`` plus the edit-audit columns in one transaction."""

        raise NotImplementedError


class DropdownOptionRepository(Protocol):
    def list_all(self) -> Sequence[DropdownOption]:
        raise NotImplementedError

    def list_for_lists(self, list_ids: Iterable[int]) -> Sequence[DropdownOption]:
        raise NotImplementedError

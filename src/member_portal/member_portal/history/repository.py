from __future__ import annotations

from typing import Protocol, Sequence

from .model import HistoryRow


class HistoryRepository(Protocol):
    def list_for_person(self, person_id: int) -> Sequence[HistoryRow]:
        """All check-ins of the person, most recent event start first."""

        raise NotImplementedError

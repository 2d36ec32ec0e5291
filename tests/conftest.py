from __future__ import annotations

import dataclasses
from datetime import date, datetime
from typing import Iterable, Optional

import pytest

from member_portal.auth.hashing import legacy_password_hash
from member_portal.auth.model import AccessToken, Credential
from member_portal.auth.service import AuthService
from member_portal.container import Container
from member_portal.core.enums import Gender
from member_portal.history.model import HistoryRow
from member_portal.history.service import HistoryService
from member_portal.profile.model import DropdownOption, Person, PersonCustom
from member_portal.profile.service import ProfileService

_COLUMN_TO_ATTR = {
    "per_Address1": "address1",
    "per_Address2": "address2",
    "per_City": "city",
    "per_State": "state",
    "per_Zip": "zip",
    "per_HomePhone": "home_phone",
    "per_CellPhone": "cell_phone",
    "per_Email": "email",
}


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class InMemoryPeople:
    def __init__(self, people: Iterable[Person] = (), custom: Iterable[PersonCustom] = ()):
        self.people = {p.person_id: p for p in people}
        self.custom = {c.person_id: c for c in custom}
        self.fail_on_update: Optional[Exception] = None
        self.update_calls: list[dict] = []

    def get_by_id(self, person_id: int) -> Optional[Person]:
        return self.people.get(person_id)

    def get_custom(self, person_id: int) -> Optional[PersonCustom]:
        return self.custom.get(person_id)

    def update_fields(self, person_id, *, fields, edited_at, edited_by) -> None:
        self.update_calls.append({"person_id": person_id, "fields": dict(fields), "edited_by": edited_by})
        changes = {_COLUMN_TO_ATTR[k]: v for k, v in fields.items()}
        updated = dataclasses.replace(
            self.people[person_id], date_last_edited=edited_at, edited_by=edited_by, **changes
        )
        # Nothing is stored when the write fails (transaction rolled back).
        if self.fail_on_update is not None:
            raise self.fail_on_update
        self.people[person_id] = updated


class InMemoryOptions:
    def __init__(self, options: Iterable[DropdownOption] = ()):
        self.options = list(options)

    def list_all(self):
        return sorted(self.options, key=lambda o: (o.list_id, o.sequence))

    def list_for_lists(self, list_ids):
        ids = set(list_ids)
        return [o for o in self.list_all() if o.list_id in ids]


class InMemoryCredentials:
    def __init__(self, credentials: Iterable[Credential] = ()):
        self.by_person = {c.person_id: c for c in credentials}

    def get_by_username(self, username: str) -> Optional[Credential]:
        for c in self.by_person.values():
            if c.username == username:
                return c
        return None

    def get_by_person_id(self, person_id: int) -> Optional[Credential]:
        return self.by_person.get(person_id)

    def record_login(self, person_id: int, *, at: datetime) -> None:
        c = self.by_person[person_id]
        self.by_person[person_id] = dataclasses.replace(c, login_count=c.login_count + 1, last_login=at)


class InMemoryTokens:
    def __init__(self):
        self.tokens: dict[int, AccessToken] = {}
        self._id = 0

    def create(self, *, person_id, name, token_hash, abilities, expires_at, created_at) -> AccessToken:
        self._id += 1
        token = AccessToken(
            token_id=self._id,
            person_id=person_id,
            name=name,
            token_hash=token_hash,
            abilities=frozenset(abilities),
            expires_at=expires_at,
            created_at=created_at,
        )
        self.tokens[self._id] = token
        return token

    def get_by_id(self, token_id: int) -> Optional[AccessToken]:
        return self.tokens.get(token_id)

    def delete(self, token_id: int) -> bool:
        return self.tokens.pop(token_id, None) is not None

    def delete_for_person(self, person_id: int) -> int:
        doomed = [tid for tid, t in self.tokens.items() if t.person_id == person_id]
        for tid in doomed:
            del self.tokens[tid]
        return len(doomed)

    def touch(self, token_id: int, *, at: datetime) -> None:
        if token_id in self.tokens:
            self.tokens[token_id] = dataclasses.replace(self.tokens[token_id], last_used_at=at)

    def for_person(self, person_id: int) -> list[AccessToken]:
        return [t for t in self.tokens.values() if t.person_id == person_id]


class InMemoryHistory:
    def __init__(self, rows_by_person: Optional[dict[int, list[HistoryRow]]] = None):
        self.rows_by_person = rows_by_person or {}
        self.fail: Optional[Exception] = None

    def list_for_person(self, person_id: int):
        if self.fail is not None:
            raise self.fail
        return list(self.rows_by_person.get(person_id, []))


JOHN = Person(
    person_id=1,
    title="Mr.",
    first_name="John",
    middle_name="",
    last_name="Doe",
    gender=Gender.MALE,
    birth_year=1985,
    birth_month=5,
    birth_day=20,
    membership_date=date(2005, 6, 12),
    address1="Jl. Raha No. 1",
    city="Jakarta",
    state="DKI Jakarta",
    zip="12345",
    country="Indonesia",
    home_phone="021-555-0101",
    cell_phone="0812-555-0101",
    email="jdoe@example.org",
    date_entered=datetime(2020, 1, 1, 9, 0),
    entered_by=2,
)

JOHN_CUSTOM = PersonCustom(
    person_id=1,
    values={
        "c1": "GKI-0001",
        "c2": 1,
        "c3": 4,
        "c6": date(1999, 4, 4),
        "c17": 5,
        "c18": 99,
        "c19": "GKI Kwitang",
    },
)

ADMIN = Person(person_id=2, first_name="Portal", last_name="Admin", email="admin@example.org")

OPTIONS = [
    DropdownOption(list_id=24, option_id=2, sequence=2, label="Anggota Baptis"),
    DropdownOption(list_id=24, option_id=1, sequence=1, label="Anggota Sidi"),
    DropdownOption(list_id=25, option_id=4, sequence=2, label="S1"),
    DropdownOption(list_id=25, option_id=3, sequence=1, label="SMA"),
    DropdownOption(list_id=31, option_id=5, sequence=1, label="Wilayah 1"),
    DropdownOption(list_id=32, option_id=6, sequence=1, label="A"),
]

HISTORY = [
    HistoryRow(attend_id=3, event_title="Ibadah Minggu Sore", type_name="Ibadah Minggu", checkin_date=datetime(2026, 9, 13, 16, 50)),
    HistoryRow(attend_id=2, event_title="Doa Rabu Malam", type_name="Persekutuan Doa", checkin_date=datetime(2026, 9, 9, 18, 58)),
    HistoryRow(attend_id=1, event_title="Ibadah Minggu Pagi", type_name="Ibadah Minggu", checkin_date=datetime(2026, 9, 6, 6, 55)),
]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 9, 30, 0)


@pytest.fixture
def clock(fixed_now) -> Clock:
    return Clock(fixed_now)


@pytest.fixture
def people() -> InMemoryPeople:
    return InMemoryPeople([JOHN, ADMIN], [JOHN_CUSTOM])


@pytest.fixture
def options() -> InMemoryOptions:
    return InMemoryOptions(OPTIONS)


@pytest.fixture
def credentials() -> InMemoryCredentials:
    return InMemoryCredentials(
        [
            Credential(person_id=1, username="jdoe", password_hash=legacy_password_hash("secret", 1)),
            Credential(
                person_id=2,
                username="admin",
                password_hash=legacy_password_hash("admin123", 2),
                is_admin=True,
                login_count=7,
                needs_password_change=True,
            ),
        ]
    )


@pytest.fixture
def tokens() -> InMemoryTokens:
    return InMemoryTokens()


@pytest.fixture
def history_repo() -> InMemoryHistory:
    return InMemoryHistory({1: list(HISTORY)})


@pytest.fixture
def profile_service(people, options, clock) -> ProfileService:
    return ProfileService(people, options, clock=clock)


@pytest.fixture
def auth_service(credentials, tokens, profile_service, clock) -> AuthService:
    return AuthService(credentials, tokens, profile_service, clock=clock)


@pytest.fixture
def container(auth_service, profile_service, history_repo) -> Container:
    return Container(
        auth_service=auth_service,
        profile_service=profile_service,
        history_service=HistoryService(history_repo),
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from member_portal.main import create_app

    flask_app = create_app(container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username: str = "jdoe", password: str = "secret", remember: bool = False) -> str:
        resp = client.post("/api/login", json={"username": username, "password": password, "remember": remember})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["data"]["token"]

    return _login


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return bearer


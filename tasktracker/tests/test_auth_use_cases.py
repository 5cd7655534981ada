from __future__ import annotations

from datetime import timedelta

import pytest

from tasktracker.application.services.session_manager import SessionManager
from tasktracker.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from tasktracker.application.use_cases.users.login_user import LoginUserUseCase
from tasktracker.application.use_cases.users.logout_user import LogoutUserUseCase
from tasktracker.application.use_cases.users.register_user import RegisterUserUseCase
from tasktracker.domain.users.entities import User
from tasktracker.domain.users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from tasktracker.domain.users.repositories import PasswordHasher, UserRepository
from tasktracker.infrastructure.sessions.memory import InMemorySessionStore
from tasktracker.shared.errors.base import ValidationError


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        new_user = User(
            id=self._seq,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.hashed: list[str] = []
        self.verified: list[str] = []

    def hash(self, password: str) -> str:
        self.hashed.append(password)
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verified.append(hashed)
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def sessions() -> SessionManager:
    return SessionManager(store=InMemorySessionStore(), lifetime=timedelta(hours=24))


def _register(users: InMemoryUserRepository, hasher: DeterministicHasher) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=hasher)


def _authenticate(
    users: InMemoryUserRepository, hasher: DeterministicHasher
) -> AuthenticateUserUseCase:
    return AuthenticateUserUseCase(users=users, password_hasher=hasher)


def test_register_then_authenticate(users, hasher) -> None:
    user = _register(users, hasher).execute("alice", "a@x.com", "pw1")

    assert user.username == "alice"
    assert user.password_hash != "pw1"
    assert _authenticate(users, hasher).execute("a@x.com", "pw1") == user.id


def test_register_distinct_pairs_all_succeed(users, hasher) -> None:
    register = _register(users, hasher)
    authenticate = _authenticate(users, hasher)
    pairs = [("alice", "a@x.com"), ("bob", "b@x.com"), ("carol", "c@x.com")]

    ids = [register.execute(name, email, f"{name}-pw").id for name, email in pairs]

    assert len(set(ids)) == 3
    for (name, email), user_id in zip(pairs, ids):
        assert authenticate.execute(email, f"{name}-pw") == user_id


def test_register_duplicate_email_raises_regardless_of_username(users, hasher) -> None:
    register = _register(users, hasher)
    register.execute("alice", "a@x.com", "pw1")

    with pytest.raises(UserAlreadyExistsError):
        register.execute("someone-else", "A@X.com", "pw2")


def test_register_duplicate_username_raises(users, hasher) -> None:
    register = _register(users, hasher)
    register.execute("alice", "a@x.com", "pw1")

    with pytest.raises(UserAlreadyExistsError):
        register.execute("alice", "other@x.com", "pw2")


def test_register_missing_fields_raise_validation_error(users, hasher) -> None:
    with pytest.raises(ValidationError):
        _register(users, hasher).execute("alice", "a@x.com", "")
    assert users.find_by_username("alice") is None


def test_authenticate_failures_are_indistinguishable(users, hasher) -> None:
    _register(users, hasher).execute("alice", "a@x.com", "pw1")
    authenticate = _authenticate(users, hasher)

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        authenticate.execute("a@x.com", "nope")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        authenticate.execute("ghost@x.com", "pw1")

    assert type(wrong_password.value) is type(unknown_email.value)
    assert wrong_password.value.to_dict() == unknown_email.value.to_dict()


def test_authenticate_unknown_email_still_verifies_a_hash(users, hasher) -> None:
    with pytest.raises(InvalidCredentialsError):
        _authenticate(users, hasher).execute("ghost@x.com", "pw1")
    assert hasher.verified


def test_login_issues_resolvable_session(users, hasher, sessions) -> None:
    user = _register(users, hasher).execute("alice", "a@x.com", "pw1")
    login = LoginUserUseCase(authenticate=_authenticate(users, hasher), sessions=sessions)

    user_id, token = login.execute("a@x.com", "pw1")

    assert user_id == user.id
    assert sessions.resolve_session(token) == user.id


def test_login_invalid_credentials_creates_no_session(users, hasher) -> None:
    store = InMemorySessionStore()
    login = LoginUserUseCase(
        authenticate=_authenticate(users, hasher), sessions=SessionManager(store=store)
    )
    with pytest.raises(InvalidCredentialsError):
        login.execute("a@x.com", "pw1")
    assert len(store) == 0


def test_logout_destroys_session_and_is_idempotent(users, hasher, sessions) -> None:
    _register(users, hasher).execute("alice", "a@x.com", "pw1")
    login = LoginUserUseCase(authenticate=_authenticate(users, hasher), sessions=sessions)
    _, token = login.execute("a@x.com", "pw1")
    logout = LogoutUserUseCase(sessions=sessions)

    logout.execute(token)
    logout.execute(token)
    logout.execute(None)

    assert sessions.resolve_session(token) is None


@pytest.mark.parametrize("password", ["", "nope"])
def test_known_and_unknown_email_cost_the_same(users, hasher, password: str) -> None:
    _register(users, hasher).execute("alice", "a@x.com", "pw1")
    authenticate = _authenticate(users, hasher)
    hashed_before = len(hasher.hashed)

    with pytest.raises(InvalidCredentialsError):
        authenticate.execute("a@x.com", password)
    known = len(hasher.verified)
    with pytest.raises(InvalidCredentialsError):
        authenticate.execute("ghost@x.com", password)
    unknown = len(hasher.verified) - known

    assert known == unknown == 1
    assert len(hasher.hashed) == hashed_before

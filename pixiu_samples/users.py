"""User service provider backed by an in-memory record store."""

from __future__ import annotations

import time as _time
from dataclasses import dataclass
from datetime import datetime

from pixiu_samples.store import (
    AddError,
    AlreadyExistsError,
    NotFoundError,
    Record,
    RecordStore,
)

_SEED_TIME = datetime.fromisoformat("2021-08-01T10:08:41+00:00")
_DEFAULT_TIMEOUT_DELAY = 10.0


@dataclass
class User(Record):
    """A user as exchanged with the gateway."""

    def java_class_name(self) -> str:
        """Name of the matching class on the Java side of the wire."""
        return "com.dubbogo.pixiu.User"


def seed_users() -> RecordStore:
    """Return a store holding the two sample users "tc" and "ic"."""
    store = RecordStore()
    store.add(User(id="0001", code=1, name="tc", age=18, time=_SEED_TIME))
    store.add(User(id="0002", code=2, name="ic", age=88, time=_SEED_TIME))
    return store


def _out(message: str) -> None:
    print(f"\033[32;40m{message}\033[0m")


class UserProvider:
    """Service exposing create, query and update operations on users."""

    def __init__(self, store: RecordStore | None = None) -> None:
        self.store = store if store is not None else seed_users()

    def create_user(self, user: User | None) -> User:
        """Store a new user and return it.

        Raises NotFoundError for a missing user, AlreadyExistsError when the
        name is taken and AddError when the store refuses the record.
        """
        _out(f"Req CreateUser data:{user!r}")
        if user is None:
            raise NotFoundError()
        if self.store.get_by_name(user.name) is not None:
            raise AlreadyExistsError()
        if self.store.add(user):
            return user
        raise AddError()

    def get_user_by_name(self, name: str) -> Record | None:
        """Return the user with this name, or None."""
        _out(f"Req GetUserByName name:{name!r}")
        found = self.store.get_by_name(name)
        if found is not None:
            _out(f"Req GetUserByName result:{found!r}")
        return found

    def get_user_by_code(self, code: int) -> Record | None:
        """Return the user with this code, or None."""
        _out(f"Req GetUserByCode name:{code!r}")
        found = self.store.get_by_code(code)
        if found is not None:
            _out(f"Req GetUserByCode result:{found!r}")
        return found

    def get_user_timeout(
        self, name: str, delay: float = _DEFAULT_TIMEOUT_DELAY
    ) -> Record | None:
        """Like get_user_by_name, but only after sleeping for delay seconds."""
        _out(f"Req GetUserByName name:{name!r}")
        _time.sleep(delay)
        found = self.store.get_by_name(name)
        if found is not None:
            _out(f"Req GetUserByName result:{found!r}")
        return found

    def get_user_by_name_and_age(self, name: str, age: int) -> Record | None:
        """Return the user with this name; the age only affects logging."""
        _out(f"Req GetUserByNameAndAge name:{name}, age:{age}")
        found = self.store.get_by_name(name)
        if found is not None and found.age == age:
            _out(f"Req GetUserByNameAndAge result:{found!r}")
        return found

    def update_user(self, user: User) -> bool:
        """Update the stored user named like the given one."""
        _out(f"Req UpdateUser data:{user!r}")
        return self._apply_update(user.name, user)

    def update_user_by_name(self, name: str, user: User) -> bool:
        """Update the stored user with the given name from the given data."""
        _out(f"Req UpdateUserByName data:{user!r}")
        return self._apply_update(name, user)

    def reference(self) -> str:
        """Name under which the provider is registered."""
        return "UserProvider"

    def _apply_update(self, name: str, user: User) -> bool:
        found = self.store.get_by_name(name)
        if found is None:
            raise NotFoundError()
        if user.id:
            found.id = user.id
        if user.age >= 0:
            found.age = user.age
        return True
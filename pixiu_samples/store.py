"""In-memory record store indexed by name and by code."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime


@dataclass
class Record:
    """A person-like record kept by a provider: id, code, name, age and time."""

    id: str = ""
    code: int = 0
    name: str = ""
    age: int = 0
    time: datetime | None = None


class ProviderError(Exception):
    """Base class for errors reported by the service providers."""


class NotFoundError(ProviderError):
    """The requested record does not exist."""

    def __init__(self, message: str = "not found") -> None:
        super().__init__(message)


class AlreadyExistsError(ProviderError):
    """A record with the same name is already stored."""

    def __init__(self, message: str = "data is exist") -> None:
        super().__init__(message)


class AddError(ProviderError):
    """The record could not be added to the store."""

    def __init__(self, message: str = "add error") -> None:
        super().__init__(message)


class RecordStore:
    """Thread-safe store keeping each record under its name and its code."""

    def __init__(self) -> None:
        self._by_name: dict[str, Record] = {}
        self._by_code: dict[int, Record] = {}
        self._lock = threading.Lock()

    def add(self, record: Record) -> bool:
        """Add a record whose name and code are both valid and unused.

        Returns True when the record was stored, False otherwise.
        """
        if not record.name or record.code <= 0:
            return False
        with self._lock:
            if self._name_exists(record.name) or self._code_exists(record.code):
                return False
            return self.add_for_name(record) and self.add_for_code(record)

    def add_for_name(self, record: Record) -> bool:
        """Index the record by name only; False if the name is empty or taken."""
        if not record.name or record.name in self._by_name:
            return False
        self._by_name[record.name] = record
        return True

    def add_for_code(self, record: Record) -> bool:
        """Index the record by code only; False if the code is not positive or taken."""
        if record.code <= 0 or record.code in self._by_code:
            return False
        self._by_code[record.code] = record
        return True

    def get_by_name(self, name: str) -> Record | None:
        """Return the record stored under this name, or None."""
        with self._lock:
            return self._by_name.get(name)

    def get_by_code(self, code: int) -> Record | None:
        """Return the record stored under this code, or None."""
        with self._lock:
            return self._by_code.get(code)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_name)

    def _name_exists(self, name: str) -> bool:
        return bool(name) and name in self._by_name

    def _code_exists(self, code: int) -> bool:
        return code > 0 and code in self._by_code
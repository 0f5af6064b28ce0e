import threading
from datetime import datetime, timezone

import pytest

from pixiu_samples.store import (
    AddError,
    AlreadyExistsError,
    NotFoundError,
    ProviderError,
    Record,
    RecordStore,
)


@pytest.fixture
def store():
    s = RecordStore()
    when = datetime(2021, 8, 1, 10, 8, 41, tzinfo=timezone.utc)
    assert s.add(Record(id="0001", code=1, name="tc", age=18, time=when))
    assert s.add(Record(id="0002", code=2, name="ic", age=88, time=when))
    return s


def test_lookup_by_name_and_code_returns_same_record(store):
    by_name = store.get_by_name("tc")
    by_code = store.get_by_code(1)
    assert by_name is by_code
    assert by_name.id == "0001"
    assert by_name.age == 18


def test_second_seed_record(store):
    record = store.get_by_code(2)
    assert record.name == "ic"
    assert record.id == "0002"


def test_missing_lookups_return_none(store):
    assert store.get_by_name("nobody") is None
    assert store.get_by_code(99) is None


def test_len_counts_records(store):
    assert len(store) == 2
    assert store.add(Record(id="0003", code=3, name="dubbogo", age=99))
    assert len(store) == 3


@pytest.mark.parametrize(
    "record",
    [
        Record(id="x", code=5, name=""),
        Record(id="x", code=0, name="someone"),
        Record(id="x", code=-1, name="someone"),
    ],
)
def test_invalid_records_rejected(store, record):
    assert store.add(record) is False
    assert len(store) == 2


def test_duplicate_name_rejected(store):
    assert store.add(Record(id="x", code=7, name="tc")) is False
    assert store.get_by_code(7) is None
    assert store.get_by_name("tc").id == "0001"


def test_duplicate_code_rejected(store):
    assert store.add(Record(id="x", code=1, name="fresh")) is False
    assert store.get_by_name("fresh") is None
    assert store.get_by_code(1).name == "tc"


def test_add_for_name_only_indexes_name():
    s = RecordStore()
    record = Record(id="a", code=4, name="solo")
    assert s.add_for_name(record) is True
    assert s.get_by_name("solo") is record
    assert s.get_by_code(4) is None
    assert s.add_for_name(record) is False


def test_add_for_name_rejects_empty_name():
    s = RecordStore()
    assert s.add_for_name(Record(code=4, name="")) is False
    assert len(s) == 0


def test_add_for_code_only_indexes_code():
    s = RecordStore()
    record = Record(id="a", code=4, name="solo")
    assert s.add_for_code(record) is True
    assert s.get_by_code(4) is record
    assert s.get_by_name("solo") is None
    assert s.add_for_code(record) is False
    assert s.add_for_code(Record(code=0, name="zero")) is False


def test_stored_record_is_shared_and_mutable(store):
    store.get_by_name("tc").age = 15
    assert store.get_by_code(1).age == 15


def test_concurrent_adds_store_one_record_per_code():
    s = RecordStore()
    results = []
    lock = threading.Lock()

    def worker(i):
        ok = s.add(Record(id=str(i), code=42, name=f"name{i}"))
        with lock:
            results.append(ok)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results.count(True) == 1
    assert len(s) == 1


@pytest.mark.parametrize(
    "error_cls, message",
    [
        (NotFoundError, "not found"),
        (AlreadyExistsError, "data is exist"),
        (AddError, "add error"),
    ],
)
def test_error_messages(error_cls, message):
    error = error_cls()
    assert str(error) == message
    assert isinstance(error, ProviderError)
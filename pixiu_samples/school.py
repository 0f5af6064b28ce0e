"""Student and teacher service providers backed by in-memory record stores."""

from __future__ import annotations

import time as _time
from dataclasses import dataclass
from datetime import datetime, timezone

from pixiu_samples.store import (
    AddError,
    AlreadyExistsError,
    NotFoundError,
    Record,
    RecordStore,
)

_DEFAULT_TIMEOUT_DELAY = 10.0


@dataclass
class Student(Record):
    """A student as exchanged with the gateway."""

    def java_class_name(self) -> str:
        """Name of the matching class on the Java side of the wire."""
        return "com.dubbogo.pixiu.StudentService"


@dataclass
class Teacher(Record):
    """A teacher as exchanged with the gateway."""

    def java_class_name(self) -> str:
        """Name of the matching class on the Java side of the wire."""
        return "com.dubbogo.pixiu.TeacherService"


def seed_students() -> RecordStore:
    """Return a store holding the sample students "tc-student" and "ic-student"."""
    now = datetime.now(timezone.utc)
    store = RecordStore()
    store.add(Student(id="0001", code=1, name="tc-student", age=18, time=now))
    store.add(Student(id="0002", code=2, name="ic-student", age=88, time=now))
    return store


def seed_teachers() -> RecordStore:
    """Return a store holding the sample teachers "tc-teacher" and "ic-teacher"."""
    now = datetime.now(timezone.utc)
    store = RecordStore()
    store.add(Teacher(id="0001", code=1, name="tc-teacher", age=18, time=now))
    store.add(Teacher(id="0002", code=2, name="ic-teacher", age=88, time=now))
    return store


def _out(message: str) -> None:
    print(f"\033[32;40m{message}\033[0m")


class _RecordService:
    """Shared create, query and update logic over one record store."""

    def __init__(self, store: RecordStore, kind: str) -> None:
        self.store = store
        self._kind = kind

    def _create(self, record: Record | None) -> Record:
        _out(f"Req Create{self._kind} data:{record!r}")
        if record is None:
            raise NotFoundError()
        if self.store.get_by_name(record.name) is not None:
            raise AlreadyExistsError()
        if self.store.add(record):
            return record
        raise AddError()

    def _by_name(self, name: str) -> Record | None:
        _out(f"Req Get{self._kind}ByName name:{name!r}")
        found = self.store.get_by_name(name)
        if found is not None:
            _out(f"Req Get{self._kind}ByName result:{found!r}")
        return found

    def _by_code(self, code: int) -> Record | None:
        _out(f"Req Get{self._kind}ByCode name:{code!r}")
        found = self.store.get_by_code(code)
        if found is not None:
            _out(f"Req Get{self._kind}ByCode result:{found!r}")
        return found

    def _timeout(self, name: str, delay: float) -> Record | None:
        _out(f"Req Get{self._kind}ByName name:{name!r}")
        _time.sleep(delay)
        found = self.store.get_by_name(name)
        if found is not None:
            _out(f"Req Get{self._kind}ByName result:{found!r}")
        return found

    def _by_name_and_age(self, name: str, age: int) -> Record | None:
        _out(f"Req Get{self._kind}ByNameAndAge name:{name}, age:{age}")
        found = self.store.get_by_name(name)
        if found is not None and found.age == age:
            _out(f"Req Get{self._kind}ByNameAndAge result:{found!r}")
        return found

    def _update(self, name: str, record: Record) -> bool:
        found = self.store.get_by_name(name)
        if found is None:
            raise NotFoundError()
        if record.id:
            found.id = record.id
        if record.age >= 0:
            found.age = record.age
        return True


class StudentProvider(_RecordService):
    """Service exposing create, query and update operations on students."""

    def __init__(self, store: RecordStore | None = None) -> None:
        super().__init__(store if store is not None else seed_students(), "Student")

    def create_student(self, student: Student | None) -> Record:
        """Store a new student and return it.

        Raises NotFoundError for a missing student, AlreadyExistsError when
        the name is taken and AddError when the store refuses the record.
        """
        return self._create(student)

    def get_student_by_name(self, name: str) -> Record | None:
        """Return the student with this name, or None."""
        return self._by_name(name)

    def get_student_by_code(self, code: int) -> Record | None:
        """Return the student with this code, or None."""
        return self._by_code(code)

    def get_student_timeout(
        self, name: str, delay: float = _DEFAULT_TIMEOUT_DELAY
    ) -> Record | None:
        """Like get_student_by_name, but only after sleeping for delay seconds."""
        return self._timeout(name, delay)

    def get_student_by_name_and_age(self, name: str, age: int) -> Record | None:
        """Return the student with this name; the age only affects logging."""
        return self._by_name_and_age(name, age)

    def update_student(self, student: Student) -> bool:
        """Update the stored student named like the given one."""
        _out(f"Req UpdateStudent data:{student!r}")
        return self._update(student.name, student)

    def update_student_by_name(self, name: str, student: Student) -> bool:
        """Update the stored student with the given name from the given data."""
        _out(f"Req UpdateStudentByName data:{student!r}")
        return self._update(name, student)

    def reference(self) -> str:
        """Name under which the provider is registered."""
        return "StudentProvider"


class TeacherProvider(_RecordService):
    """Service exposing create, query and update operations on teachers."""

    def __init__(self, store: RecordStore | None = None) -> None:
        super().__init__(store if store is not None else seed_teachers(), "Teacher")

    def create_teacher(self, teacher: Teacher | None) -> Record:
        """Store a new teacher and return it.

        Raises NotFoundError for a missing teacher, AlreadyExistsError when
        the name is taken and AddError when the store refuses the record.
        """
        return self._create(teacher)

    def get_teacher_by_name(self, name: str) -> Record | None:
        """Return the teacher with this name, or None."""
        return self._by_name(name)

    def get_teacher_by_code(self, code: int) -> Record | None:
        """Return the teacher with this code, or None."""
        return self._by_code(code)

    def get_teacher_timeout(
        self, name: str, delay: float = _DEFAULT_TIMEOUT_DELAY
    ) -> Record | None:
        """Like get_teacher_by_name, but only after sleeping for delay seconds."""
        return self._timeout(name, delay)

    def get_teacher_by_name_and_age(self, name: str, age: int) -> Record | None:
        """Return the teacher with this name; the age only affects logging."""
        return self._by_name_and_age(name, age)

    def update_teacher(self, teacher: Teacher) -> bool:
        """Update the stored teacher named like the given one."""
        _out(f"Req UpdateTeacher data:{teacher!r}")
        return self._update(teacher.name, teacher)

    def update_teacher_by_name(self, name: str, teacher: Teacher) -> bool:
        """Update the stored teacher with the given name from the given data."""
        _out(f"Req UpdateTeacherByName data:{teacher!r}")
        return self._update(name, teacher)

    def reference(self) -> str:
        """Name under which the provider is registered."""
        return "TeacherProvider"
import pytest

from pixiu_samples.school import (
    Student,
    StudentProvider,
    Teacher,
    TeacherProvider,
    seed_students,
    seed_teachers,
)
from pixiu_samples.store import (
    AddError,
    AlreadyExistsError,
    NotFoundError,
    RecordStore,
)


@pytest.fixture
def students():
    return StudentProvider(seed_students())


@pytest.fixture
def teachers():
    return TeacherProvider(seed_teachers())


def test_java_class_names():
    assert Student().java_class_name() == "com.dubbogo.pixiu.StudentService"
    assert Teacher().java_class_name() == "com.dubbogo.pixiu.TeacherService"


def test_references(students, teachers):
    assert students.reference() == "StudentProvider"
    assert teachers.reference() == "TeacherProvider"


def test_seed_students_contents():
    store = seed_students()
    assert len(store) == 2
    first = store.get_by_name("tc-student")
    assert first.id == "0001"
    assert first.age == 18
    assert store.get_by_code(2).name == "ic-student"


def test_seed_teachers_contents():
    store = seed_teachers()
    assert len(store) == 2
    assert store.get_by_code(1).name == "tc-teacher"
    assert store.get_by_name("ic-teacher").age == 88


def test_default_store_is_seeded():
    assert StudentProvider().get_student_by_name("tc-student").id == "0001"
    assert TeacherProvider().get_teacher_by_name("tc-teacher").id == "0001"


def test_providers_do_not_share_default_stores():
    first = StudentProvider()
    second = StudentProvider()
    first.create_student(Student(id="0009", code=9, name="extra", age=1))
    assert second.get_student_by_name("extra") is None


def test_get_student_by_name_and_code(students):
    by_name = students.get_student_by_name("tc-student")
    assert by_name is students.get_student_by_code(1)
    assert students.get_student_by_name("missing") is None
    assert students.get_student_by_code(42) is None


def test_get_teacher_by_name_and_code(teachers):
    assert teachers.get_teacher_by_name("ic-teacher") is teachers.get_teacher_by_code(2)
    assert teachers.get_teacher_by_name("nobody") is None


def test_create_student_roundtrip(students):
    new = Student(id="0003", code=3, name="dubbogo", age=99)
    assert students.create_student(new) is new
    assert students.get_student_by_name("dubbogo") is new
    assert students.get_student_by_code(3) is new


def test_create_student_errors(students):
    with pytest.raises(NotFoundError):
        students.create_student(None)
    with pytest.raises(AlreadyExistsError):
        students.create_student(Student(id="x", code=77, name="tc-student"))
    with pytest.raises(AddError):
        students.create_student(Student(id="x", code=1, name="fresh"))
    with pytest.raises(AddError):
        students.create_student(Student(id="x", code=0, name="fresh"))


def test_create_teacher_roundtrip_and_errors(teachers):
    new = Teacher(id="0003", code=3, name="dubbogo", age=40)
    assert teachers.create_teacher(new) is new
    with pytest.raises(AlreadyExistsError):
        teachers.create_teacher(Teacher(code=4, name="dubbogo"))
    with pytest.raises(NotFoundError):
        teachers.create_teacher(None)
    with pytest.raises(AddError):
        teachers.create_teacher(Teacher(code=2, name="other"))


def test_get_by_name_and_age_returns_record_regardless(students, teachers):
    found = students.get_student_by_name_and_age("tc-student", 99)
    assert found is students.get_student_by_name("tc-student")
    assert teachers.get_teacher_by_name_and_age("tc-teacher", 18).code == 1
    assert students.get_student_by_name_and_age("missing", 18) is None


def test_timeout_lookups(students, teachers):
    assert students.get_student_timeout("tc-student", delay=0).id == "0001"
    assert teachers.get_teacher_timeout("nobody", delay=0) is None


def test_update_student(students):
    assert students.update_student(Student(id="0005", name="tc-student", age=15)) is True
    updated = students.get_student_by_name("tc-student")
    assert updated.id == "0005"
    assert updated.age == 15


def test_update_keeps_id_when_empty_and_age_when_negative(students):
    students.update_student(Student(id="", name="ic-student", age=-1))
    record = students.get_student_by_name("ic-student")
    assert record.id == "0002"
    assert record.age == 88


def test_update_student_by_name(students):
    assert students.update_student_by_name(
        "tc-student", Student(id="0001", code=1, name="ignored", age=55)
    )
    assert students.get_student_by_code(1).age == 55
    with pytest.raises(NotFoundError):
        students.update_student_by_name("missing", Student(age=1))


def test_update_teacher(teachers):
    assert teachers.update_teacher(Teacher(id="0007", name="tc-teacher", age=66))
    assert teachers.get_teacher_by_code(1).id == "0007"
    assert teachers.update_teacher_by_name("ic-teacher", Teacher(age=77))
    assert teachers.get_teacher_by_code(2).age == 77
    with pytest.raises(NotFoundError):
        teachers.update_teacher(Teacher(name="nobody"))


def test_update_teacher_by_name_missing(teachers):
    with pytest.raises(NotFoundError):
        teachers.update_teacher_by_name("nobody", Teacher(age=1))


def test_explicit_empty_store():
    provider = StudentProvider(RecordStore())
    assert provider.get_student_by_name("tc-student") is None
    created = provider.create_student(Student(id="0001", code=1, name="tc-student"))
    assert provider.get_student_by_code(1) is created
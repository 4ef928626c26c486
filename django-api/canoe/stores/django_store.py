"""Django ORM implementation of the ModelStore."""

import logging
from datetime import datetime

from django.db import transaction

from canoe.domain import (
    AcademicYear,
    Attendance,
    AttendanceStatus,
    DismissalTime,
    Email,
    Name,
    Phone,
    Student,
    StudentId,
    Tag,
    Training,
    WeeklyDismissal,
)
from canoe.domain.errors import DuplicateStudentError, DuplicateTrainingError, StaleEntityError
from canoe.domain.predicates import SHOW_ALL
from canoe.models import AttendanceRecord, IdSequence, StudentRecord, TrainingRecord
from canoe.stores.interfaces import ModelStore, StudentPredicate, TrainingPredicate

logger = logging.getLogger(__name__)

STUDENT_SEQUENCE = "student"


def _student_from_record(record: StudentRecord) -> Student:
    return Student(
        name=Name(record.name),
        phone=Phone(record.phone),
        email=Email(record.email),
        academic_year=AcademicYear(record.academic_year),
        dismissal=WeeklyDismissal(
            monday=DismissalTime(record.monday_dismissal),
            tuesday=DismissalTime(record.tuesday_dismissal),
            wednesday=DismissalTime(record.wednesday_dismissal),
            thursday=DismissalTime(record.thursday_dismissal),
            friday=DismissalTime(record.friday_dismissal),
        ),
        tags=frozenset(Tag(value) for value in record.tags),
        attendances=tuple(
            Attendance(row.training.date_time, AttendanceStatus(row.status))
            for row in record.attendances.all()
        ),
        id=StudentId(record.id),
    )


def _training_from_record(record: TrainingRecord) -> Training:
    rows = sorted(record.attendances.all(), key=lambda row: row.pk)
    return Training(
        date_time=record.date_time,
        student_ids=tuple(StudentId(row.student_id) for row in rows),
    )


def _copy_student_fields(student: Student, record: StudentRecord) -> None:
    record.name = student.name.value
    record.phone = student.phone.value
    record.email = student.email.value
    record.academic_year = student.academic_year.value
    record.monday_dismissal = student.dismissal.monday.value
    record.tuesday_dismissal = student.dismissal.tuesday.value
    record.wednesday_dismissal = student.dismissal.wednesday.value
    record.thursday_dismissal = student.dismissal.thursday.value
    record.friday_dismissal = student.dismissal.friday.value
    record.tags = sorted(tag.value for tag in student.tags)


class DjangoModelStore(ModelStore):
    """SQL-backed model store using Django ORM."""

    def __init__(self) -> None:
        self._student_filter: StudentPredicate = SHOW_ALL
        self._training_filter: TrainingPredicate = SHOW_ALL

    def _students_queryset(self):
        return StudentRecord.objects.prefetch_related("attendances__training")

    def _trainings_queryset(self):
        return TrainingRecord.objects.prefetch_related("attendances")

    def all_students(self) -> list[Student]:
        return [_student_from_record(record) for record in self._students_queryset()]

    def all_trainings(self) -> list[Training]:
        return [_training_from_record(record) for record in self._trainings_queryset()]

    def list_students(self) -> list[Student]:
        return [s for s in self.all_students() if self._student_filter(s)]

    def list_trainings(self) -> list[Training]:
        return [t for t in self.all_trainings() if self._training_filter(t)]

    def get_student(self, student_id: StudentId) -> Student | None:
        if student_id.is_placeholder:
            return None
        record = self._students_queryset().filter(pk=student_id.value).first()
        return _student_from_record(record) if record else None

    def get_training(self, date_time: datetime) -> Training | None:
        record = self._trainings_queryset().filter(date_time=date_time).first()
        return _training_from_record(record) if record else None

    def add_student(self, student: Student) -> Student:
        with transaction.atomic():
            sequence, _ = IdSequence.objects.select_for_update().get_or_create(
                name=STUDENT_SEQUENCE
            )
            if student.id.is_placeholder:
                student = student.with_valid_id(StudentId(sequence.last_value + 1))
            elif StudentRecord.objects.filter(pk=student.id.value).exists():
                raise DuplicateStudentError()
            record = StudentRecord(id=student.id.value)
            _copy_student_fields(student, record)
            record.save(force_insert=True)
            self._sync_attendances(record, student)
            sequence.last_value = max(sequence.last_value, student.id.value)
            sequence.save(update_fields=["last_value"])
        logger.debug("Stored student %s", student.id)
        return student

    def add_training(self, training: Training) -> Training:
        with transaction.atomic():
            if TrainingRecord.objects.filter(date_time=training.date_time).exists():
                raise DuplicateTrainingError(training.date_time)
            record = TrainingRecord.objects.create(date_time=training.date_time)
            self._sync_roster(record, training)
        return training

    def replace_student(self, old: Student, new: Student) -> None:
        assert new.id == old.id, "a replacement must keep the student id"
        record = StudentRecord.objects.filter(pk=old.id.value).first()
        if record is None:
            raise StaleEntityError(old)
        _copy_student_fields(new, record)
        record.save()
        self._sync_attendances(record, new)

    def replace_training(self, old: Training, new: Training) -> None:
        record = TrainingRecord.objects.filter(date_time=old.date_time).first()
        if record is None:
            raise StaleEntityError(old)
        if new.date_time != old.date_time:
            if TrainingRecord.objects.filter(date_time=new.date_time).exists():
                raise DuplicateTrainingError(new.date_time)
            record.date_time = new.date_time
            record.save(update_fields=["date_time"])
        self._sync_roster(record, new)

    def remove_student(self, student: Student) -> None:
        deleted, _ = StudentRecord.objects.filter(pk=student.id.value).delete()
        if not deleted:
            raise StaleEntityError(student)

    def remove_training(self, training: Training) -> None:
        deleted, _ = TrainingRecord.objects.filter(date_time=training.date_time).delete()
        if not deleted:
            raise StaleEntityError(training)

    def set_student_filter(self, predicate: StudentPredicate) -> None:
        self._student_filter = predicate

    def set_training_filter(self, predicate: TrainingPredicate) -> None:
        self._training_filter = predicate

    def atomic(self):
        return transaction.atomic()

    def _sync_attendances(self, record: StudentRecord, student: Student) -> None:
        """Make the student's join rows match its attendance collection."""
        rows = {
            row.training.date_time: row
            for row in AttendanceRecord.objects.filter(student=record).select_related("training")
        }
        wanted = {a.training_time: a for a in student.attendances}

        stale = [row.pk for key, row in rows.items() if key not in wanted]
        if stale:
            AttendanceRecord.objects.filter(pk__in=stale).delete()

        for training_time, attendance in wanted.items():
            row = rows.get(training_time)
            if row is None:
                training = TrainingRecord.objects.filter(date_time=training_time).first()
                if training is None:
                    raise StaleEntityError(attendance)
                AttendanceRecord.objects.create(
                    student=record, training=training, status=attendance.status.value
                )
            elif row.status != attendance.status.value:
                row.status = attendance.status.value
                row.save(update_fields=["status"])

    def _sync_roster(self, record: TrainingRecord, training: Training) -> None:
        """Make the training's join rows match its roster.

        New roster entries start UNMARKED; existing rows keep their mark.
        """
        rows = {
            row.student_id: row for row in AttendanceRecord.objects.filter(training=record)
        }
        wanted = [student_id.value for student_id in training.student_ids]

        stale = [row.pk for key, row in rows.items() if key not in wanted]
        if stale:
            AttendanceRecord.objects.filter(pk__in=stale).delete()

        for student_pk in wanted:
            if student_pk in rows:
                continue
            student = StudentRecord.objects.filter(pk=student_pk).first()
            if student is None:
                raise StaleEntityError(StudentId(student_pk))
            AttendanceRecord.objects.create(student=student, training=record)

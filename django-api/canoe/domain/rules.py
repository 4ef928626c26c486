"""Consistency rules shared by commands and stores.

Every function here is a pure predicate or computation over domain models.
"""

from collections import Counter
from collections.abc import Hashable, Iterable, Sequence
from datetime import datetime

from canoe.domain.models import Student, Training
from canoe.domain.value_objects import ID_PATTERN, StudentId


def is_valid_id(value: str) -> bool:
    """Return True if value is a non-zero unsigned integer string."""
    return bool(ID_PATTERN.match(value.strip()))


def has_unique_entries(entries: Sequence[Hashable]) -> bool:
    return len(set(entries)) == len(entries)


def is_available_at(student: Student, date_time: datetime) -> bool:
    """Return True if the student is out of school by date_time.

    Weekend slots are always available.
    """
    dismissal = student.dismissal.for_weekday(date_time.weekday())
    if dismissal is None:
        return True
    return dismissal.value <= date_time.time()


def unavailable_slots(student: Student) -> list[datetime]:
    """Return the scheduled training times the student cannot make."""
    return [
        attendance.training_time
        for attendance in student.attendances
        if not is_available_at(student, attendance.training_time)
    ]


def is_available_for_all_scheduled(student: Student) -> bool:
    return not unavailable_slots(student)


def has_slot(student: Student, date_time: datetime) -> bool:
    return student.has_attendance_at(date_time)


def contains_student(training: Training, student_id: StudentId) -> bool:
    return training.has_student(student_id)


def can_mark(training: Training, now: datetime) -> bool:
    """Attendance can only move to ATTENDED once the training has started."""
    return training.is_over(now)


def find_inconsistencies(
    students: Iterable[Student], trainings: Iterable[Training]
) -> list[str]:
    """Describe every broken cross-reference between students and trainings.

    An empty list means the roster of every training and the attendance
    collection of every student mirror each other exactly.
    """
    students = list(students)
    trainings = list(trainings)
    by_id = {student.id: student for student in students}
    by_time = {training.date_time: training for training in trainings}
    problems = []

    for date_time, count in Counter(t.date_time for t in trainings).items():
        if count > 1:
            problems.append(f"{count} trainings share the date-time {date_time}")

    for training in trainings:
        for student_id in training.student_ids:
            student = by_id.get(student_id)
            if student is None:
                problems.append(f"{training} lists unknown student {student_id}")
            elif not student.has_attendance_at(training.date_time):
                problems.append(f"{training} lists student {student_id} who has no attendance for it")

    for student in students:
        for slot, count in Counter(a.training_time for a in student.attendances).items():
            if count > 1:
                problems.append(f"Student {student.id} has {count} attendances at {slot}")
        for attendance in student.attendances:
            training = by_time.get(attendance.training_time)
            if training is None:
                problems.append(
                    f"Student {student.id} has an attendance for missing training {attendance.training_time}"
                )
            elif not training.has_student(student.id):
                problems.append(f"Student {student.id} is missing from the roster of {training}")

    return problems

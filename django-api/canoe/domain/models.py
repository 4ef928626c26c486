"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in canoe/models.py (persistence layer).

Students and trainings reference each other by key only: a student holds
Attendance values keyed by training date-time, a training holds the ids of
its roster. Stores resolve keys to current snapshots on every read.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Self

from canoe.domain.value_objects import (
    AcademicYear,
    Attendance,
    Email,
    Name,
    Phone,
    StudentId,
    Tag,
    WeeklyDismissal,
)


def _sorted_unique_slots(attendances) -> tuple[Attendance, ...]:
    """Order attendances by training time, keeping the first entry per slot."""
    by_slot: dict[datetime, Attendance] = {}
    for attendance in attendances:
        by_slot.setdefault(attendance.training_time, attendance)
    return tuple(by_slot[key] for key in sorted(by_slot))


@dataclass(frozen=True)
class Student:
    """Domain representation of a Student."""

    name: Name
    phone: Phone
    email: Email
    academic_year: AcademicYear
    dismissal: WeeklyDismissal
    tags: frozenset[Tag] = frozenset()
    attendances: tuple[Attendance, ...] = ()
    id: StudentId = field(default_factory=StudentId.placeholder)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(self, "attendances", _sorted_unique_slots(self.attendances))

    def is_same_student(self, other: "Student | None") -> bool:
        """Weak equality used for duplicate detection.

        Same name and academic year, plus the same phone or the same email.
        """
        if other is self:
            return True
        return (
            other is not None
            and other.name == self.name
            and other.academic_year == self.academic_year
            and (other.phone == self.phone or other.email == self.email)
        )

    def with_id(self, student_id: StudentId) -> Self:
        return replace(self, id=student_id)

    def with_valid_id(self, issued_id: StudentId) -> Self:
        """Promote a placeholder id. A student with a real id is returned as is."""
        if self.id.is_placeholder:
            return self.with_id(issued_id)
        return self

    def with_details(self, **changes) -> Self:
        """Return a copy with identity, dismissal or tag fields changed.

        The id and the attendance collection are never touched by an edit.
        """
        forbidden = {"id", "attendances"} & changes.keys()
        if forbidden:
            raise ValueError(f"Cannot edit {', '.join(sorted(forbidden))} through with_details")
        return replace(self, **changes)

    def attendance_at(self, training_time: datetime) -> Attendance | None:
        for attendance in self.attendances:
            if attendance.training_time == training_time:
                return attendance
        return None

    def has_attendance_at(self, training_time: datetime) -> bool:
        return self.attendance_at(training_time) is not None

    def has_training_on_date(self, day: date) -> bool:
        return any(attendance.training_time.date() == day for attendance in self.attendances)

    def with_attendance(self, attendance: Attendance) -> Self:
        """Add an attendance entry. An entry for an existing slot is ignored."""
        if self.has_attendance_at(attendance.training_time):
            return self
        return replace(self, attendances=self.attendances + (attendance,))

    def without_attendance(self, training_time: datetime) -> Self:
        return replace(
            self,
            attendances=tuple(a for a in self.attendances if a.training_time != training_time),
        )

    def with_attendance_replaced(self, attendance: Attendance) -> Self:
        """Swap the entry for attendance's slot, keeping every other entry."""
        assert self.has_attendance_at(attendance.training_time)
        return self.without_attendance(attendance.training_time).with_attendance(attendance)

    def __str__(self) -> str:
        tags = "".join(str(tag) for tag in sorted(self.tags))
        return (
            f"{self.name} Id: {self.id} Phone: {self.phone} Email: {self.email} "
            f"Dismissal Times: {self.dismissal} Academic Year: {self.academic_year} Tags: {tags}"
        )


@dataclass(frozen=True)
class Training:
    """Domain representation of a Training session.

    A training is identified by its date-time; no two trainings share one.
    """

    date_time: datetime
    student_ids: tuple[StudentId, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "student_ids", tuple(dict.fromkeys(self.student_ids)))

    def is_same_training(self, other: "Training | None") -> bool:
        return other is not None and other.date_time == self.date_time

    def is_over(self, now: datetime) -> bool:
        return self.date_time <= now

    def has_student(self, student_id: StudentId) -> bool:
        return student_id in self.student_ids

    def with_student(self, student_id: StudentId) -> Self:
        if self.has_student(student_id):
            return self
        return replace(self, student_ids=self.student_ids + (student_id,))

    def without_student(self, student_id: StudentId) -> Self:
        return replace(self, student_ids=tuple(s for s in self.student_ids if s != student_id))

    def __str__(self) -> str:
        return f"Training at {self.date_time:%Y-%m-%d %H%M}"

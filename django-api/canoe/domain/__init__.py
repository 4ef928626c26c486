from canoe.domain.models import Student, Training
from canoe.domain.value_objects import (
    AcademicYear,
    Attendance,
    AttendanceStatus,
    DismissalTime,
    Email,
    Index,
    Name,
    Phone,
    StudentId,
    Tag,
    WeeklyDismissal,
)

__all__ = [
    "Student",
    "Training",
    "Attendance",
    "AttendanceStatus",
    "StudentId",
    "Index",
    "Name",
    "Phone",
    "Email",
    "AcademicYear",
    "Tag",
    "DismissalTime",
    "WeeklyDismissal",
]

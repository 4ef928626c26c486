"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Self

ID_PATTERN = re.compile(r"^[1-9]\d*$")


@dataclass(frozen=True, order=True)
class StudentId:
    """Unique identifier for a Student.

    A value of None is the placeholder carried by students that have not yet
    been added to a store.
    """

    value: int | None

    def __post_init__(self) -> None:
        if self.value is not None and self.value < 1:
            raise ValueError("Student ID must be a positive integer")

    @classmethod
    def placeholder(cls) -> Self:
        return cls(value=None)

    @classmethod
    def from_string(cls, value: str) -> Self:
        value = value.strip()
        if not ID_PATTERN.match(value):
            raise ValueError(f"Invalid student ID: {value!r}")
        return cls(value=int(value))

    @property
    def is_placeholder(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        return "?" if self.value is None else str(self.value)


@dataclass(frozen=True)
class Index:
    """One-based position of an entry in a displayed list."""

    one_based: int

    def __post_init__(self) -> None:
        if self.one_based < 1:
            raise ValueError("Index must be a positive integer")

    @classmethod
    def from_one_based(cls, value: int) -> Self:
        return cls(one_based=value)

    @classmethod
    def from_zero_based(cls, value: int) -> Self:
        return cls(one_based=value + 1)

    @classmethod
    def from_string(cls, value: str) -> Self:
        value = value.strip()
        if not ID_PATTERN.match(value):
            raise ValueError(f"Invalid index: {value!r}")
        return cls(one_based=int(value))

    @property
    def zero_based(self) -> int:
        return self.one_based - 1

    def __str__(self) -> str:
        return str(self.one_based)


@dataclass(frozen=True)
class Name:
    value: str

    def __post_init__(self) -> None:
        if not re.fullmatch(r"[A-Za-z0-9][A-Za-z0-9 ]*", self.value):
            raise ValueError("Name must be alphanumeric and must not be blank")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Phone:
    value: str

    def __post_init__(self) -> None:
        if not re.fullmatch(r"\d{3,}", self.value):
            raise ValueError("Phone number must contain only digits and be at least 3 digits long")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self) -> None:
        if not re.fullmatch(r"[A-Za-z0-9+_.-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*", self.value):
            raise ValueError("Email must be of the format local-part@domain")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AcademicYear:
    value: int

    def __post_init__(self) -> None:
        if not 1 <= self.value <= 4:
            raise ValueError("Academic year must be between 1 and 4")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class Tag:
    value: str

    def __post_init__(self) -> None:
        if not self.value.isalnum():
            raise ValueError("Tag names must be alphanumeric")

    def __str__(self) -> str:
        return f"[{self.value}]"


@dataclass(frozen=True)
class DismissalTime:
    """Time of day a student is dismissed from school on one weekday."""

    value: time

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse a 24-hour HHMM string such as "1530"."""
        value = value.strip()
        if not re.fullmatch(r"\d{4}", value):
            raise ValueError(f"Dismissal time must be in HHMM format: {value!r}")
        return cls(value=time(hour=int(value[:2]), minute=int(value[2:])))

    def __str__(self) -> str:
        return self.value.strftime("%H%M")


WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday")


@dataclass(frozen=True)
class WeeklyDismissal:
    """Dismissal times for Monday to Friday."""

    monday: DismissalTime
    tuesday: DismissalTime
    wednesday: DismissalTime
    thursday: DismissalTime
    friday: DismissalTime

    @classmethod
    def uniform(cls, value: time) -> Self:
        dismissal = DismissalTime(value)
        return cls(dismissal, dismissal, dismissal, dismissal, dismissal)

    def for_weekday(self, weekday: int) -> DismissalTime | None:
        """Return the dismissal time for a datetime.weekday() value.

        Saturday and Sunday have no dismissal time.
        """
        if weekday >= len(WEEKDAY_NAMES):
            return None
        return getattr(self, WEEKDAY_NAMES[weekday])

    def with_day(self, weekday: int, dismissal: DismissalTime) -> Self:
        if weekday >= len(WEEKDAY_NAMES):
            raise ValueError("Dismissal times exist only for Monday to Friday")
        values = {name: getattr(self, name) for name in WEEKDAY_NAMES}
        values[WEEKDAY_NAMES[weekday]] = dismissal
        return type(self)(**values)

    def __str__(self) -> str:
        return " ".join(str(getattr(self, name)) for name in WEEKDAY_NAMES)


class AttendanceStatus(Enum):
    """Mark state of a student's enrollment in one training."""

    UNMARKED = "UNMARKED"
    ATTENDED = "ATTENDED"


@dataclass(frozen=True)
class Attendance:
    """A training date-time paired with its mark state."""

    training_time: datetime
    status: AttendanceStatus = AttendanceStatus.UNMARKED

    @property
    def is_attended(self) -> bool:
        return self.status is AttendanceStatus.ATTENDED

    def is_same_slot(self, other: "Attendance") -> bool:
        return self.training_time == other.training_time

    def marked(self) -> Self:
        return type(self)(self.training_time, AttendanceStatus.ATTENDED)

    def unmarked(self) -> Self:
        return type(self)(self.training_time, AttendanceStatus.UNMARKED)

    def __str__(self) -> str:
        mark = "attended" if self.is_attended else "unmarked"
        return f"{self.training_time:%Y-%m-%d %H%M} ({mark})"

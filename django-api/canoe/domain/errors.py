"""Domain error codes for the canoe module."""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Broad error categories, used by handlers to choose a response."""

    MALFORMED = "MALFORMED"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"
    INVARIANT = "INVARIANT"


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_COMMAND_FORMAT = "INVALID_COMMAND_FORMAT"
    NO_STUDENTS_SPECIFIED = "NO_STUDENTS_SPECIFIED"
    TRAINING_NOT_FOUND = "TRAINING_NOT_FOUND"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    NO_STUDENTS_MATCHED = "NO_STUDENTS_MATCHED"
    REPEATED_ID = "REPEATED_ID"
    DUPLICATE_STUDENT = "DUPLICATE_STUDENT"
    DUPLICATE_TRAINING = "DUPLICATE_TRAINING"
    STUDENT_ALREADY_ENROLLED = "STUDENT_ALREADY_ENROLLED"
    STUDENT_NOT_ENROLLED = "STUDENT_NOT_ENROLLED"
    STUDENT_UNAVAILABLE = "STUDENT_UNAVAILABLE"
    TRAINING_NOT_OVER = "TRAINING_NOT_OVER"
    ATTENDANCE_NOT_FOUND = "ATTENDANCE_NOT_FOUND"
    STALE_ENTITY = "STALE_ENTITY"


ERROR_KINDS = {
    ErrorCode.INVALID_COMMAND_FORMAT: ErrorKind.MALFORMED,
    ErrorCode.NO_STUDENTS_SPECIFIED: ErrorKind.MALFORMED,
    ErrorCode.TRAINING_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.STUDENT_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.NO_STUDENTS_MATCHED: ErrorKind.NOT_FOUND,
    ErrorCode.REPEATED_ID: ErrorKind.DUPLICATE,
    ErrorCode.DUPLICATE_STUDENT: ErrorKind.DUPLICATE,
    ErrorCode.DUPLICATE_TRAINING: ErrorKind.DUPLICATE,
}


def _join_ids(ids) -> str:
    return " ".join(str(student_id) for student_id in ids)


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    @property
    def kind(self) -> ErrorKind:
        return ERROR_KINDS.get(self.code, ErrorKind.INVARIANT)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class MalformedArgumentError(DomainError):
    """Raised when a selector fails its format contract."""

    def __init__(self, usage: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_COMMAND_FORMAT,
            message=f"Invalid command format!\n{usage}",
        )
        self.usage = usage


class NoStudentsSpecifiedError(DomainError):
    """Raised when a command targeting students is given none."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_STUDENTS_SPECIFIED,
            message="At least one student must be specified",
        )


class TrainingNotFoundError(DomainError):
    """Raised when a training selector is outside the displayed list."""

    def __init__(self, index) -> None:
        super().__init__(
            code=ErrorCode.TRAINING_NOT_FOUND,
            message="The training index provided is invalid",
        )
        self.index = index


class StudentNotFoundError(DomainError):
    """Raised when a student selector resolves to no existing student."""

    def __init__(self, selector) -> None:
        super().__init__(
            code=ErrorCode.STUDENT_NOT_FOUND,
            message="One of the ids or indexes specified does not correspond to an existing student",
        )
        self.selector = selector


class NoStudentsMatchedError(DomainError):
    """Raised when a student filter matches zero students."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_STUDENTS_MATCHED,
            message="No students match the ids specified",
        )


class RepeatedSelectorError(DomainError):
    """Raised when the same target appears twice in one command."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REPEATED_ID,
            message="One of the ids is repeated",
        )


class DuplicateStudentError(DomainError):
    """Raised when a student would duplicate an existing one."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_STUDENT,
            message="This student already exists in the coach book",
        )


class DuplicateTrainingError(DomainError):
    """Raised when a training already exists at the same date-time."""

    def __init__(self, date_time) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_TRAINING,
            message=f"A training already exists at {date_time:%Y-%m-%d %H%M}",
        )
        self.date_time = date_time


class StudentAlreadyEnrolledError(DomainError):
    """Raised when students already hold the training slot."""

    def __init__(self, student_ids) -> None:
        super().__init__(
            code=ErrorCode.STUDENT_ALREADY_ENROLLED,
            message=f"These students are already scheduled for the training: {_join_ids(student_ids)}",
        )
        self.student_ids = tuple(student_ids)


class StudentNotEnrolledError(DomainError):
    """Raised when students are not in the training's roster."""

    def __init__(self, student_ids) -> None:
        super().__init__(
            code=ErrorCode.STUDENT_NOT_ENROLLED,
            message=f"These students are not inside the training specified: {_join_ids(student_ids)}",
        )
        self.student_ids = tuple(student_ids)


class StudentUnavailableError(DomainError):
    """Raised when availability is enforced and students are still in school."""

    def __init__(self, student_ids) -> None:
        super().__init__(
            code=ErrorCode.STUDENT_UNAVAILABLE,
            message=f"These students are unavailable for the training: {_join_ids(student_ids)}",
        )
        self.student_ids = tuple(student_ids)


class TrainingNotOverError(DomainError):
    """Raised when attendance is marked for a training yet to happen."""

    def __init__(self, date_time) -> None:
        super().__init__(
            code=ErrorCode.TRAINING_NOT_OVER,
            message="The training is yet to be conducted, and attendance cannot be marked yet",
        )
        self.date_time = date_time


class AttendanceNotFoundError(DomainError):
    """Raised when students have no attendance entry for the training."""

    def __init__(self, student_ids) -> None:
        super().__init__(
            code=ErrorCode.ATTENDANCE_NOT_FOUND,
            message=f"These students do not have the specified training scheduled: {_join_ids(student_ids)}",
        )
        self.student_ids = tuple(student_ids)


class StaleEntityError(DomainError):
    """Raised when a store is asked to replace or remove a snapshot it no longer holds."""

    def __init__(self, entity) -> None:
        super().__init__(
            code=ErrorCode.STALE_ENTITY,
            message="The record being changed no longer exists; no changes were made",
        )
        self.entity = entity

"""Commands that mark or unmark attendance for a training.

Attendance is a two-state machine per (student, training) pair:
UNMARKED -> ATTENDED once the training has started, ATTENDED -> UNMARKED
at any time.
"""

import logging
from abc import abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Self

from canoe.commands.base import (
    Clock,
    Command,
    CommandResult,
    format_ids,
    parse_student_ids,
    resolve_training,
    show_all,
)
from canoe.domain import Attendance, Index, Student, Training
from canoe.domain.errors import (
    AttendanceNotFoundError,
    NoStudentsMatchedError,
    TrainingNotOverError,
)
from canoe.domain.predicates import SHOW_ALL, StudentIdsPredicate
from canoe.domain.rules import can_mark, has_slot
from canoe.stores.interfaces import ModelStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _AttendanceCommand(Command):
    training_index: Index
    predicate: Callable[[Student], bool]

    verb = ""

    @classmethod
    def for_ids(cls, training_index: Index, student_ids: Sequence[str], **kwargs) -> Self:
        """Build the command from raw student id selectors."""
        ids = parse_student_ids(student_ids, cls.usage)
        return cls(training_index, StudentIdsPredicate(frozenset(ids)), **kwargs)

    def check_training(self, training: Training) -> None:
        """Reject a training the transition cannot apply to. Any training by default."""

    @abstractmethod
    def transition(self, attendance: Attendance) -> Attendance:
        ...

    def execute(self, model: ModelStore) -> CommandResult:
        self.log_start()
        training = resolve_training(model, self.training_index)
        self.check_training(training)

        model.set_student_filter(self.predicate)
        try:
            students = model.list_students()
        finally:
            model.set_student_filter(SHOW_ALL)

        if not students:
            logger.warning("Ids match zero students")
            raise NoStudentsMatchedError()

        missing = [s.id for s in students if not has_slot(s, training.date_time)]
        if missing:
            logger.warning("Some students do not contain %s", training)
            raise AttendanceNotFoundError(missing)

        edited = [
            (s, s.with_attendance_replaced(self.transition(s.attendance_at(training.date_time))))
            for s in students
        ]
        with model.atomic():
            for old, new in edited:
                model.replace_student(old, new)

        show_all(model)
        affected = tuple(s.id for s in students)
        return CommandResult(
            message=f"{self.verb} these students for their attendance: {format_ids(affected)}",
            affected_ids=affected,
        )


@dataclass(frozen=True)
class MarkAttendanceCommand(_AttendanceCommand):
    """Marks matching students as having attended a past training."""

    usage = (
        "mark-attendance: Marks the students in the training session whose ids match as attended.\n"
        "Parameters: TRAINING_INDEX id/STUDENT_ID[,STUDENT_ID]...\n"
        "Example: mark-attendance 2 id/1,4,19"
    )
    verb = "Marked"

    clock: Clock = field(default=datetime.now, compare=False)

    def check_training(self, training: Training) -> None:
        if not can_mark(training, self.clock()):
            logger.warning("%s has not taken place yet", training)
            raise TrainingNotOverError(training.date_time)

    def transition(self, attendance: Attendance) -> Attendance:
        return attendance.marked()


@dataclass(frozen=True)
class UnmarkAttendanceCommand(_AttendanceCommand):
    """Reverts matching students' attendance for a training to unmarked."""

    usage = (
        "unmark-attendance: Unmarks the students in the training session whose ids match.\n"
        "Parameters: TRAINING_INDEX id/STUDENT_ID[,STUDENT_ID]...\n"
        "Example: unmark-attendance 2 id/1,4,19"
    )
    verb = "Unmarked"

    def transition(self, attendance: Attendance) -> Attendance:
        return attendance.unmarked()

"""Commands that enroll students in, or withdraw them from, a training."""

import logging
from dataclasses import dataclass, field

from canoe.commands.base import (
    Command,
    CommandResult,
    format_ids,
    require_students_specified,
    require_unique,
    resolve_students,
    resolve_training,
    show_all,
)
from canoe.domain import Attendance, Index, Student, Training
from canoe.domain.errors import (
    StudentAlreadyEnrolledError,
    StudentNotEnrolledError,
    StudentUnavailableError,
)
from canoe.domain.rules import contains_student, has_slot, is_available_at
from canoe.stores.interfaces import ModelStore

logger = logging.getLogger(__name__)


def _resolve_targets(command, model: ModelStore) -> tuple[Training, list[Student]]:
    """Run the selector preconditions shared by enrollment commands, in order."""
    require_students_specified(command.student_ids)
    training = resolve_training(model, command.training_index)
    students = resolve_students(model, command.student_ids, command.usage)
    require_unique([student.id for student in students])
    return training, students


@dataclass(frozen=True)
class AddStudentToTrainingCommand(Command):
    """Adds students to the training at a displayed index.

    A student still in school at the training time is enrolled with a warning,
    unless enforce_availability is set.
    """

    usage = (
        "ts-add: Adds the corresponding students to the specified training session\n"
        "Parameters: TRAINING_INDEX id/STUDENT_ID[,STUDENT_ID]...\n"
        "Example: ts-add 1 id/3,5,7"
    )

    training_index: Index
    student_ids: tuple[str, ...]
    enforce_availability: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "student_ids", tuple(self.student_ids))

    def execute(self, model: ModelStore) -> CommandResult:
        self.log_start()
        training, students = _resolve_targets(self, model)

        enrolled = [
            s.id for s in students
            if has_slot(s, training.date_time) or contains_student(training, s.id)
        ]
        if enrolled:
            logger.warning("Students %s already enrolled", format_ids(enrolled))
            raise StudentAlreadyEnrolledError(enrolled)

        warnings = ()
        unavailable = [s.id for s in students if not is_available_at(s, training.date_time)]
        if unavailable:
            logger.warning("Students %s unavailable for %s", format_ids(unavailable), training)
            if self.enforce_availability:
                raise StudentUnavailableError(unavailable)
            warnings = (
                f"These students are still in school at the training time: {format_ids(unavailable)}",
            )

        edited_training = training
        edited_students = []
        for student in students:
            edited_training = edited_training.with_student(student.id)
            edited_students.append(
                (student, student.with_attendance(Attendance(training.date_time)))
            )

        with model.atomic():
            for old, new in edited_students:
                model.replace_student(old, new)
            model.replace_training(training, edited_training)

        show_all(model)
        affected = tuple(student.id for student in students)
        return CommandResult(
            message=f"Added Students: {format_ids(affected)} to Training Session {self.training_index}",
            affected_ids=affected,
            warnings=warnings,
        )


@dataclass(frozen=True)
class DeleteStudentFromTrainingCommand(Command):
    """Deletes students from the training at a displayed index."""

    usage = (
        "ts-delete: Deletes the corresponding students from the specified training session\n"
        "Parameters: TRAINING_INDEX id/STUDENT_ID[,STUDENT_ID]...\n"
        "Example: ts-delete 1 id/3,5,7"
    )

    training_index: Index
    student_ids: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "student_ids", tuple(self.student_ids))

    def execute(self, model: ModelStore) -> CommandResult:
        self.log_start()
        training, students = _resolve_targets(self, model)

        not_enrolled = [s.id for s in students if not contains_student(training, s.id)]
        if not_enrolled:
            logger.warning("Students %s not in %s", format_ids(not_enrolled), training)
            raise StudentNotEnrolledError(not_enrolled)

        edited_training = training
        edited_students = []
        for student in students:
            edited_training = edited_training.without_student(student.id)
            edited_students.append((student, student.without_attendance(training.date_time)))

        with model.atomic():
            for old, new in edited_students:
                model.replace_student(old, new)
            model.replace_training(training, edited_training)

        show_all(model)
        affected = tuple(student.id for student in students)
        return CommandResult(
            message=f"Deleted Students: {format_ids(affected)} from Training Session {self.training_index}",
            affected_ids=affected,
        )

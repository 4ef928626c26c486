"""Commands that create and delete training sessions."""

import logging
from dataclasses import dataclass
from datetime import datetime

from canoe.commands.base import Command, CommandResult, format_ids, resolve_training, show_all
from canoe.domain import Index, Training
from canoe.domain.errors import DuplicateTrainingError
from canoe.stores.interfaces import ModelStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddTrainingCommand(Command):
    """Schedules a training. Times are kept to the minute."""

    usage = (
        "training: Adds a training session.\n"
        "Parameters: d/YYYY-MM-DD HHMM\n"
        "Example: training d/2021-03-12 1600"
    )

    date_time: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "date_time", self.date_time.replace(second=0, microsecond=0))

    def execute(self, model: ModelStore) -> CommandResult:
        self.log_start()
        if model.get_training(self.date_time) is not None:
            logger.warning("Training at %s already exists", self.date_time)
            raise DuplicateTrainingError(self.date_time)

        training = Training(self.date_time)
        with model.atomic():
            model.add_training(training)

        show_all(model)
        return CommandResult(message=f"New training added: {training}")


@dataclass(frozen=True)
class DeleteTrainingCommand(Command):
    """Deletes the training at a displayed index.

    Every enrolled student loses their attendance for it in the same batch.
    """

    usage = (
        "training-delete: Deletes the training identified by the index number used "
        "in the displayed training list.\n"
        "Parameters: INDEX\n"
        "Example: training-delete 1"
    )

    index: Index

    def execute(self, model: ModelStore) -> CommandResult:
        self.log_start()
        training = resolve_training(model, self.index)

        cascade = []
        for student_id in training.student_ids:
            student = model.get_student(student_id)
            assert student is not None, f"roster of {training} names missing student {student_id}"
            cascade.append(student)
        rostered = set(training.student_ids)
        cascade.extend(
            student
            for student in model.all_students()
            if student.has_attendance_at(training.date_time) and student.id not in rostered
        )
        edits = [(s, s.without_attendance(training.date_time)) for s in cascade]

        with model.atomic():
            for old, new in edits:
                model.replace_student(old, new)
            model.remove_training(training)

        show_all(model)
        affected = tuple(student.id for student in cascade)
        logger.info("Deleted %s, removed attendance of %s", training, format_ids(affected) or "no students")
        return CommandResult(
            message=f"Deleted Training: {training}",
            affected_ids=affected,
        )

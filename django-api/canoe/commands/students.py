"""Commands that create, edit and delete students."""

import logging
from dataclasses import dataclass, fields, replace

from canoe.commands.base import Command, CommandResult, resolve_student_at, show_all
from canoe.domain import (
    AcademicYear,
    DismissalTime,
    Email,
    Index,
    Name,
    Phone,
    Student,
    Tag,
)
from canoe.domain.errors import DuplicateStudentError, MalformedArgumentError
from canoe.domain.rules import unavailable_slots
from canoe.stores.interfaces import ModelStore

logger = logging.getLogger(__name__)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")


@dataclass(frozen=True)
class AddStudentCommand(Command):
    """Adds a new student. The store issues the student's id."""

    usage = (
        "add: Adds a student to the coach book.\n"
        "Parameters: n/NAME p/PHONE e/EMAIL y/ACADEMIC_YEAR [t/TAG]...\n"
        "Example: add n/John Doe p/98765432 e/johnd@example.com y/2 t/friends"
    )

    student: Student

    def execute(self, model: ModelStore) -> CommandResult:
        self.log_start()
        if any(self.student.is_same_student(other) for other in model.all_students()):
            logger.warning("Duplicate student %s", self.student.name)
            raise DuplicateStudentError()

        with model.atomic():
            stored = model.add_student(replace(self.student, attendances=()))

        show_all(model)
        return CommandResult(
            message=f"New student added: {stored}",
            affected_ids=(stored.id,),
        )


@dataclass(frozen=True)
class StudentEdits:
    """Fields to change on a student. None leaves a field as it is."""

    name: Name | None = None
    phone: Phone | None = None
    email: Email | None = None
    academic_year: AcademicYear | None = None
    tags: frozenset[Tag] | None = None
    monday: DismissalTime | None = None
    tuesday: DismissalTime | None = None
    wednesday: DismissalTime | None = None
    thursday: DismissalTime | None = None
    friday: DismissalTime | None = None

    def is_any_field_edited(self) -> bool:
        return any(getattr(self, f.name) is not None for f in fields(self))

    def apply(self, student: Student) -> Student:
        changes = {
            name: getattr(self, name)
            for name in ("name", "phone", "email", "academic_year", "tags")
            if getattr(self, name) is not None
        }
        dismissal = student.dismissal
        for weekday, day in enumerate(WEEKDAYS):
            if getattr(self, day) is not None:
                dismissal = dismissal.with_day(weekday, getattr(self, day))
        return student.with_details(dismissal=dismissal, **changes)


@dataclass(frozen=True)
class EditStudentCommand(Command):
    """Edits the student at a displayed index.

    Scheduled trainings that clash with new dismissal times are reported as
    warnings; the student stays enrolled.
    """

    usage = (
        "edit: Edits the details of the student identified by the index number used "
        "in the displayed student list.\n"
        "Parameters: INDEX [n/NAME] [p/PHONE] [e/EMAIL] [y/ACADEMIC_YEAR] [t/TAG]... "
        "[mon/HHMM] [tue/HHMM] [wed/HHMM] [thu/HHMM] [fri/HHMM]\n"
        "Example: edit 1 p/91234567 mon/1500"
    )

    index: Index
    edits: StudentEdits

    def execute(self, model: ModelStore) -> CommandResult:
        self.log_start()
        if not self.edits.is_any_field_edited():
            logger.warning("No fields to edit")
            raise MalformedArgumentError(self.usage)

        student = resolve_student_at(model, self.index)
        edited = self.edits.apply(student)
        if any(
            edited.is_same_student(other)
            for other in model.all_students()
            if other.id != student.id
        ):
            logger.warning("Edit would duplicate another student")
            raise DuplicateStudentError()

        with model.atomic():
            model.replace_student(student, edited)

        show_all(model)
        clashes = unavailable_slots(edited)
        warnings = tuple(
            f"Student {edited.id} is still in school for the training at {clash:%Y-%m-%d %H%M}"
            for clash in clashes
        )
        if clashes:
            logger.info("Edited student %s clashes with %d trainings", edited.id, len(clashes))
        return CommandResult(
            message=f"Edited Student: {edited}",
            affected_ids=(edited.id,),
            warnings=warnings,
        )


@dataclass(frozen=True)
class DeleteStudentCommand(Command):
    """Deletes the student at a displayed index and removes them from every roster."""

    usage = (
        "delete: Deletes the student identified by the index number used in the displayed student list.\n"
        "Parameters: INDEX\n"
        "Example: delete 1"
    )

    index: Index

    def execute(self, model: ModelStore) -> CommandResult:
        self.log_start()
        student = resolve_student_at(model, self.index)

        cascade = [
            (training, training.without_student(student.id))
            for training in model.all_trainings()
            if training.has_student(student.id) or student.has_attendance_at(training.date_time)
        ]

        with model.atomic():
            for old, new in cascade:
                model.replace_training(old, new)
            model.remove_student(student)

        show_all(model)
        logger.info("Deleted student %s from %d trainings", student.id, len(cascade))
        return CommandResult(
            message=f"Deleted Student: {student}",
            affected_ids=(student.id,),
        )

"""Command base class and helpers shared by every command.

Commands:
- Validate every precondition against the current store snapshot first
- Apply all edits inside store.atomic() only after validation passes
- Raise domain errors on failure, leaving the store untouched
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from canoe.domain import Index, Student, StudentId, Training
from canoe.domain.errors import (
    MalformedArgumentError,
    NoStudentsSpecifiedError,
    RepeatedSelectorError,
    StudentNotFoundError,
    TrainingNotFoundError,
)
from canoe.domain.predicates import SHOW_ALL
from canoe.domain.rules import has_unique_entries, is_valid_id
from canoe.stores.interfaces import ModelStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a successful command."""

    message: str
    affected_ids: tuple[StudentId, ...] = ()
    warnings: tuple[str, ...] = ()


class Command(ABC):
    """A single mutating operation on a ModelStore."""

    usage: ClassVar[str] = ""

    @abstractmethod
    def execute(self, model: ModelStore) -> CommandResult:
        ...

    def log_start(self) -> None:
        logger.info("=====[ Executing %s ]=====", type(self).__name__)


def format_ids(student_ids: Sequence[StudentId]) -> str:
    return " ".join(str(student_id) for student_id in student_ids)


def require_students_specified(raw_ids: Sequence[str]) -> None:
    if not raw_ids:
        logger.warning("No students specified")
        raise NoStudentsSpecifiedError()


def parse_student_id(raw: str, usage: str) -> StudentId:
    if not is_valid_id(raw):
        logger.warning("Student id %r is invalid", raw)
        raise MalformedArgumentError(usage)
    return StudentId.from_string(raw)


def require_unique(student_ids: Sequence[StudentId]) -> None:
    if not has_unique_entries(student_ids):
        logger.warning("Repeated id input detected")
        raise RepeatedSelectorError()


def parse_student_ids(raw_ids: Sequence[str], usage: str) -> list[StudentId]:
    """Turn raw id selectors into StudentIds.

    Raises:
        NoStudentsSpecifiedError: If raw_ids is empty.
        MalformedArgumentError: If a selector is not a positive integer.
        RepeatedSelectorError: If a selector appears twice.
    """
    require_students_specified(raw_ids)
    student_ids = [parse_student_id(raw, usage) for raw in raw_ids]
    require_unique(student_ids)
    return student_ids


def resolve_training(model: ModelStore, index: Index) -> Training:
    trainings = model.list_trainings()
    if index.zero_based >= len(trainings):
        logger.warning("Training index %s is invalid", index)
        raise TrainingNotFoundError(index)
    return trainings[index.zero_based]


def resolve_student_at(model: ModelStore, index: Index) -> Student:
    students = model.list_students()
    if index.zero_based >= len(students):
        logger.warning("Student index %s is invalid", index)
        raise StudentNotFoundError(index)
    return students[index.zero_based]


def resolve_students(model: ModelStore, raw_ids: Sequence[str], usage: str) -> list[Student]:
    """Look up each raw id selector among the displayed students, in order.

    Raises:
        MalformedArgumentError: If a selector is not a positive integer.
        StudentNotFoundError: If no displayed student has the id.
    """
    displayed = {student.id: student for student in model.list_students()}
    students = []
    for raw in raw_ids:
        student_id = parse_student_id(raw, usage)
        if student_id not in displayed:
            logger.warning("Student %s does not exist", student_id)
            raise StudentNotFoundError(student_id)
        students.append(displayed[student_id])
    return students


def show_all(model: ModelStore) -> None:
    model.set_student_filter(SHOW_ALL)
    model.set_training_filter(SHOW_ALL)

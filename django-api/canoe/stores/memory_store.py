"""In-memory implementation of the ModelStore.

Students and trainings live in arenas keyed by id and date-time.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from canoe.domain import Student, StudentId, Training
from canoe.domain.errors import DuplicateStudentError, DuplicateTrainingError, StaleEntityError
from canoe.domain.predicates import SHOW_ALL
from canoe.stores.interfaces import ModelStore, StudentPredicate, TrainingPredicate

logger = logging.getLogger(__name__)


class InMemoryModelStore(ModelStore):
    """Dictionary-backed store. Used by tests and as a scratch model."""

    def __init__(
        self,
        students: list[Student] | None = None,
        trainings: list[Training] | None = None,
    ) -> None:
        self._students: dict[StudentId, Student] = {}
        self._trainings: dict[datetime, Training] = {}
        self._last_id = 0
        self._student_filter: StudentPredicate = SHOW_ALL
        self._training_filter: TrainingPredicate = SHOW_ALL
        for training in trainings or []:
            self.add_training(training)
        for student in students or []:
            self.add_student(student)

    def list_students(self) -> list[Student]:
        return [s for s in self.all_students() if self._student_filter(s)]

    def list_trainings(self) -> list[Training]:
        return [t for t in self.all_trainings() if self._training_filter(t)]

    def all_students(self) -> list[Student]:
        return [self._students[key] for key in sorted(self._students)]

    def all_trainings(self) -> list[Training]:
        return [self._trainings[key] for key in sorted(self._trainings)]

    def get_student(self, student_id: StudentId) -> Student | None:
        return self._students.get(student_id)

    def get_training(self, date_time: datetime) -> Training | None:
        return self._trainings.get(date_time)

    def add_student(self, student: Student) -> Student:
        if student.id.is_placeholder:
            student = student.with_valid_id(StudentId(self._last_id + 1))
        elif student.id in self._students:
            raise DuplicateStudentError()
        self._last_id = max(self._last_id, student.id.value)
        self._students[student.id] = student
        logger.debug("Stored student %s", student.id)
        return student

    def add_training(self, training: Training) -> Training:
        if training.date_time in self._trainings:
            raise DuplicateTrainingError(training.date_time)
        self._trainings[training.date_time] = training
        return training

    def replace_student(self, old: Student, new: Student) -> None:
        if old.id not in self._students:
            raise StaleEntityError(old)
        assert new.id == old.id, "a replacement must keep the student id"
        self._students[old.id] = new

    def replace_training(self, old: Training, new: Training) -> None:
        if old.date_time not in self._trainings:
            raise StaleEntityError(old)
        if new.date_time != old.date_time and new.date_time in self._trainings:
            raise DuplicateTrainingError(new.date_time)
        del self._trainings[old.date_time]
        self._trainings[new.date_time] = new

    def remove_student(self, student: Student) -> None:
        if self._students.pop(student.id, None) is None:
            raise StaleEntityError(student)

    def remove_training(self, training: Training) -> None:
        if self._trainings.pop(training.date_time, None) is None:
            raise StaleEntityError(training)

    def set_student_filter(self, predicate: StudentPredicate) -> None:
        self._student_filter = predicate

    def set_training_filter(self, predicate: TrainingPredicate) -> None:
        self._training_filter = predicate

    @contextmanager
    def atomic(self) -> Iterator[None]:
        students = dict(self._students)
        trainings = dict(self._trainings)
        last_id = self._last_id
        try:
            yield
        except Exception:
            logger.warning("Rolling back in-memory changes")
            self._students = students
            self._trainings = trainings
            self._last_id = last_id
            raise

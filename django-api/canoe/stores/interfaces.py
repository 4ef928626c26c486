"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractContextManager
from datetime import datetime

from canoe.domain import Student, StudentId, Training
from canoe.domain.rules import find_inconsistencies

StudentPredicate = Callable[[Student], bool]
TrainingPredicate = Callable[[Training], bool]


class ModelStore(ABC):
    """Interface for the student and training collections commands act on.

    The store is the only mutable resource. Commands read snapshots, compute
    edited copies and write them back through the replace operations.
    """

    @abstractmethod
    def list_students(self) -> list[Student]:
        """Return students passing the student filter, ordered by id."""
        ...

    @abstractmethod
    def list_trainings(self) -> list[Training]:
        """Return trainings passing the training filter, ordered by date-time."""
        ...

    @abstractmethod
    def get_student(self, student_id: StudentId) -> Student | None:
        """Return a student by id regardless of the filter, or None if not found."""
        ...

    @abstractmethod
    def get_training(self, date_time: datetime) -> Training | None:
        """Return a training by date-time regardless of the filter, or None if not found."""
        ...

    @abstractmethod
    def add_student(self, student: Student) -> Student:
        """Store a new student, issuing a fresh id if it carries the placeholder.

        Returns the stored snapshot.
        """
        ...

    @abstractmethod
    def add_training(self, training: Training) -> Training:
        """Store a new training."""
        ...

    @abstractmethod
    def replace_student(self, old: Student, new: Student) -> None:
        """Swap the snapshot with old's id for new.

        Raises:
            StaleEntityError: If no student with old's id is stored.
        """
        ...

    @abstractmethod
    def replace_training(self, old: Training, new: Training) -> None:
        """Swap the snapshot at old's date-time for new.

        Raises:
            StaleEntityError: If no training at old's date-time is stored.
        """
        ...

    @abstractmethod
    def remove_student(self, student: Student) -> None:
        """Raises StaleEntityError if the student is not stored."""
        ...

    @abstractmethod
    def remove_training(self, training: Training) -> None:
        """Raises StaleEntityError if the training is not stored."""
        ...

    @abstractmethod
    def set_student_filter(self, predicate: StudentPredicate) -> None:
        ...

    @abstractmethod
    def set_training_filter(self, predicate: TrainingPredicate) -> None:
        ...

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group writes so they are all applied or, on exception, none are."""
        ...

    @abstractmethod
    def all_students(self) -> list[Student]:
        """Return every student, ignoring the filter."""
        ...

    @abstractmethod
    def all_trainings(self) -> list[Training]:
        """Return every training, ignoring the filter."""
        ...

    def check_integrity(self) -> list[str]:
        """Return descriptions of any broken student/training cross-reference."""
        return find_inconsistencies(self.all_students(), self.all_trainings())

"""Filter predicates applied to a store's displayed lists."""

from dataclasses import dataclass

from canoe.domain.models import Student
from canoe.domain.value_objects import StudentId


def SHOW_ALL(entity) -> bool:
    return True


@dataclass(frozen=True)
class StudentIdsPredicate:
    """Matches students whose id is one of the given ids."""

    student_ids: frozenset[StudentId]

    def __call__(self, student: Student) -> bool:
        return student.id in self.student_ids

"""Unit tests for adding students to and deleting them from trainings.

Run with: pytest tests/test_enrollment.py -v
"""

import pytest
from constants import PAST_MONDAY, PAST_SATURDAY

from canoe.commands import (
    AddStudentToTrainingCommand,
    DeleteStudentFromTrainingCommand,
    MarkAttendanceCommand,
)
from canoe.domain import Index, StudentId
from canoe.domain.errors import (
    MalformedArgumentError,
    NoStudentsSpecifiedError,
    RepeatedSelectorError,
    StudentAlreadyEnrolledError,
    StudentNotEnrolledError,
    StudentNotFoundError,
    StudentUnavailableError,
    TrainingNotFoundError,
)


def snapshot(store):
    return store.all_students(), store.all_trainings()


class TestAddStudentToTraining:
    """Tests for AddStudentToTrainingCommand."""

    def test_enrolls_on_both_sides(self, store):
        """Roster and attendance collection both gain the enrollment."""
        result = AddStudentToTrainingCommand(Index(2), ["1", "3"]).execute(store)

        training = store.get_training(PAST_SATURDAY)
        assert training.student_ids == (StudentId(1), StudentId(3))
        for student_id in (1, 3):
            attendance = store.get_student(StudentId(student_id)).attendance_at(PAST_SATURDAY)
            assert attendance is not None and not attendance.is_attended
        assert not store.get_student(StudentId(2)).has_attendance_at(PAST_SATURDAY)
        assert result.affected_ids == (StudentId(1), StudentId(3))
        assert result.message == "Added Students: 1 3 to Training Session 2"
        assert store.check_integrity() == []

    def test_requires_a_student(self, store):
        """An empty selector list is rejected."""
        with pytest.raises(NoStudentsSpecifiedError):
            AddStudentToTrainingCommand(Index(1), []).execute(store)

    def test_training_index_out_of_range(self, store):
        """An index past the displayed trainings is rejected."""
        with pytest.raises(TrainingNotFoundError):
            AddStudentToTrainingCommand(Index(4), ["1"]).execute(store)

    def test_training_checked_before_student_format(self, store):
        """A bad training index is reported ahead of a malformed student id."""
        with pytest.raises(TrainingNotFoundError):
            AddStudentToTrainingCommand(Index(9), ["abc"]).execute(store)

    @pytest.mark.parametrize("raw", ["0", "abc", "-2"])
    def test_malformed_student_id(self, store, raw):
        """A malformed id reports the command usage."""
        with pytest.raises(MalformedArgumentError) as excinfo:
            AddStudentToTrainingCommand(Index(1), ["1", raw]).execute(store)
        assert "ts-add" in excinfo.value.usage

    def test_unknown_student(self, store):
        """An unknown id rejects the batch and leaves the store untouched."""
        before = snapshot(store)
        with pytest.raises(StudentNotFoundError):
            AddStudentToTrainingCommand(Index(1), ["1", "42"]).execute(store)
        assert snapshot(store) == before

    def test_displayed_students_listed_once(self, store, monkeypatch):
        """Every selector is resolved against a single listing of the students."""
        list_students = store.list_students
        calls = []

        def counting_list_students():
            calls.append(1)
            return list_students()

        monkeypatch.setattr(store, "list_students", counting_list_students)

        AddStudentToTrainingCommand(Index(1), ["1", "2", "3"]).execute(store)

        assert len(calls) == 1

    def test_repeated_student_distinct_from_not_found(self, store):
        """A repeated id is reported as a repetition, not a missing student."""
        before = snapshot(store)
        with pytest.raises(RepeatedSelectorError):
            AddStudentToTrainingCommand(Index(1), ["1", "3", "1"]).execute(store)
        assert snapshot(store) == before

    def test_already_enrolled_rejects_whole_batch(self, store):
        """One enrolled student rejects the batch and is named in the error."""
        AddStudentToTrainingCommand(Index(2), ["1"]).execute(store)
        before = snapshot(store)

        with pytest.raises(StudentAlreadyEnrolledError) as excinfo:
            AddStudentToTrainingCommand(Index(2), ["3", "1"]).execute(store)

        assert excinfo.value.student_ids == (StudentId(1),)
        assert snapshot(store) == before

    def test_unavailable_student_enrolled_with_warning(self, store):
        """Student 2 is in school until 17:00 on Monday; the coach may still add them."""
        result = AddStudentToTrainingCommand(Index(1), ["2"]).execute(store)

        assert store.get_training(PAST_MONDAY).has_student(StudentId(2))
        assert result.warnings == ("These students are still in school at the training time: 2",)

    def test_unavailable_student_rejected_when_enforced(self, store):
        """With enforcement on, a clash rejects the whole batch."""
        before = snapshot(store)
        command = AddStudentToTrainingCommand(Index(1), ["1", "2"], enforce_availability=True)

        with pytest.raises(StudentUnavailableError) as excinfo:
            command.execute(store)

        assert excinfo.value.student_ids == (StudentId(2),)
        assert snapshot(store) == before

    def test_commands_compare_by_arguments(self):
        """Commands with the same arguments are equal."""
        assert AddStudentToTrainingCommand(Index(1), ["1", "2"]) == AddStudentToTrainingCommand(
            Index(1), ("1", "2")
        )
        assert AddStudentToTrainingCommand(Index(1), ["1"]) != AddStudentToTrainingCommand(
            Index(2), ["1"]
        )


class TestDeleteStudentFromTraining:
    """Tests for DeleteStudentFromTrainingCommand."""

    @pytest.fixture(autouse=True)
    def enrolled(self, store):
        """All three students are enrolled in training 1."""
        AddStudentToTrainingCommand(Index(1), ["1", "2", "3"]).execute(store)

    def test_removes_on_both_sides(self, store):
        """Roster and attendance collection both lose the enrollment."""
        result = DeleteStudentFromTrainingCommand(Index(1), ["1", "3"]).execute(store)

        assert store.get_training(PAST_MONDAY).student_ids == (StudentId(2),)
        assert not store.get_student(StudentId(1)).has_attendance_at(PAST_MONDAY)
        assert not store.get_student(StudentId(3)).has_attendance_at(PAST_MONDAY)
        assert store.get_student(StudentId(2)).has_attendance_at(PAST_MONDAY)
        assert result.message == "Deleted Students: 1 3 from Training Session 1"
        assert store.check_integrity() == []

    def test_not_enrolled_rejects_whole_batch(self, store):
        """A student not on the roster rejects the batch."""
        before = snapshot(store)

        with pytest.raises(StudentNotEnrolledError) as excinfo:
            DeleteStudentFromTrainingCommand(Index(2), ["1"]).execute(store)

        assert excinfo.value.student_ids == (StudentId(1),)
        assert snapshot(store) == before

    def test_partially_enrolled_batch_changes_nothing(self, store):
        """A batch with one unenrolled student removes nobody."""
        DeleteStudentFromTrainingCommand(Index(1), ["2"]).execute(store)
        before = snapshot(store)

        with pytest.raises(StudentNotEnrolledError):
            DeleteStudentFromTrainingCommand(Index(1), ["1", "2", "3"]).execute(store)

        assert snapshot(store) == before

    def test_repeated_id(self, store):
        """A repeated id is rejected."""
        with pytest.raises(RepeatedSelectorError):
            DeleteStudentFromTrainingCommand(Index(1), ["3", "3"]).execute(store)

    def test_requires_a_student(self, store):
        """An empty selector list is rejected."""
        with pytest.raises(NoStudentsSpecifiedError):
            DeleteStudentFromTrainingCommand(Index(1), []).execute(store)

    def test_marked_attendance_is_removed_too(self, store, clock):
        """A marked attendance is removed along with the enrollment."""
        MarkAttendanceCommand.for_ids(Index(1), ["1"], clock=clock).execute(store)
        DeleteStudentFromTrainingCommand(Index(1), ["1"]).execute(store)

        assert not store.get_student(StudentId(1)).has_attendance_at(PAST_MONDAY)
        assert store.check_integrity() == []

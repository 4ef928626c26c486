"""Unit tests for marking and unmarking attendance.

Run with: pytest tests/test_attendance.py -v
"""

import pytest
from constants import NEXT_WEDNESDAY, PAST_MONDAY

from canoe.commands import AddStudentToTrainingCommand, MarkAttendanceCommand, UnmarkAttendanceCommand
from canoe.commands.attendance import _AttendanceCommand
from canoe.domain import Index, StudentId
from canoe.domain.errors import (
    AttendanceNotFoundError,
    MalformedArgumentError,
    NoStudentsMatchedError,
    NoStudentsSpecifiedError,
    RepeatedSelectorError,
    TrainingNotFoundError,
    TrainingNotOverError,
)
from canoe.domain.predicates import SHOW_ALL, StudentIdsPredicate


def snapshot(store):
    return store.all_students(), store.all_trainings()


def attended(store, student_id, slot=PAST_MONDAY):
    return store.get_student(StudentId(student_id)).attendance_at(slot).is_attended


@pytest.fixture(autouse=True)
def enrolled(store):
    """Students 1 and 3 are enrolled in the past Monday and the upcoming Wednesday trainings."""
    AddStudentToTrainingCommand(Index(1), ["1", "3"]).execute(store)
    AddStudentToTrainingCommand(Index(3), ["1", "3"]).execute(store)


class TestMarkAttendance:
    """Tests for MarkAttendanceCommand."""

    def test_marks_matching_students(self, store, clock):
        """Only the selected students are marked."""
        result = MarkAttendanceCommand.for_ids(Index(1), ["1"], clock=clock).execute(store)

        assert attended(store, 1)
        assert not attended(store, 3)
        assert result.affected_ids == (StudentId(1),)
        assert result.message == "Marked these students for their attendance: 1"

    def test_roster_unchanged_by_marking(self, store, clock):
        """Marking leaves every roster as it was."""
        trainings = store.all_trainings()
        MarkAttendanceCommand.for_ids(Index(1), ["1", "3"], clock=clock).execute(store)
        assert store.all_trainings() == trainings
        assert store.check_integrity() == []

    def test_future_training_rejected(self, store, clock):
        """An upcoming training cannot be marked."""
        before = snapshot(store)

        with pytest.raises(TrainingNotOverError):
            MarkAttendanceCommand.for_ids(Index(3), ["1"], clock=clock).execute(store)

        assert snapshot(store) == before

    def test_training_starting_now_can_be_marked(self, store):
        """A training can be marked at its start time."""
        MarkAttendanceCommand.for_ids(Index(1), ["3"], clock=lambda: PAST_MONDAY).execute(store)
        assert attended(store, 3)

    def test_missing_attendance_aborts_whole_batch(self, store, clock):
        """Student 2 is not enrolled, so student 1 is not marked either."""
        before = snapshot(store)

        with pytest.raises(AttendanceNotFoundError) as excinfo:
            MarkAttendanceCommand.for_ids(Index(1), ["1", "2", "3"], clock=clock).execute(store)

        assert excinfo.value.student_ids == (StudentId(2),)
        assert snapshot(store) == before

    def test_no_matching_students(self, store, clock):
        """Ids matching nobody are rejected."""
        with pytest.raises(NoStudentsMatchedError):
            MarkAttendanceCommand.for_ids(Index(1), ["99"], clock=clock).execute(store)

    def test_training_index_out_of_range(self, store, clock):
        """An index past the displayed trainings is rejected."""
        with pytest.raises(TrainingNotFoundError):
            MarkAttendanceCommand.for_ids(Index(5), ["1"], clock=clock).execute(store)

    def test_filter_restored_after_failure(self, store, clock):
        """The student filter is cleared even when the command fails."""
        with pytest.raises(AttendanceNotFoundError):
            MarkAttendanceCommand.for_ids(Index(1), ["2"], clock=clock).execute(store)
        assert len(store.list_students()) == 3

    def test_accepts_any_student_predicate(self, store, clock):
        """Any student predicate can select who is marked."""
        command = MarkAttendanceCommand(
            Index(1), lambda student: student.academic_year.value == 3, clock=clock
        )
        command.execute(store)
        assert attended(store, 3)
        assert not attended(store, 1)

    def test_marking_twice_keeps_attended(self, store, clock):
        """Marking an attended student again keeps them attended."""
        command = MarkAttendanceCommand.for_ids(Index(1), ["1"], clock=clock)
        command.execute(store)
        command.execute(store)
        assert attended(store, 1)


class TestForIds:
    """Tests for building attendance commands from raw ids."""

    def test_base_command_is_abstract(self):
        """Only commands that define an attendance transition can be built."""
        with pytest.raises(TypeError):
            _AttendanceCommand(Index(1), SHOW_ALL)

    def test_builds_id_predicate(self):
        """for_ids turns the selectors into an id predicate."""
        command = UnmarkAttendanceCommand.for_ids(Index(1), ["4", "2"])
        assert command.predicate == StudentIdsPredicate(frozenset({StudentId(2), StudentId(4)}))

    def test_rejects_malformed_ids(self):
        """A malformed id is rejected before execution."""
        with pytest.raises(MalformedArgumentError):
            MarkAttendanceCommand.for_ids(Index(1), ["1", "x"])

    def test_rejects_repeated_ids(self):
        """A repeated id is rejected before execution."""
        with pytest.raises(RepeatedSelectorError):
            MarkAttendanceCommand.for_ids(Index(1), ["1", "1"])

    def test_rejects_empty_ids(self):
        """An empty selector list is rejected before execution."""
        with pytest.raises(NoStudentsSpecifiedError):
            UnmarkAttendanceCommand.for_ids(Index(1), [])


class TestUnmarkAttendance:
    """Tests for UnmarkAttendanceCommand."""

    def test_round_trip(self, store, clock):
        """mark(unmark(mark(a))) leaves the same state as mark(a)."""
        mark = MarkAttendanceCommand.for_ids(Index(1), ["1", "3"], clock=clock)
        mark.execute(store)
        marked_state = snapshot(store)

        UnmarkAttendanceCommand.for_ids(Index(1), ["1", "3"]).execute(store)
        assert not attended(store, 1)
        assert not attended(store, 3)

        mark.execute(store)
        assert snapshot(store) == marked_state

    def test_no_time_constraint(self, store):
        """Unmarking an upcoming training is allowed."""
        result = UnmarkAttendanceCommand.for_ids(Index(3), ["1"]).execute(store)
        assert not attended(store, 1, NEXT_WEDNESDAY)
        assert result.message == "Unmarked these students for their attendance: 1"

    def test_missing_attendance_aborts_whole_batch(self, store, clock):
        """A student without the training rejects the batch and earlier marks stay."""
        MarkAttendanceCommand.for_ids(Index(1), ["1", "3"], clock=clock).execute(store)
        before = snapshot(store)

        with pytest.raises(AttendanceNotFoundError):
            UnmarkAttendanceCommand.for_ids(Index(1), ["1", "2"]).execute(store)

        assert snapshot(store) == before
        assert attended(store, 1)

from canoe.commands.attendance import MarkAttendanceCommand, UnmarkAttendanceCommand
from canoe.commands.base import Command, CommandResult
from canoe.commands.enrollment import AddStudentToTrainingCommand, DeleteStudentFromTrainingCommand
from canoe.commands.students import (
    AddStudentCommand,
    DeleteStudentCommand,
    EditStudentCommand,
    StudentEdits,
)
from canoe.commands.trainings import AddTrainingCommand, DeleteTrainingCommand

__all__ = [
    "Command",
    "CommandResult",
    "AddStudentCommand",
    "EditStudentCommand",
    "DeleteStudentCommand",
    "StudentEdits",
    "AddTrainingCommand",
    "DeleteTrainingCommand",
    "AddStudentToTrainingCommand",
    "DeleteStudentFromTrainingCommand",
    "MarkAttendanceCommand",
    "UnmarkAttendanceCommand",
]

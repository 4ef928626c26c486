from canoe.handlers.views import (
    StudentDetailView,
    StudentListView,
    TrainingAttendanceView,
    TrainingDetailView,
    TrainingListView,
    TrainingStudentsView,
)

__all__ = [
    "StudentListView",
    "StudentDetailView",
    "TrainingListView",
    "TrainingDetailView",
    "TrainingStudentsView",
    "TrainingAttendanceView",
]

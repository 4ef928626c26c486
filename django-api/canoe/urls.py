from django.urls import path

from canoe.handlers import (
    StudentDetailView,
    StudentListView,
    TrainingAttendanceView,
    TrainingDetailView,
    TrainingListView,
    TrainingStudentsView,
)

urlpatterns = [
    path("students", StudentListView.as_view(), name="student-list"),
    path("students/<str:index>", StudentDetailView.as_view(), name="student-detail"),
    path("trainings", TrainingListView.as_view(), name="training-list"),
    path("trainings/<str:index>", TrainingDetailView.as_view(), name="training-detail"),
    path(
        "trainings/<str:index>/students",
        TrainingStudentsView.as_view(),
        name="training-students",
    ),
    path(
        "trainings/<str:index>/attendance",
        TrainingAttendanceView.as_view(),
        name="training-attendance",
    ),
]

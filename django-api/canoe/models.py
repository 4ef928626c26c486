"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
A training's roster and a student's attendance collection are both read from
AttendanceRecord, so the two sides are stored once.
"""

from django.db import models


class StudentRecord(models.Model):
    """Persistence model for students."""

    id = models.PositiveIntegerField(primary_key=True)
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=32)
    email = models.CharField(max_length=255)
    academic_year = models.PositiveSmallIntegerField()
    monday_dismissal = models.TimeField()
    tuesday_dismissal = models.TimeField()
    wednesday_dismissal = models.TimeField()
    thursday_dismissal = models.TimeField()
    friday_dismissal = models.TimeField()
    tags = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.id} {self.name}"


class TrainingRecord(models.Model):
    """Persistence model for training sessions."""

    date_time = models.DateTimeField(unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date_time"]

    def __str__(self) -> str:
        return f"Training at {self.date_time:%Y-%m-%d %H%M}"


class AttendanceRecord(models.Model):
    """Enrollment of one student in one training, with its mark."""

    class Status(models.TextChoices):
        UNMARKED = "UNMARKED", "Unmarked"
        ATTENDED = "ATTENDED", "Attended"

    student = models.ForeignKey(
        StudentRecord, on_delete=models.CASCADE, related_name="attendances"
    )
    training = models.ForeignKey(
        TrainingRecord, on_delete=models.CASCADE, related_name="attendances"
    )
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.UNMARKED
    )
    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["student", "training"], name="unique_student_training"
            ),
        ]
        indexes = [
            models.Index(fields=["training"], name="attendance_training_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.student_id} @ {self.training} ({self.status})"


class IdSequence(models.Model):
    """Highest student id ever issued, so deleted ids are never reused."""

    name = models.CharField(max_length=32, primary_key=True)
    last_value = models.PositiveIntegerField(default=0)

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="IdSequence",
            fields=[
                ("name", models.CharField(max_length=32, primary_key=True, serialize=False)),
                ("last_value", models.PositiveIntegerField(default=0)),
            ],
        ),
        migrations.CreateModel(
            name="StudentRecord",
            fields=[
                ("id", models.PositiveIntegerField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("phone", models.CharField(max_length=32)),
                ("email", models.CharField(max_length=255)),
                ("academic_year", models.PositiveSmallIntegerField()),
                ("monday_dismissal", models.TimeField()),
                ("tuesday_dismissal", models.TimeField()),
                ("wednesday_dismissal", models.TimeField()),
                ("thursday_dismissal", models.TimeField()),
                ("friday_dismissal", models.TimeField()),
                ("tags", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="TrainingRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date_time", models.DateTimeField(unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["date_time"],
            },
        ),
        migrations.CreateModel(
            name="AttendanceRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[("UNMARKED", "Unmarked"), ("ATTENDED", "Attended")],
                        default="UNMARKED",
                        max_length=16,
                    ),
                ),
                ("enrolled_at", models.DateTimeField(auto_now_add=True)),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attendances",
                        to="canoe.studentrecord",
                    ),
                ),
                (
                    "training",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attendances",
                        to="canoe.trainingrecord",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["training"], name="attendance_training_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("student", "training"), name="unique_student_training")
                ],
            },
        ),
    ]

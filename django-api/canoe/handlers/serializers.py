"""Serializers for transforming domain models to API responses and back."""

from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone
from rest_framework import serializers

from canoe.commands import StudentEdits
from canoe.domain import (
    AcademicYear,
    DismissalTime,
    Email,
    Name,
    Phone,
    Student,
    Tag,
    WeeklyDismissal,
)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")
HHMM = r"^([01]\d|2[0-3])[0-5]\d$"


def _domain_value(factory, value):
    try:
        return factory(value)
    except ValueError as exc:
        raise serializers.ValidationError(str(exc)) from exc


class AttendanceSerializer(serializers.Serializer):
    """Serializer for Attendance value objects."""

    training_time = serializers.DateTimeField()
    status = serializers.CharField(source="status.value")


class StudentSerializer(serializers.Serializer):
    """Serializer for Student domain model."""

    id = serializers.IntegerField(source="id.value")
    name = serializers.CharField(source="name.value")
    phone = serializers.CharField(source="phone.value")
    email = serializers.CharField(source="email.value")
    academic_year = serializers.IntegerField(source="academic_year.value")
    dismissal = serializers.SerializerMethodField()
    tags = serializers.SerializerMethodField()
    attendances = AttendanceSerializer(many=True)

    def get_dismissal(self, student: Student) -> dict[str, str]:
        return {day: str(getattr(student.dismissal, day)) for day in WEEKDAYS}

    def get_tags(self, student: Student) -> list[str]:
        return sorted(tag.value for tag in student.tags)


class TrainingSerializer(serializers.Serializer):
    """Serializer for Training domain model."""

    date_time = serializers.DateTimeField()
    student_ids = serializers.SerializerMethodField()

    def get_student_ids(self, training) -> list[int]:
        return [student_id.value for student_id in training.student_ids]


class CommandResultSerializer(serializers.Serializer):
    message = serializers.CharField()
    affected_ids = serializers.SerializerMethodField()
    warnings = serializers.ListField(child=serializers.CharField())

    def get_affected_ids(self, result) -> list[int]:
        return [student_id.value for student_id in result.affected_ids]


class DismissalSerializer(serializers.Serializer):
    monday = serializers.RegexField(HHMM)
    tuesday = serializers.RegexField(HHMM)
    wednesday = serializers.RegexField(HHMM)
    thursday = serializers.RegexField(HHMM)
    friday = serializers.RegexField(HHMM)


class StudentCreateSerializer(serializers.Serializer):
    """Validates a new student payload and builds the domain Student."""

    name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=32)
    email = serializers.CharField(max_length=255)
    academic_year = serializers.IntegerField()
    dismissal = DismissalSerializer()
    tags = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    def validate_name(self, value):
        return _domain_value(Name, value)

    def validate_phone(self, value):
        return _domain_value(Phone, value)

    def validate_email(self, value):
        return _domain_value(Email, value)

    def validate_academic_year(self, value):
        return _domain_value(AcademicYear, value)

    def validate_tags(self, value):
        return frozenset(_domain_value(Tag, tag) for tag in value)

    def to_domain(self) -> Student:
        data = self.validated_data
        return Student(
            name=data["name"],
            phone=data["phone"],
            email=data["email"],
            academic_year=data["academic_year"],
            dismissal=WeeklyDismissal(
                **{day: DismissalTime.from_string(data["dismissal"][day]) for day in WEEKDAYS}
            ),
            tags=data["tags"],
        )


class StudentEditSerializer(serializers.Serializer):
    """Validates a partial student edit and builds StudentEdits."""

    name = serializers.CharField(max_length=255, required=False)
    phone = serializers.CharField(max_length=32, required=False)
    email = serializers.CharField(max_length=255, required=False)
    academic_year = serializers.IntegerField(required=False)
    tags = serializers.ListField(child=serializers.CharField(), required=False)
    monday = serializers.RegexField(HHMM, required=False)
    tuesday = serializers.RegexField(HHMM, required=False)
    wednesday = serializers.RegexField(HHMM, required=False)
    thursday = serializers.RegexField(HHMM, required=False)
    friday = serializers.RegexField(HHMM, required=False)

    validate_name = StudentCreateSerializer.validate_name
    validate_phone = StudentCreateSerializer.validate_phone
    validate_email = StudentCreateSerializer.validate_email
    validate_academic_year = StudentCreateSerializer.validate_academic_year
    validate_tags = StudentCreateSerializer.validate_tags

    def to_edits(self) -> StudentEdits:
        data = dict(self.validated_data)
        for day in WEEKDAYS:
            if day in data:
                data[day] = DismissalTime.from_string(data[day])
        return StudentEdits(**data)


class ClubDateTimeField(serializers.DateTimeField):
    """Naive club-local date-time. Input with an offset is converted to TIME_ZONE."""

    def enforce_timezone(self, value):
        if timezone.is_aware(value):
            return timezone.make_naive(value, ZoneInfo(settings.TIME_ZONE))
        return value


class TrainingCreateSerializer(serializers.Serializer):
    date_time = ClubDateTimeField()


class StudentIdsSerializer(serializers.Serializer):
    """Raw student id selectors. Their format is checked by the command."""

    student_ids = serializers.ListField(
        child=serializers.CharField(allow_blank=True, trim_whitespace=False),
        allow_empty=True,
    )

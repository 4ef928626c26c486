"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Build commands and hand them to the coach service
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from collections.abc import Callable

from django.conf import settings
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from canoe.commands import (
    AddStudentCommand,
    AddStudentToTrainingCommand,
    AddTrainingCommand,
    Command,
    DeleteStudentCommand,
    DeleteStudentFromTrainingCommand,
    DeleteTrainingCommand,
    EditStudentCommand,
    MarkAttendanceCommand,
    UnmarkAttendanceCommand,
)
from canoe.domain import Index
from canoe.domain.errors import DomainError, ErrorCode, ErrorKind, MalformedArgumentError
from canoe.handlers.serializers import (
    CommandResultSerializer,
    StudentCreateSerializer,
    StudentEditSerializer,
    StudentIdsSerializer,
    StudentSerializer,
    TrainingCreateSerializer,
    TrainingSerializer,
)
from canoe.services.coach_service import CoachService
from canoe.stores.django_store import DjangoModelStore

ERROR_STATUS = {
    ErrorKind.MALFORMED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE: status.HTTP_409_CONFLICT,
    ErrorKind.INVARIANT: status.HTTP_409_CONFLICT,
}


def get_service() -> CoachService:
    return CoachService(
        DjangoModelStore(),
        enforce_availability=settings.CANOE["ENFORCE_AVAILABILITY"],
    )


def error_response(error: DomainError) -> Response:
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=ERROR_STATUS[error.kind],
    )


def invalid_payload(errors) -> Response:
    return Response(
        {
            "error": {
                "code": ErrorCode.INVALID_COMMAND_FORMAT.value,
                "message": "Invalid request payload",
                "fields": errors,
            }
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def parse_index(raw: str, usage: str) -> Index:
    try:
        return Index.from_string(raw)
    except ValueError:
        raise MalformedArgumentError(usage) from None


class CommandView(APIView):
    """Base handler that runs one command and renders its result."""

    def run(self, build: Callable[[CoachService], Command], success_status=status.HTTP_200_OK) -> Response:
        service = get_service()
        try:
            result = service.execute(build(service))
        except DomainError as error:
            return error_response(error)
        return Response(CommandResultSerializer(result).data, status=success_status)


class StudentListView(CommandView):
    """Handler for GET/POST /api/students"""

    def get(self, request: Request) -> Response:
        students = get_service().list_students()
        return Response(StudentSerializer(students, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = StudentCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload(serializer.errors)
        student = serializer.to_domain()
        return self.run(lambda service: AddStudentCommand(student), status.HTTP_201_CREATED)


class StudentDetailView(CommandView):
    """Handler for PATCH/DELETE /api/students/{index}"""

    def patch(self, request: Request, index: str) -> Response:
        serializer = StudentEditSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload(serializer.errors)
        edits = serializer.to_edits()
        return self.run(
            lambda service: EditStudentCommand(parse_index(index, EditStudentCommand.usage), edits)
        )

    def delete(self, request: Request, index: str) -> Response:
        return self.run(
            lambda service: DeleteStudentCommand(parse_index(index, DeleteStudentCommand.usage))
        )


class TrainingListView(CommandView):
    """Handler for GET/POST /api/trainings"""

    def get(self, request: Request) -> Response:
        trainings = get_service().list_trainings()
        return Response(TrainingSerializer(trainings, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = TrainingCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload(serializer.errors)
        date_time = serializer.validated_data["date_time"]
        return self.run(lambda service: AddTrainingCommand(date_time), status.HTTP_201_CREATED)


class TrainingDetailView(CommandView):
    """Handler for DELETE /api/trainings/{index}"""

    def delete(self, request: Request, index: str) -> Response:
        return self.run(
            lambda service: DeleteTrainingCommand(parse_index(index, DeleteTrainingCommand.usage))
        )


class TrainingStudentsView(CommandView):
    """Handler for POST/DELETE /api/trainings/{index}/students"""

    def post(self, request: Request, index: str) -> Response:
        serializer = StudentIdsSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload(serializer.errors)
        student_ids = serializer.validated_data["student_ids"]
        return self.run(
            lambda service: AddStudentToTrainingCommand(
                parse_index(index, AddStudentToTrainingCommand.usage),
                student_ids,
                enforce_availability=service.enforce_availability,
            )
        )

    def delete(self, request: Request, index: str) -> Response:
        serializer = StudentIdsSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload(serializer.errors)
        student_ids = serializer.validated_data["student_ids"]
        return self.run(
            lambda service: DeleteStudentFromTrainingCommand(
                parse_index(index, DeleteStudentFromTrainingCommand.usage), student_ids
            )
        )


class TrainingAttendanceView(CommandView):
    """Handler for POST/DELETE /api/trainings/{index}/attendance"""

    def post(self, request: Request, index: str) -> Response:
        serializer = StudentIdsSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload(serializer.errors)
        student_ids = serializer.validated_data["student_ids"]
        return self.run(
            lambda service: MarkAttendanceCommand.for_ids(
                parse_index(index, MarkAttendanceCommand.usage), student_ids, clock=service.clock
            )
        )

    def delete(self, request: Request, index: str) -> Response:
        serializer = StudentIdsSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_payload(serializer.errors)
        student_ids = serializer.validated_data["student_ids"]
        return self.run(
            lambda service: UnmarkAttendanceCommand.for_ids(
                parse_index(index, UnmarkAttendanceCommand.usage), student_ids
            )
        )

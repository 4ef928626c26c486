"""Pytest configuration and shared fixtures."""

from datetime import time

import pytest
from constants import NEXT_WEDNESDAY, NOW, PAST_MONDAY, PAST_SATURDAY
from rest_framework.test import APIClient

from canoe.domain import (
    AcademicYear,
    Email,
    Name,
    Phone,
    Student,
    Tag,
    Training,
    WeeklyDismissal,
)
from canoe.stores.memory_store import InMemoryModelStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def make_student():
    def make(
        name: str = "Alex Yeoh",
        phone: str = "87438807",
        email: str = "alexyeoh@example.com",
        year: int = 2,
        dismissal: time = time(15, 0),
        tags: tuple[str, ...] = (),
        **kwargs,
    ) -> Student:
        return Student(
            name=Name(name),
            phone=Phone(phone),
            email=Email(email),
            academic_year=AcademicYear(year),
            dismissal=WeeklyDismissal.uniform(dismissal),
            tags=frozenset(Tag(tag) for tag in tags),
            **kwargs,
        )

    return make


@pytest.fixture
def store(make_student) -> InMemoryModelStore:
    """Students 1 (out at 15:00), 2 (out at 17:00), 3 (out at 14:00), no enrollments."""
    return InMemoryModelStore(
        students=[
            make_student(),
            make_student(
                name="Bernice Yu",
                phone="99272758",
                email="berniceyu@example.com",
                dismissal=time(17, 0),
            ),
            make_student(
                name="Charlotte Oliveiro",
                phone="93210283",
                email="charlotte@example.com",
                year=3,
                dismissal=time(14, 0),
            ),
        ],
        trainings=[
            Training(NEXT_WEDNESDAY),
            Training(PAST_MONDAY),
            Training(PAST_SATURDAY),
        ],
    )

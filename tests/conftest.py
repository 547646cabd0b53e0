import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app import create_app
from repositories.memory_repo import MemoryReviewRepository
from services.review_service import ReviewService

FIXED_NOW = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture()
def repo():
    return MemoryReviewRepository()


@pytest.fixture()
def service(repo):
    return ReviewService(repo)


@pytest.fixture()
def fixed_service(repo):
    return ReviewService(repo, clock=lambda: FIXED_NOW)


@pytest.fixture()
def ticking_service(repo):
    """Service whose clock moves forward one minute on every read."""
    minutes = itertools.count()
    return ReviewService(repo, clock=lambda: FIXED_NOW + timedelta(minutes=next(minutes)))


@pytest.fixture()
def client(service):
    with TestClient(create_app(service)) as test_client:
        yield test_client


@pytest.fixture()
def inception():
    return {
        "title": "Inception",
        "director": "Christopher Nolan",
        "releaseDate": "16 Jul 10 00:00 UTC",
        "rating": "9/10",
        "reviewNotes": "Great",
    }


@pytest.fixture()
def ticking_client(ticking_service):
    with TestClient(create_app(ticking_service)) as test_client:
        yield test_client

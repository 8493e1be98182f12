import os

# keep test runs off the on-disk database
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date

import pytest
from fastapi.testclient import TestClient

from lifestyle_survey.main import app, get_limiter, get_store, get_today
from lifestyle_survey.services.rate_limit import SubmissionLimiter
from lifestyle_survey.services.store import InMemorySurveyStore

TODAY = date(2025, 6, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def payload():
    return {
        "fullName": "  TLM Ledwaba ",
        "email": "TLM.Ledwaba@MWeb.co.za",
        "contactNumber": "0821234567",
        "dateOfBirth": "1990-01-01",
        "favoriteFoods": ["Pizza", "Pasta"],
        "ratings": {"eatOut": 4, "watchMovies": 5, "watchTV": 2, "listenRadio": 1},
    }


@pytest.fixture
def store():
    return InMemorySurveyStore()


@pytest.fixture
def limiter():
    return SubmissionLimiter(max_hits=100, window_s=60)


@pytest.fixture
def client(store, limiter):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_limiter] = lambda: limiter
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

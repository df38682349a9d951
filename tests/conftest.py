"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient

from models import (
    AcademicBackground,
    Budget,
    ExamProgressEnum,
    ExamStatus,
    OnboardingData,
    SopStatusEnum,
    StudyGoal,
    User,
    UserProfile,
)
from store import AppStore


def make_onboarding(
    intended_degree="Master's",
    field_of_study="Computer Science",
    countries=("USA",),
    ielts=ExamProgressEnum.NOT_STARTED,
    gre=ExamProgressEnum.NOT_STARTED,
    sop=SopStatusEnum.NOT_STARTED,
    gpa="3.7",
):
    return OnboardingData(
        academic=AcademicBackground(
            current_education="Bachelor's",
            degree="B.Tech",
            major="Computer Engineering",
            graduation_year="2024",
            gpa=gpa,
        ),
        goals=StudyGoal(
            intended_degree=intended_degree,
            field_of_study=field_of_study,
            target_intake="Fall 2026",
            preferred_countries=list(countries),
        ),
        budget=Budget(range="30k-50k"),
        exams=ExamStatus(ielts=ielts, gre=gre, sop=sop),
    )


@pytest.fixture
def onboarding():
    return make_onboarding()


@pytest.fixture
def user():
    return User(profile=UserProfile(id="user-1", full_name="Asha Rao", email="asha@gmail.com"))


@pytest.fixture
def store():
    return AppStore()


@pytest.fixture
def client(monkeypatch):
    """Test client with a fresh store and no simulated delays"""
    from config import settings
    from main import app

    monkeypatch.setattr(settings, "AUTH_DELAY_SECONDS", 0)
    monkeypatch.setattr(settings, "ONBOARDING_DELAY_SECONDS", 0)
    monkeypatch.setattr(settings, "AI_REPLY_DELAY_SECONDS", 0)
    app.state.store = AppStore()
    return TestClient(app)


ONBOARDING_PAYLOAD = {
    "academic": {
        "current_education": "Bachelor's",
        "degree": "B.Tech",
        "major": "Computer Engineering",
        "graduation_year": "2024",
        "gpa": "3.7",
    },
    "goals": {
        "intended_degree": "Master's",
        "field_of_study": "Computer Science",
        "target_intake": "Fall 2026",
        "preferred_countries": ["USA"],
    },
    "budget": {"range": "30k-50k", "funding_plan": "self-funded"},
    "exams": {"ielts": "not-started", "gre": "not-started", "sop": "not-started"},
}


@pytest.fixture
def onboarded_client(client):
    response = client.post("/auth/signup", json={
        "full_name": "Asha Rao",
        "email": "asha@gmail.com",
        "password": "secret",
        "confirm_password": "secret",
    })
    assert response.status_code == 200
    response = client.post("/onboarding", json=ONBOARDING_PAYLOAD)
    assert response.status_code == 200
    return client

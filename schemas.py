"""
Pydantic schemas for API requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field, StringConstraints
from typing import Annotated, Dict, List, Optional

from models import Action, AIAction, AppState, StageEnum, Task, University

# Counsellor
class CounselReply(BaseModel):
    content: str
    actions: Optional[List[AIAction]] = None

class CounselRequest(BaseModel):
    message: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

class ExecuteActionRequest(BaseModel):
    action: AIAction

# Raw dispatch
class DispatchRequest(BaseModel):
    action: Action

# Auth
class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class SignupRequest(BaseModel):
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str
    confirm_password: str

# Shortlist / Lock
class UniversityIdRequest(BaseModel):
    university_id: str

# Session (navigation guards)
class SessionResponse(BaseModel):
    is_authenticated: bool
    is_onboarded: bool
    current_stage: StageEnum

# Universities page
class UniversityListing(BaseModel):
    university: University
    shortlisted: bool = False
    locked: bool = False

class CategorizedUniversities(BaseModel):
    dream: List[UniversityListing] = []
    target: List[UniversityListing] = []
    safe: List[UniversityListing] = []

# Profile Strength Schemas
class SectionStrength(BaseModel):
    status: str = "missing"  # strong / average / weak / missing
    score: int = 0
    max_score: int = 0

class ProfileSections(BaseModel):
    academics: SectionStrength = Field(default_factory=lambda: SectionStrength(max_score=30))
    exams: SectionStrength = Field(default_factory=lambda: SectionStrength(max_score=25))
    sop: SectionStrength = Field(default_factory=lambda: SectionStrength(max_score=20))
    budget: SectionStrength = Field(default_factory=lambda: SectionStrength(max_score=15))
    preferences: SectionStrength = Field(default_factory=lambda: SectionStrength(max_score=10))

class ProfileStrengthResponse(BaseModel):
    overall_score: int = 0
    sections: ProfileSections = Field(default_factory=ProfileSections)
    next_actions: List[str] = []

class TaskProgress(BaseModel):
    completed: int = 0
    total: int = 0
    percent: float = 0.0

class StageProgress(BaseModel):
    stage: StageEnum
    label: str
    index: int
    total: int

# Dashboard Schema
class DashboardResponse(BaseModel):
    full_name: str
    stage: StageProgress
    profile_strength: ProfileStrengthResponse = Field(default_factory=ProfileStrengthResponse)
    task_progress: TaskProgress = Field(default_factory=TaskProgress)
    tasks: List[Task] = []
    shortlist_count: int = 0
    locked_university: Optional[University] = None

# Application Schema
class ApplicationResponse(BaseModel):
    locked_university: University
    application_tasks: List[Task]
    other_tasks: List[Task]
    progress: TaskProgress
    documents: List[Dict] = []
    timeline: List[Dict] = []

# State wrapper
class StateResponse(BaseModel):
    status: str = "OK"
    state: AppState

# Error Schema
class ErrorResponse(BaseModel):
    status: str = "ERROR"
    error: str
    message: str

"""
Domain types: enums, entities and the closed set of state transitions.
"""

import enum
from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, computed_field

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

# Enums
class StageEnum(str, enum.Enum):
    BUILDING_PROFILE = "building-profile"
    DISCOVERING_UNIVERSITIES = "discovering-universities"
    FINALIZING_UNIVERSITIES = "finalizing-universities"
    PREPARING_APPLICATIONS = "preparing-applications"

STAGE_ORDER = [
    StageEnum.BUILDING_PROFILE,
    StageEnum.DISCOVERING_UNIVERSITIES,
    StageEnum.FINALIZING_UNIVERSITIES,
    StageEnum.PREPARING_APPLICATIONS,
]

STAGE_LABELS = {
    StageEnum.BUILDING_PROFILE: "Building Profile",
    StageEnum.DISCOVERING_UNIVERSITIES: "Discovering Universities",
    StageEnum.FINALIZING_UNIVERSITIES: "Finalizing Universities",
    StageEnum.PREPARING_APPLICATIONS: "Preparing Applications",
}

class CategoryEnum(str, enum.Enum):
    DREAM = "dream"
    TARGET = "target"
    SAFE = "safe"

class LevelEnum(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class TaskCategoryEnum(str, enum.Enum):
    EXAM = "exam"
    DOCUMENT = "document"
    APPLICATION = "application"
    RESEARCH = "research"

class ExamProgressEnum(str, enum.Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

class SopStatusEnum(str, enum.Enum):
    NOT_STARTED = "not-started"
    DRAFT = "draft"
    READY = "ready"

class FundingPlanEnum(str, enum.Enum):
    SELF_FUNDED = "self-funded"
    SCHOLARSHIP_DEPENDENT = "scholarship-dependent"
    LOAN_DEPENDENT = "loan-dependent"

class RoleEnum(str, enum.Enum):
    USER = "user"
    AI = "ai"

BACHELORS = "Bachelor's"

# User
class UserProfile(BaseModel):
    id: str
    full_name: str
    email: str
    is_onboarded: bool = False
    created_at: datetime = Field(default_factory=utcnow)

class AcademicBackground(BaseModel):
    current_education: str
    degree: str
    major: str
    graduation_year: str
    gpa: Optional[str] = None

class StudyGoal(BaseModel):
    intended_degree: str
    field_of_study: str
    target_intake: str
    preferred_countries: List[str] = Field(..., min_length=1)

class Budget(BaseModel):
    range: str
    funding_plan: FundingPlanEnum = FundingPlanEnum.SELF_FUNDED

class ExamStatus(BaseModel):
    ielts: ExamProgressEnum = ExamProgressEnum.NOT_STARTED
    gre: ExamProgressEnum = ExamProgressEnum.NOT_STARTED
    sop: SopStatusEnum = SopStatusEnum.NOT_STARTED

class OnboardingData(BaseModel):
    academic: AcademicBackground
    goals: StudyGoal
    budget: Budget
    exams: ExamStatus = Field(default_factory=ExamStatus)

class User(BaseModel):
    profile: UserProfile
    onboarding: Optional[OnboardingData] = None

# Partial updates, merged per sub-record
class AcademicBackgroundUpdate(BaseModel):
    current_education: Optional[str] = None
    degree: Optional[str] = None
    major: Optional[str] = None
    graduation_year: Optional[str] = None
    gpa: Optional[str] = None

class StudyGoalUpdate(BaseModel):
    intended_degree: Optional[str] = None
    field_of_study: Optional[str] = None
    target_intake: Optional[str] = None
    preferred_countries: Optional[List[str]] = Field(default=None, min_length=1)

class BudgetUpdate(BaseModel):
    range: Optional[str] = None
    funding_plan: Optional[FundingPlanEnum] = None

class ExamStatusUpdate(BaseModel):
    ielts: Optional[ExamProgressEnum] = None
    gre: Optional[ExamProgressEnum] = None
    sop: Optional[SopStatusEnum] = None

class OnboardingUpdate(BaseModel):
    academic: Optional[AcademicBackgroundUpdate] = None
    goals: Optional[StudyGoalUpdate] = None
    budget: Optional[BudgetUpdate] = None
    exams: Optional[ExamStatusUpdate] = None

# University
class University(BaseModel):
    id: str
    name: str
    country: str
    city: str
    ranking: int
    tuition_fee: int
    living_cost: int
    programs: List[str] = []
    acceptance_rate: float
    min_gpa: float
    requires_gre: bool = False
    requires_ielts: bool = True
    category: CategoryEnum
    risk_level: LevelEnum
    cost_level: LevelEnum
    acceptance_chance: LevelEnum
    why_fit: str = ""
    risks: List[str] = []

    @computed_field
    @property
    def total_cost(self) -> int:
        return self.tuition_fee + self.living_cost

# Task
class Task(BaseModel):
    id: str
    title: str
    description: str = ""
    category: TaskCategoryEnum
    completed: bool = False
    priority: LevelEnum = LevelEnum.MEDIUM
    created_at: datetime = Field(default_factory=utcnow)
    due_date: Optional[datetime] = None

# Suggested actions attached to counsellor replies
class UniversityRef(BaseModel):
    university_id: str

class TaskRef(BaseModel):
    task: Task

class StageRef(BaseModel):
    stage: StageEnum

class ShortlistUniversityAction(BaseModel):
    type: Literal["shortlist_university"] = "shortlist_university"
    payload: UniversityRef
    label: str = ""

class LockUniversityAction(BaseModel):
    type: Literal["lock_university"] = "lock_university"
    payload: UniversityRef
    label: str = ""

class AddTaskAction(BaseModel):
    type: Literal["add_task"] = "add_task"
    payload: TaskRef
    label: str = ""

class UpdateStageAction(BaseModel):
    type: Literal["update_stage"] = "update_stage"
    payload: StageRef
    label: str = ""

AIAction = Annotated[
    Union[ShortlistUniversityAction, LockUniversityAction, AddTaskAction, UpdateStageAction],
    Field(discriminator="type"),
]

# Chat
class ChatMessage(BaseModel):
    id: str
    role: RoleEnum
    content: str
    timestamp: datetime = Field(default_factory=utcnow)
    actions: Optional[List[AIAction]] = None

# Aggregate root
class AppState(BaseModel):
    user: Optional[User] = None
    is_authenticated: bool = False
    current_stage: StageEnum = StageEnum.BUILDING_PROFILE
    shortlisted_universities: List[University] = []
    locked_university: Optional[University] = None
    tasks: List[Task] = []
    chat_history: List[ChatMessage] = []

# Actions
class Login(BaseModel):
    type: Literal["LOGIN"] = "LOGIN"
    payload: User

class Logout(BaseModel):
    type: Literal["LOGOUT"] = "LOGOUT"

class CompleteOnboarding(BaseModel):
    type: Literal["COMPLETE_ONBOARDING"] = "COMPLETE_ONBOARDING"
    payload: OnboardingData

class UpdateStage(BaseModel):
    type: Literal["UPDATE_STAGE"] = "UPDATE_STAGE"
    payload: StageEnum

class ShortlistUniversity(BaseModel):
    type: Literal["SHORTLIST_UNIVERSITY"] = "SHORTLIST_UNIVERSITY"
    payload: University

class RemoveShortlist(BaseModel):
    type: Literal["REMOVE_SHORTLIST"] = "REMOVE_SHORTLIST"
    payload: str

class LockUniversity(BaseModel):
    type: Literal["LOCK_UNIVERSITY"] = "LOCK_UNIVERSITY"
    payload: University

class UnlockUniversity(BaseModel):
    type: Literal["UNLOCK_UNIVERSITY"] = "UNLOCK_UNIVERSITY"

class AddTask(BaseModel):
    type: Literal["ADD_TASK"] = "ADD_TASK"
    payload: Task

class ToggleTask(BaseModel):
    type: Literal["TOGGLE_TASK"] = "TOGGLE_TASK"
    payload: str

class AddChatMessage(BaseModel):
    type: Literal["ADD_CHAT_MESSAGE"] = "ADD_CHAT_MESSAGE"
    payload: ChatMessage

class UpdateProfile(BaseModel):
    type: Literal["UPDATE_PROFILE"] = "UPDATE_PROFILE"
    payload: OnboardingUpdate

class ExecuteAIAction(BaseModel):
    type: Literal["EXECUTE_AI_ACTION"] = "EXECUTE_AI_ACTION"
    payload: AIAction

Action = Annotated[
    Union[
        Login,
        Logout,
        CompleteOnboarding,
        UpdateStage,
        ShortlistUniversity,
        RemoveShortlist,
        LockUniversity,
        UnlockUniversity,
        AddTask,
        ToggleTask,
        AddChatMessage,
        UpdateProfile,
        ExecuteAIAction,
    ],
    Field(discriminator="type"),
]

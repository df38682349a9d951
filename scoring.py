"""
Derived dashboard figures: profile strength, task and stage progress.
"""

import logging
from typing import Optional, Sequence

from models import (
    BACHELORS,
    STAGE_LABELS,
    STAGE_ORDER,
    ExamProgressEnum,
    OnboardingData,
    SopStatusEnum,
    StageEnum,
    Task,
)
from schemas import ProfileStrengthResponse, SectionStrength, StageProgress, TaskProgress

logger = logging.getLogger(__name__)

def get_status(score: int, max_score: int) -> str:
    """Map a section score to strong | average | weak | missing."""
    if score == 0:
        return "missing"
    if score >= max_score * 0.8:
        return "strong"
    if score >= max_score * 0.4:
        return "average"
    return "weak"

def _section(score: int, max_score: int) -> SectionStrength:
    return SectionStrength(status=get_status(score, max_score), score=score, max_score=max_score)

def _has_gpa(gpa: Optional[str]) -> bool:
    try:
        return gpa is not None and float(gpa) > 0
    except ValueError:
        return False

def calculate_profile_strength(onboarding: Optional[OnboardingData]) -> ProfileStrengthResponse:
    """
    Point-based profile completeness (100 points total).

    Args:
        onboarding: Submitted onboarding data, or None before onboarding

    Returns:
        ProfileStrengthResponse with per-section scores and up to three next actions
    """
    if onboarding is None:
        return ProfileStrengthResponse(next_actions=["Complete your profile"])

    academic, goals, budget, exams = onboarding.academic, onboarding.goals, onboarding.budget, onboarding.exams
    next_actions = []

    # ACADEMICS (30 points)
    academics_score = 0
    if _has_gpa(academic.gpa):
        academics_score += 15
    else:
        next_actions.append("Add your GPA")
    if academic.degree.strip():
        academics_score += 10
    else:
        next_actions.append("Add your degree")
    if academic.graduation_year.strip():
        academics_score += 5

    # EXAMS (25 points)
    exams_score = 0
    if exams.ielts == ExamProgressEnum.COMPLETED:
        exams_score += 12
    elif exams.ielts == ExamProgressEnum.IN_PROGRESS:
        exams_score += 6
    else:
        next_actions.append("Complete IELTS/TOEFL")

    if goals.intended_degree == BACHELORS or exams.gre == ExamProgressEnum.COMPLETED:
        exams_score += 13
    elif exams.gre == ExamProgressEnum.IN_PROGRESS:
        exams_score += 6
    else:
        next_actions.append("Complete GRE/GMAT")

    # SOP (20 points)
    sop_score = 0
    if exams.sop == SopStatusEnum.READY:
        sop_score = 20
    elif exams.sop == SopStatusEnum.DRAFT:
        sop_score = 10
    else:
        next_actions.append("Draft your SOP")

    # BUDGET (15 points)
    budget_score = 0
    if budget.range.strip():
        budget_score += 10
    else:
        next_actions.append("Set your budget range")
    if budget.funding_plan:
        budget_score += 5

    # PREFERENCES (10 points)
    prefs_score = 0
    if goals.preferred_countries:
        prefs_score += 4
    if goals.field_of_study.strip():
        prefs_score += 3
    else:
        next_actions.append("Select field of study")
    if goals.target_intake.strip():
        prefs_score += 3

    total_score = academics_score + exams_score + sop_score + budget_score + prefs_score
    logger.debug(f"[PROFILE_STRENGTH] overall={total_score}")

    return ProfileStrengthResponse(
        overall_score=total_score,
        sections={
            "academics": _section(academics_score, 30),
            "exams": _section(exams_score, 25),
            "sop": _section(sop_score, 20),
            "budget": _section(budget_score, 15),
            "preferences": _section(prefs_score, 10),
        },
        next_actions=next_actions[:3],
    )

def task_progress(tasks: Sequence[Task]) -> TaskProgress:
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    percent = round(completed / total * 100, 1) if total else 0.0
    return TaskProgress(completed=completed, total=total, percent=percent)

def stage_progress(stage: StageEnum) -> StageProgress:
    return StageProgress(
        stage=stage,
        label=STAGE_LABELS[stage],
        index=STAGE_ORDER.index(stage),
        total=len(STAGE_ORDER),
    )

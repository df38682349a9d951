"""Unit tests for dashboard scoring helpers"""

from conftest import make_onboarding
from models import ExamProgressEnum, LevelEnum, SopStatusEnum, StageEnum, Task, TaskCategoryEnum
from scoring import calculate_profile_strength, get_status, stage_progress, task_progress


def test_get_status_thresholds():
    assert get_status(0, 30) == "missing"
    assert get_status(24, 30) == "strong"
    assert get_status(12, 30) == "average"
    assert get_status(5, 30) == "weak"


def test_profile_strength_without_onboarding():
    strength = calculate_profile_strength(None)

    assert strength.overall_score == 0
    assert strength.next_actions == ["Complete your profile"]


def test_profile_strength_fresh_profile():
    strength = calculate_profile_strength(make_onboarding())

    # academics 30, exams 0, sop 0, budget 15, preferences 10
    assert strength.overall_score == 55
    assert strength.sections.academics.status == "strong"
    assert strength.sections.exams.status == "missing"
    assert strength.next_actions == ["Complete IELTS/TOEFL", "Complete GRE/GMAT", "Draft your SOP"]


def test_profile_strength_complete_profile():
    onboarding = make_onboarding(
        ielts=ExamProgressEnum.COMPLETED,
        gre=ExamProgressEnum.COMPLETED,
        sop=SopStatusEnum.READY,
    )

    strength = calculate_profile_strength(onboarding)

    assert strength.overall_score == 100
    assert strength.next_actions == []


def test_bachelors_gets_gre_points():
    onboarding = make_onboarding(intended_degree="Bachelor's", ielts=ExamProgressEnum.COMPLETED)

    assert calculate_profile_strength(onboarding).sections.exams.score == 25


def test_invalid_gpa_asks_for_gpa():
    strength = calculate_profile_strength(make_onboarding(gpa="n/a"))

    assert strength.sections.academics.score == 15
    assert strength.next_actions[0] == "Add your GPA"


def test_task_progress():
    tasks = [
        Task(id="a", title="A", category=TaskCategoryEnum.EXAM, completed=True),
        Task(id="b", title="B", category=TaskCategoryEnum.EXAM),
        Task(id="c", title="C", category=TaskCategoryEnum.EXAM, priority=LevelEnum.HIGH),
    ]

    progress = task_progress(tasks)

    assert (progress.completed, progress.total, progress.percent) == (1, 3, 33.3)
    assert task_progress([]).percent == 0.0


def test_stage_progress():
    progress = stage_progress(StageEnum.FINALIZING_UNIVERSITIES)

    assert progress.index == 2
    assert progress.total == 4
    assert progress.label == "Finalizing Universities"

"""
Task generation rules.

Generated ids are fixed templates, so running a generator twice yields
the same ids and callers can merge without duplicating tasks.
"""

from typing import List, Optional, Sequence, Tuple

from models import (
    BACHELORS,
    ExamProgressEnum,
    LevelEnum,
    OnboardingData,
    SopStatusEnum,
    Task,
    TaskCategoryEnum,
    University,
    utcnow,
)

def _needs_gre(onboarding: OnboardingData) -> bool:
    return (
        onboarding.exams.gre == ExamProgressEnum.NOT_STARTED
        and onboarding.goals.intended_degree != BACHELORS
    )

def generate_initial_tasks(onboarding: OnboardingData) -> List[Task]:
    """Tasks created when onboarding is completed."""
    now = utcnow()
    tasks = []

    if onboarding.exams.ielts == ExamProgressEnum.NOT_STARTED:
        tasks.append(Task(
            id="task-ielts-1",
            title="Register for IELTS/TOEFL",
            description="Book your English proficiency test date",
            category=TaskCategoryEnum.EXAM,
            priority=LevelEnum.HIGH,
            created_at=now,
        ))

    if _needs_gre(onboarding):
        tasks.append(Task(
            id="task-gre-1",
            title="Start GRE/GMAT Preparation",
            description="Begin studying for your standardized test",
            category=TaskCategoryEnum.EXAM,
            priority=LevelEnum.HIGH,
            created_at=now,
        ))

    if onboarding.exams.sop == SopStatusEnum.NOT_STARTED:
        tasks.append(Task(
            id="task-sop-1",
            title="Draft Statement of Purpose",
            description="Start working on your SOP outline",
            category=TaskCategoryEnum.DOCUMENT,
            priority=LevelEnum.MEDIUM,
            created_at=now,
        ))

    tasks.append(Task(
        id="task-research-1",
        title="Research Universities",
        description="Explore universities matching your profile",
        category=TaskCategoryEnum.RESEARCH,
        priority=LevelEnum.HIGH,
        created_at=now,
    ))

    return tasks

def application_task_prefix(university_id: str) -> str:
    return f"task-app-{university_id}-"

def generate_application_tasks(university: University) -> List[Task]:
    """
    Application bundle for a locked university.

    Ids are namespaced by the university id, so bundles for different
    universities never collide.
    """
    now = utcnow()
    prefix = application_task_prefix(university.id)
    tasks_data = [
        (f"Complete {university.name} Application", "Fill out the online application form", TaskCategoryEnum.APPLICATION),
        ("Request Transcripts", "Order official transcripts from your institution", TaskCategoryEnum.DOCUMENT),
        ("Get Recommendation Letters", "Contact professors for LORs", TaskCategoryEnum.DOCUMENT),
        ("Finalize SOP", f"Tailor your SOP for {university.name}", TaskCategoryEnum.DOCUMENT),
    ]

    return [
        Task(
            id=f"{prefix}{index}",
            title=title,
            description=description,
            category=category,
            priority=LevelEnum.HIGH,
            created_at=now,
        )
        for index, (title, description, category) in enumerate(tasks_data, start=1)
    ]

def suggest_tasks(onboarding: Optional[OnboardingData], shortlist: Sequence[University]) -> List[Task]:
    """Candidate tasks offered by the counsellor chat."""
    now = utcnow()
    tasks = []

    if onboarding and onboarding.exams.ielts == ExamProgressEnum.NOT_STARTED:
        tasks.append(Task(
            id="suggested-ielts",
            title="Register for IELTS/TOEFL",
            description="Book your English proficiency test",
            category=TaskCategoryEnum.EXAM,
            priority=LevelEnum.HIGH,
            created_at=now,
        ))

    if onboarding and onboarding.exams.sop == SopStatusEnum.NOT_STARTED:
        tasks.append(Task(
            id="suggested-sop",
            title="Start SOP Draft",
            description="Begin working on your Statement of Purpose",
            category=TaskCategoryEnum.DOCUMENT,
            priority=LevelEnum.HIGH,
            created_at=now,
        ))

    if len(shortlist) == 0:
        tasks.append(Task(
            id="suggested-research",
            title="Research Universities",
            description="Explore and shortlist universities",
            category=TaskCategoryEnum.RESEARCH,
            priority=LevelEnum.HIGH,
            created_at=now,
        ))

    return tasks

def merge_tasks(existing: Sequence[Task], new_tasks: Sequence[Task]) -> List[Task]:
    """Append tasks whose ids are not present yet; existing tasks win."""
    seen = {task.id for task in existing}
    merged = list(existing)
    for task in new_tasks:
        if task.id not in seen:
            merged.append(task)
            seen.add(task.id)
    return merged

def split_application_tasks(
    tasks: Sequence[Task],
    locked: Optional[University],
) -> Tuple[List[Task], List[Task]]:
    """Split tasks into (locked university's application tasks, everything else)."""
    if locked is None:
        return [], list(tasks)
    prefix = application_task_prefix(locked.id)
    application = [t for t in tasks if t.id.startswith(prefix)]
    others = [t for t in tasks if not t.id.startswith(prefix)]
    return application, others

"""Unit tests for task generation rules"""

from catalog import get_university
from conftest import make_onboarding
from models import ExamProgressEnum, LevelEnum, SopStatusEnum, TaskCategoryEnum
from task_rules import (
    generate_application_tasks,
    generate_initial_tasks,
    merge_tasks,
    split_application_tasks,
    suggest_tasks,
)


class TestInitialTasks:

    def test_masters_with_nothing_started(self):
        tasks = generate_initial_tasks(make_onboarding(intended_degree="Master's"))

        assert [t.id for t in tasks] == ["task-ielts-1", "task-gre-1", "task-sop-1", "task-research-1"]

    def test_bachelors_skips_gre(self):
        tasks = generate_initial_tasks(make_onboarding(intended_degree="Bachelor's"))

        assert [t.id for t in tasks] == ["task-ielts-1", "task-sop-1", "task-research-1"]

    def test_research_task_always_present(self):
        tasks = generate_initial_tasks(make_onboarding(
            ielts=ExamProgressEnum.COMPLETED,
            gre=ExamProgressEnum.IN_PROGRESS,
            sop=SopStatusEnum.READY,
        ))

        assert [t.id for t in tasks] == ["task-research-1"]

    def test_categories_and_priorities(self):
        tasks = {t.id: t for t in generate_initial_tasks(make_onboarding())}

        assert tasks["task-ielts-1"].category == TaskCategoryEnum.EXAM
        assert tasks["task-ielts-1"].priority == LevelEnum.HIGH
        assert tasks["task-gre-1"].priority == LevelEnum.HIGH
        assert tasks["task-sop-1"].category == TaskCategoryEnum.DOCUMENT
        assert tasks["task-sop-1"].priority == LevelEnum.MEDIUM
        assert tasks["task-research-1"].category == TaskCategoryEnum.RESEARCH
        assert tasks["task-research-1"].priority == LevelEnum.HIGH
        assert not any(t.completed for t in tasks.values())

    def test_ids_are_stable_across_calls(self):
        onboarding = make_onboarding()

        first = [t.id for t in generate_initial_tasks(onboarding)]
        second = [t.id for t in generate_initial_tasks(onboarding)]

        assert first == second


class TestApplicationTasks:

    def test_four_high_priority_tasks(self):
        mit = get_university("uni-mit")
        tasks = generate_application_tasks(mit)

        assert len(tasks) == 4
        assert all(t.priority == LevelEnum.HIGH for t in tasks)
        assert tasks[0].category == TaskCategoryEnum.APPLICATION
        assert tasks[0].title == "Complete Massachusetts Institute of Technology Application"
        assert tasks[3].description == "Tailor your SOP for Massachusetts Institute of Technology"

    def test_ids_namespaced_by_university(self):
        mit_ids = {t.id for t in generate_application_tasks(get_university("uni-mit"))}
        oxford_ids = {t.id for t in generate_application_tasks(get_university("uni-oxford"))}

        assert mit_ids == {f"task-app-uni-mit-{i}" for i in range(1, 5)}
        assert mit_ids.isdisjoint(oxford_ids)


class TestSuggestedTasks:

    def test_all_candidates_with_empty_shortlist(self):
        tasks = suggest_tasks(make_onboarding(), [])

        assert [t.id for t in tasks] == ["suggested-ielts", "suggested-sop", "suggested-research"]

    def test_research_dropped_once_shortlist_has_entries(self):
        tasks = suggest_tasks(make_onboarding(), [get_university("uni-asu")])

        assert [t.id for t in tasks] == ["suggested-ielts", "suggested-sop"]

    def test_without_onboarding_only_research(self):
        assert [t.id for t in suggest_tasks(None, [])] == ["suggested-research"]


def test_merge_tasks_keeps_existing_entries():
    existing = generate_initial_tasks(make_onboarding())
    existing[0] = existing[0].model_copy(update={"completed": True})

    merged = merge_tasks(existing, generate_initial_tasks(make_onboarding()))

    assert [t.id for t in merged] == [t.id for t in existing]
    assert merged[0].completed is True


def test_split_application_tasks():
    mit = get_university("uni-mit")
    tasks = generate_initial_tasks(make_onboarding()) + generate_application_tasks(mit)

    application, others = split_application_tasks(tasks, mit)

    assert len(application) == 4
    assert len(others) == 4
    assert split_application_tasks(tasks, None) == ([], tasks)

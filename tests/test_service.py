"""Unit tests for the rule-based counsellor replies"""

import prompts
from catalog import CATALOG, get_university, normalize_country
from conftest import make_onboarding
from models import (
    AddTaskAction,
    ExamProgressEnum,
    ShortlistUniversityAction,
    SopStatusEnum,
)
from service import match_rule, respond


class TestRecommendations:

    def test_recommend_filters_by_country_and_field(self):
        onboarding = make_onboarding(countries=["USA"], field_of_study="Computer Science")

        reply = respond("Can you recommend a university?", onboarding, [], CATALOG)

        assert 0 < len(reply.actions) <= 3
        for action in reply.actions:
            assert isinstance(action, ShortlistUniversityAction)
            uni = get_university(action.payload.university_id)
            assert normalize_country(uni.country) == "United States"
            assert any("computer science" in p.lower() for p in uni.programs)
            assert uni.name in reply.content

    def test_recommendations_follow_catalog_order(self):
        onboarding = make_onboarding(countries=["USA"], field_of_study="Computer Science")

        reply = respond("suggest something", onboarding, [], CATALOG)

        assert [a.payload.university_id for a in reply.actions] == ["uni-mit", "uni-stanford", "uni-cmu"]
        assert reply.actions[0].label == "Add Massachusetts Institute of Technology to Shortlist"

    def test_country_aliases_match(self):
        onboarding = make_onboarding(countries=["United Kingdom"], field_of_study="data science")

        reply = respond("recommend", onboarding, [], CATALOG)

        assert [a.payload.university_id for a in reply.actions] == ["uni-edinburgh", "uni-manchester"]

    def test_no_matches_has_no_actions(self):
        onboarding = make_onboarding(countries=["Germany"], field_of_study="Marine Biology")

        reply = respond("recommend universities", onboarding, [], CATALOG)

        assert reply.actions is None
        assert "Marine Biology" in reply.content

    def test_reply_text_lists_cost_and_chance(self):
        onboarding = make_onboarding(countries=["Germany"], field_of_study="Computer Science")

        reply = respond("recommend", onboarding, [], CATALOG)

        assert "1. **Technical University of Munich** (DREAM)" in reply.content
        assert "Cost: $18k/year | Acceptance: low" in reply.content


class TestProfileAnalysis:

    def test_profile_summary(self):
        reply = respond("Analyze my profile", make_onboarding(), [], CATALOG)

        assert "B.Tech in Computer Engineering" in reply.content
        assert "Targeting Master's in Computer Science" in reply.content
        assert "GPA: 3.7" in reply.content
        assert "IELTS/TOEFL not started" in reply.content
        assert "GRE/GMAT preparation needed" in reply.content
        assert reply.actions is None

    def test_completed_exams_not_listed_as_gaps(self):
        onboarding = make_onboarding(
            ielts=ExamProgressEnum.COMPLETED,
            gre=ExamProgressEnum.COMPLETED,
            sop=SopStatusEnum.READY,
        )

        reply = respond("what are my strengths", onboarding, [], CATALOG)

        assert "IELTS/TOEFL" not in reply.content
        assert "GRE/GMAT" not in reply.content

    def test_profile_without_onboarding(self):
        reply = respond("profile", None, [], CATALOG)

        assert reply.content == prompts.PROFILE_MISSING_TEXT

    def test_first_match_wins(self):
        reply = respond("Check my profile and recommend a university", make_onboarding(), [], CATALOG)

        assert reply.content.startswith("Here's my analysis of your profile")
        assert reply.actions is None


class TestNextSteps:

    def test_next_steps_offer_add_task_actions(self):
        reply = respond("What are my next steps?", make_onboarding(), [], CATALOG)

        assert all(isinstance(a, AddTaskAction) for a in reply.actions)
        assert [a.payload.task.id for a in reply.actions] == [
            "suggested-ielts",
            "suggested-sop",
            "suggested-research",
        ]
        assert reply.actions[0].label == "Add: Register for IELTS/TOEFL"

    def test_no_suggestions_left(self):
        onboarding = make_onboarding(ielts=ExamProgressEnum.COMPLETED, sop=SopStatusEnum.DRAFT)

        reply = respond("show my todo list", onboarding, [get_university("uni-asu")], CATALOG)

        assert reply.content == prompts.NO_TASKS_TEXT
        assert reply.actions is None


class TestHelpAndFallback:

    def test_greeting(self):
        assert respond("Hello there", make_onboarding(), [], CATALOG).content == prompts.HELP_TEXT

    def test_case_insensitive(self):
        assert respond("HELP", None, [], CATALOG).content == prompts.HELP_TEXT

    def test_fallback(self):
        reply = respond("Okay, cool", make_onboarding(), [], CATALOG)

        assert reply.content == prompts.FALLBACK_TEXT
        assert reply.actions is None

    def test_match_rule_names(self):
        assert match_rule("weakness").name == "profile"
        assert match_rule("todo").name == "tasks"
        assert match_rule("ok bye") is None

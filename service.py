"""
Rule-based counsellor replies.

Replies come from an ordered rule table. Each rule is a set of keywords
and a builder; the first rule with a keyword contained in the lowercased
message wins, so "my profile and a university" is answered by the
profile rule.
"""

import logging
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

import prompts
from catalog import CATALOG, query_universities
from models import (
    BACHELORS,
    AddTaskAction,
    ExamProgressEnum,
    OnboardingData,
    SopStatusEnum,
    ShortlistUniversityAction,
    TaskRef,
    University,
    UniversityRef,
)
from schemas import CounselReply
from task_rules import suggest_tasks

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3

Builder = Callable[[Optional[OnboardingData], Sequence[University], Sequence[University]], CounselReply]

class Rule(NamedTuple):
    name: str
    keywords: Tuple[str, ...]
    build: Builder

def profile_analysis(onboarding, shortlist, catalog) -> CounselReply:
    if onboarding is None:
        return CounselReply(content=prompts.PROFILE_MISSING_TEXT)

    academic, goals, exams = onboarding.academic, onboarding.goals, onboarding.exams

    response = "Here's my analysis of your profile:\n\n"
    response += "**Strengths:**\n"
    response += f"- {academic.degree} in {academic.major}\n"
    response += f"- Targeting {goals.intended_degree} in {goals.field_of_study}\n"
    if academic.gpa:
        response += f"- GPA: {academic.gpa} (Good academic standing)\n"

    response += "\n**Areas to Improve:**\n"
    if exams.ielts == ExamProgressEnum.NOT_STARTED:
        response += "- IELTS/TOEFL not started yet - prioritize this\n"
    if exams.gre == ExamProgressEnum.NOT_STARTED and goals.intended_degree != BACHELORS:
        response += "- GRE/GMAT preparation needed for Master's programs\n"
    if exams.sop == SopStatusEnum.NOT_STARTED:
        response += "- Statement of Purpose not started yet\n"

    response += "\nWould you like me to recommend universities based on your profile?"
    return CounselReply(content=response)

def university_recommendations(onboarding, shortlist, catalog) -> CounselReply:
    countries = onboarding.goals.preferred_countries if onboarding else []
    field = onboarding.goals.field_of_study if onboarding else ""

    recommendations = query_universities(
        countries=countries,
        field_of_study=field,
        limit=MAX_RECOMMENDATIONS,
        catalog=catalog,
    )

    if not recommendations:
        return CounselReply(content=prompts.NO_MATCHES_TEXT.format(field=field or "your field"))

    response = prompts.RECOMMENDATIONS_HEADER
    for i, uni in enumerate(recommendations, start=1):
        response += f"{i}. **{uni.name}** ({uni.category.value.upper()})\n"
        response += f"   - {uni.why_fit}\n"
        response += f"   - Cost: ${uni.total_cost / 1000:.0f}k/year | Acceptance: {uni.acceptance_chance.value}\n\n"

    return CounselReply(
        content=response,
        actions=[
            ShortlistUniversityAction(
                payload=UniversityRef(university_id=uni.id),
                label=f"Add {uni.name} to Shortlist",
            )
            for uni in recommendations
        ],
    )

def next_steps(onboarding, shortlist, catalog) -> CounselReply:
    tasks = suggest_tasks(onboarding, shortlist)
    if not tasks:
        return CounselReply(content=prompts.NO_TASKS_TEXT)

    response = prompts.TASKS_HEADER
    for i, task in enumerate(tasks, start=1):
        response += f"{i}. **{task.title}** ({task.category.value})\n"
        response += f"   {task.description}\n\n"

    return CounselReply(
        content=response,
        actions=[AddTaskAction(payload=TaskRef(task=task), label=f"Add: {task.title}") for task in tasks],
    )

def help_text(onboarding, shortlist, catalog) -> CounselReply:
    return CounselReply(content=prompts.HELP_TEXT)

RULES: List[Rule] = [
    Rule("profile", ("profile", "strength", "weakness"), profile_analysis),
    Rule("universities", ("university", "recommend", "suggest"), university_recommendations),
    Rule("tasks", ("task", "todo", "next step"), next_steps),
    Rule("help", ("help", "hello", "hi"), help_text),
]

def match_rule(text: str) -> Optional[Rule]:
    lowered = text.lower()
    for rule in RULES:
        if any(keyword in lowered for keyword in rule.keywords):
            return rule
    return None

def respond(
    text: str,
    onboarding: Optional[OnboardingData],
    shortlist: Sequence[University],
    catalog: Sequence[University] = CATALOG,
) -> CounselReply:
    """
    Build the scripted counsellor reply for a user message.

    Args:
        text: Free-text user message
        onboarding: Current onboarding data, if any
        shortlist: Currently shortlisted universities
        catalog: University catalog to recommend from

    Returns:
        CounselReply with content and optional suggested actions
    """
    rule = match_rule(text)
    if rule is None:
        logger.info("[COUNSEL] No rule matched, using fallback")
        return CounselReply(content=prompts.FALLBACK_TEXT)

    reply = rule.build(onboarding, shortlist, catalog)
    logger.info(f"[COUNSEL] Rule '{rule.name}' matched, {len(reply.actions or [])} actions")
    return reply

"""
Application state store.

`apply` is the single transition function: it never mutates its input,
never raises, and returns the same state object whenever an action's
precondition does not hold. `AppStore` is the one controller that owns a
state and serialises dispatch.
"""

import logging
from typing import Callable, Dict, Optional, Sequence, Type

from catalog import CATALOG, get_university
from models import (
    Action,
    AddChatMessage,
    AddTask,
    AddTaskAction,
    AppState,
    ChatMessage,
    CompleteOnboarding,
    ExecuteAIAction,
    LockUniversity,
    LockUniversityAction,
    Login,
    Logout,
    RemoveShortlist,
    RoleEnum,
    ShortlistUniversity,
    ShortlistUniversityAction,
    StageEnum,
    Task,
    ToggleTask,
    University,
    UnlockUniversity,
    UpdateProfile,
    UpdateStage,
    UpdateStageAction,
)
from prompts import get_welcome_message
from task_rules import generate_application_tasks, generate_initial_tasks, merge_tasks

logger = logging.getLogger(__name__)

def initial_state() -> AppState:
    """Fresh state with the chat seeded by the welcome message."""
    return AppState(
        chat_history=[
            ChatMessage(id="welcome", role=RoleEnum.AI, content=get_welcome_message()),
        ]
    )

# Transition helpers
def _shortlist(state: AppState, university: University) -> AppState:
    if any(u.id == university.id for u in state.shortlisted_universities):
        return state
    stage = state.current_stage
    if stage == StageEnum.DISCOVERING_UNIVERSITIES:
        stage = StageEnum.FINALIZING_UNIVERSITIES
    return state.model_copy(update={
        "shortlisted_universities": [*state.shortlisted_universities, university],
        "current_stage": stage,
    })

def _lock(state: AppState, university: University) -> AppState:
    if state.locked_university is not None and state.locked_university.id == university.id:
        return state
    shortlist = state.shortlisted_universities
    if not any(u.id == university.id for u in shortlist):
        shortlist = [*shortlist, university]
    return state.model_copy(update={
        "shortlisted_universities": shortlist,
        "locked_university": university,
        "current_stage": StageEnum.PREPARING_APPLICATIONS,
        "tasks": merge_tasks(state.tasks, generate_application_tasks(university)),
    })

def _add_task(state: AppState, task: Task) -> AppState:
    if any(t.id == task.id for t in state.tasks):
        return state
    return state.model_copy(update={"tasks": [*state.tasks, task]})

def _set_stage(state: AppState, stage: StageEnum) -> AppState:
    return state.model_copy(update={"current_stage": stage})

# Action handlers
def _login(state: AppState, action: Login, catalog) -> AppState:
    user = action.payload
    stage = StageEnum.DISCOVERING_UNIVERSITIES if user.onboarding else StageEnum.BUILDING_PROFILE
    return state.model_copy(update={
        "user": user,
        "is_authenticated": True,
        "current_stage": stage,
    })

def _logout(state: AppState, action: Logout, catalog) -> AppState:
    return initial_state()

def _complete_onboarding(state: AppState, action: CompleteOnboarding, catalog) -> AppState:
    if state.user is None:
        return state
    onboarding = action.payload
    user = state.user.model_copy(update={
        "onboarding": onboarding,
        "profile": state.user.profile.model_copy(update={"is_onboarded": True}),
    })
    return state.model_copy(update={
        "user": user,
        "current_stage": StageEnum.DISCOVERING_UNIVERSITIES,
        "tasks": merge_tasks(state.tasks, generate_initial_tasks(onboarding)),
    })

def _update_stage(state: AppState, action: UpdateStage, catalog) -> AppState:
    return _set_stage(state, action.payload)

def _shortlist_university(state: AppState, action: ShortlistUniversity, catalog) -> AppState:
    return _shortlist(state, action.payload)

def _remove_shortlist(state: AppState, action: RemoveShortlist, catalog) -> AppState:
    university_id = action.payload
    if state.locked_university is not None and state.locked_university.id == university_id:
        return state
    remaining = [u for u in state.shortlisted_universities if u.id != university_id]
    if len(remaining) == len(state.shortlisted_universities):
        return state
    return state.model_copy(update={"shortlisted_universities": remaining})

def _lock_university(state: AppState, action: LockUniversity, catalog) -> AppState:
    return _lock(state, action.payload)

def _unlock_university(state: AppState, action: UnlockUniversity, catalog) -> AppState:
    return state.model_copy(update={
        "locked_university": None,
        "current_stage": StageEnum.FINALIZING_UNIVERSITIES,
    })

def _add_task_action(state: AppState, action: AddTask, catalog) -> AppState:
    return _add_task(state, action.payload)

def _toggle_task(state: AppState, action: ToggleTask, catalog) -> AppState:
    task_id = action.payload
    if not any(t.id == task_id for t in state.tasks):
        return state
    return state.model_copy(update={
        "tasks": [
            t.model_copy(update={"completed": not t.completed}) if t.id == task_id else t
            for t in state.tasks
        ]
    })

def _add_chat_message(state: AppState, action: AddChatMessage, catalog) -> AppState:
    return state.model_copy(update={"chat_history": [*state.chat_history, action.payload]})

def _update_profile(state: AppState, action: UpdateProfile, catalog) -> AppState:
    if state.user is None or state.user.onboarding is None:
        return state
    onboarding = state.user.onboarding
    changes = {}
    for section in action.payload.model_fields_set:
        patch = getattr(action.payload, section)
        if patch is None:
            continue
        fields = patch.model_dump(exclude_unset=True, exclude_none=True)
        if fields:
            changes[section] = getattr(onboarding, section).model_copy(update=fields)
    if not changes:
        return state
    user = state.user.model_copy(update={"onboarding": onboarding.model_copy(update=changes)})
    return state.model_copy(update={"user": user})

def _execute_ai_action(state: AppState, action: ExecuteAIAction, catalog) -> AppState:
    ai_action = action.payload

    if isinstance(ai_action, ShortlistUniversityAction):
        university = get_university(ai_action.payload.university_id, catalog)
        if university is None:
            return state
        return _shortlist(state, university)

    if isinstance(ai_action, LockUniversityAction):
        university_id = ai_action.payload.university_id
        university = next((u for u in state.shortlisted_universities if u.id == university_id), None)
        if university is None:
            return state
        return _lock(state, university)

    if isinstance(ai_action, AddTaskAction):
        return _add_task(state, ai_action.payload.task)

    if isinstance(ai_action, UpdateStageAction):
        return _set_stage(state, ai_action.payload.stage)

    return state

HANDLERS: Dict[Type, Callable] = {
    Login: _login,
    Logout: _logout,
    CompleteOnboarding: _complete_onboarding,
    UpdateStage: _update_stage,
    ShortlistUniversity: _shortlist_university,
    RemoveShortlist: _remove_shortlist,
    LockUniversity: _lock_university,
    UnlockUniversity: _unlock_university,
    AddTask: _add_task_action,
    ToggleTask: _toggle_task,
    AddChatMessage: _add_chat_message,
    UpdateProfile: _update_profile,
    ExecuteAIAction: _execute_ai_action,
}

def apply(state: AppState, action: Action, catalog: Sequence[University] = CATALOG) -> AppState:
    """Apply one action. Unknown actions return `state` unchanged."""
    handler = HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action, catalog)

# Derived values read by navigation guards
def is_authenticated(state: AppState) -> bool:
    return state.is_authenticated

def is_onboarded(state: AppState) -> bool:
    return state.user is not None and state.user.profile.is_onboarded

def guard_redirect(state: AppState, require_onboarding: bool = True) -> Optional[str]:
    """Where a guarded page should send the user, or None to allow access."""
    if not is_authenticated(state):
        return "/login"
    if require_onboarding and not is_onboarded(state):
        return "/onboarding"
    return None

class AppStore:
    """Owns the application state; the only writer."""

    def __init__(self, catalog: Sequence[University] = CATALOG, state: Optional[AppState] = None) -> None:
        self.catalog = catalog
        self._state = state if state is not None else initial_state()

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, action: Action) -> AppState:
        previous = self._state
        self._state = apply(previous, action, self.catalog)
        if self._state is previous:
            logger.info(f"[STORE] {action.type} ignored (precondition not met)")
        else:
            logger.info(f"[STORE] {action.type} applied, stage={self._state.current_stage.value}")
        return self._state

import asyncio
import logging
import time
import uuid

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog import get_university
from classifier import classify_universities
from config import settings
from models import (
    AddChatMessage,
    AppState,
    ChatMessage,
    CompleteOnboarding,
    ExecuteAIAction,
    LockUniversity,
    Login,
    Logout,
    OnboardingData,
    OnboardingUpdate,
    RemoveShortlist,
    RoleEnum,
    ShortlistUniversity,
    ToggleTask,
    UnlockUniversity,
    UpdateProfile,
    User,
    UserProfile,
)
import prompts
import schemas
from scoring import calculate_profile_strength, stage_progress, task_progress
from service import respond
from store import AppStore, guard_redirect, is_authenticated, is_onboarded
from task_rules import split_application_tasks

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(title="AI Counsellor")

# One store per application instance
app.state.store = AppStore()

@app.on_event("startup")
def startup_event():
    settings.validate()

# Global Custom Error Handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert 422 to 400 for frontend compatibility."""
    return JSONResponse(
        status_code=400,
        content={"error": "VALIDATION_ERROR", "message": f"Invalid data format: {str(exc)}"},
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions."""
    logger.exception(f"[ERROR] Unhandled error on {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_SERVER_ERROR", "message": "An unexpected error occurred. Please try again."},
    )

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================
# DEPENDENCIES
# ============================================

def get_store(request: Request) -> AppStore:
    """Dependency returning the application's store."""
    return request.app.state.store

def require_auth(store: AppStore = Depends(get_store)) -> AppStore:
    if guard_redirect(store.state, require_onboarding=False) is not None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return store

def require_onboarded(store: AppStore = Depends(get_store)) -> AppStore:
    redirect = guard_redirect(store.state)
    if redirect == "/login":
        raise HTTPException(status_code=401, detail="Not authenticated")
    if redirect == "/onboarding":
        raise HTTPException(status_code=403, detail="Profile incomplete. Please complete onboarding.")
    return store

def _catalog_university(store: AppStore, university_id: str):
    university = get_university(university_id, store.catalog)
    if university is None:
        raise HTTPException(status_code=404, detail="University not found")
    return university

def _state_response(before: AppState, after: AppState) -> schemas.StateResponse:
    return schemas.StateResponse(status="UNCHANGED" if after is before else "OK", state=after)

def _new_message_id() -> str:
    return uuid.uuid4().hex

# ============================================
# ENDPOINTS
# ============================================

@app.get("/")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "ai-counsellor"}

@app.get("/state", response_model=AppState)
async def get_state(store: AppStore = Depends(get_store)):
    return store.state

@app.post("/dispatch", response_model=schemas.StateResponse)
async def dispatch(request: schemas.DispatchRequest, store: AppStore = Depends(get_store)):
    """Apply any action to the store.

    Debug surface: no auth or onboarding guard, actions go straight to the
    reducer and its preconditions are the only checks.
    """
    before = store.state
    return _state_response(before, store.dispatch(request.action))

@app.get("/session", response_model=schemas.SessionResponse)
async def session(store: AppStore = Depends(get_store)):
    """Booleans read by navigation guards."""
    state = store.state
    return schemas.SessionResponse(
        is_authenticated=is_authenticated(state),
        is_onboarded=is_onboarded(state),
        current_stage=state.current_stage,
    )

# Auth (simulated)
@app.post("/auth/login", response_model=schemas.StateResponse)
async def login(request: schemas.LoginRequest, store: AppStore = Depends(get_store)):
    logger.info(f"[ENDPOINT] /auth/login called for {request.email}")
    await asyncio.sleep(settings.AUTH_DELAY_SECONDS)
    user = User(profile=UserProfile(id="user-1", full_name="Demo User", email=request.email))
    before = store.state
    return _state_response(before, store.dispatch(Login(payload=user)))

@app.post("/auth/signup", response_model=schemas.StateResponse)
async def signup(request: schemas.SignupRequest, store: AppStore = Depends(get_store)):
    logger.info(f"[ENDPOINT] /auth/signup called for {request.email}")
    if request.password != request.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")
    await asyncio.sleep(settings.AUTH_DELAY_SECONDS)
    user = User(profile=UserProfile(
        id=f"user-{int(time.time() * 1000)}",
        full_name=request.full_name,
        email=request.email,
    ))
    before = store.state
    return _state_response(before, store.dispatch(Login(payload=user)))

@app.post("/auth/logout", response_model=schemas.StateResponse)
async def logout(store: AppStore = Depends(get_store)):
    before = store.state
    return _state_response(before, store.dispatch(Logout()))

# Profile
@app.post("/onboarding", response_model=schemas.StateResponse)
async def onboarding(data: OnboardingData, store: AppStore = Depends(require_auth)):
    """Submit onboarding data after the simulated save delay."""
    logger.info(f"[ENDPOINT] /onboarding called for {store.state.user.profile.email}")
    await asyncio.sleep(settings.ONBOARDING_DELAY_SECONDS)
    before = store.state
    return _state_response(before, store.dispatch(CompleteOnboarding(payload=data)))

@app.patch("/profile", response_model=schemas.StateResponse)
async def update_profile(update: OnboardingUpdate, store: AppStore = Depends(require_onboarded)):
    before = store.state
    return _state_response(before, store.dispatch(UpdateProfile(payload=update)))

# Universities
@app.get("/universities", response_model=schemas.CategorizedUniversities)
async def list_universities(store: AppStore = Depends(require_onboarded)):
    """Catalog grouped by category, flagged with shortlist/lock status."""
    state = store.state
    shortlisted = {u.id for u in state.shortlisted_universities}
    locked_id = state.locked_university.id if state.locked_university else None

    grouped = classify_universities(store.catalog)
    return schemas.CategorizedUniversities(**{
        category: [
            schemas.UniversityListing(university=uni, shortlisted=uni.id in shortlisted, locked=uni.id == locked_id)
            for uni in universities
        ]
        for category, universities in grouped.items()
    })

@app.post("/shortlist", response_model=schemas.StateResponse)
async def shortlist(request: schemas.UniversityIdRequest, store: AppStore = Depends(require_onboarded)):
    university = _catalog_university(store, request.university_id)
    before = store.state
    return _state_response(before, store.dispatch(ShortlistUniversity(payload=university)))

@app.delete("/shortlist/{university_id}", response_model=schemas.StateResponse)
async def remove_shortlist(university_id: str, store: AppStore = Depends(require_onboarded)):
    before = store.state
    return _state_response(before, store.dispatch(RemoveShortlist(payload=university_id)))

@app.post("/lock", response_model=schemas.StateResponse)
async def lock(request: schemas.UniversityIdRequest, store: AppStore = Depends(require_onboarded)):
    university = _catalog_university(store, request.university_id)
    before = store.state
    return _state_response(before, store.dispatch(LockUniversity(payload=university)))

@app.post("/unlock", response_model=schemas.StateResponse)
async def unlock(store: AppStore = Depends(require_onboarded)):
    before = store.state
    return _state_response(before, store.dispatch(UnlockUniversity()))

# Tasks
@app.post("/tasks/{task_id}/toggle", response_model=schemas.StateResponse)
async def toggle_task(task_id: str, store: AppStore = Depends(require_onboarded)):
    if not any(t.id == task_id for t in store.state.tasks):
        raise HTTPException(status_code=404, detail="Task not found")
    before = store.state
    return _state_response(before, store.dispatch(ToggleTask(payload=task_id)))

# Counsellor
@app.post("/counsel", response_model=ChatMessage)
async def counsel(request: schemas.CounselRequest, store: AppStore = Depends(require_onboarded)):
    """Record the user's message, then the scripted reply after a short delay."""
    state = store.state
    user_id = state.user.profile.id
    onboarding = state.user.onboarding
    shortlist = state.shortlisted_universities

    store.dispatch(AddChatMessage(payload=ChatMessage(
        id=_new_message_id(),
        role=RoleEnum.USER,
        content=request.message,
    )))

    await asyncio.sleep(settings.AI_REPLY_DELAY_SECONDS)

    current = store.state.user
    if current is None or current.profile.id != user_id:
        logger.warning(f"[COUNSEL] Session changed during reply for {user_id}, dropping reply")
        raise HTTPException(status_code=409, detail="Session changed before the reply was ready")

    reply = respond(request.message, onboarding, shortlist, store.catalog)
    ai_message = ChatMessage(
        id=_new_message_id(),
        role=RoleEnum.AI,
        content=reply.content,
        actions=reply.actions,
    )
    store.dispatch(AddChatMessage(payload=ai_message))
    return ai_message

@app.post("/counsel/actions", response_model=schemas.StateResponse)
async def execute_action(request: schemas.ExecuteActionRequest, store: AppStore = Depends(require_onboarded)):
    """Run a suggested action from a counsellor reply."""
    before = store.state
    return _state_response(before, store.dispatch(ExecuteAIAction(payload=request.action)))

# Dashboard / Application guidance
@app.get("/dashboard", response_model=schemas.DashboardResponse)
async def dashboard(store: AppStore = Depends(require_onboarded)):
    state = store.state
    return schemas.DashboardResponse(
        full_name=state.user.profile.full_name,
        stage=stage_progress(state.current_stage),
        profile_strength=calculate_profile_strength(state.user.onboarding),
        task_progress=task_progress(state.tasks),
        tasks=state.tasks,
        shortlist_count=len(state.shortlisted_universities),
        locked_university=state.locked_university,
    )

@app.get("/application", response_model=schemas.ApplicationResponse)
async def application(store: AppStore = Depends(require_onboarded)):
    state = store.state
    if state.locked_university is None:
        raise HTTPException(status_code=404, detail="No university locked. Lock a university from your shortlist first.")

    application_tasks, other_tasks = split_application_tasks(state.tasks, state.locked_university)
    return schemas.ApplicationResponse(
        locked_university=state.locked_university,
        application_tasks=application_tasks,
        other_tasks=other_tasks,
        progress=task_progress(state.tasks),
        documents=prompts.DOCUMENT_CHECKLIST,
        timeline=prompts.APPLICATION_TIMELINE,
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

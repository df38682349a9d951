# AI Counsellor Scripted Copy
# ==========================
# Fixed texts used by the rule-based counsellor and the initial chat log.

WELCOME_MESSAGE = (
    "Hello! I'm your AI Counsellor. I'll help you navigate your study abroad journey. "
    "Let's start by completing your profile so I can provide personalized recommendations."
)

HELP_TEXT = (
    "Hello! I'm your AI Counsellor. I can help you with:\n\n"
    "• **Profile Analysis** - Understand your strengths and gaps\n"
    "• **University Recommendations** - Find Dream, Target, and Safe universities\n"
    "• **Task Management** - Get personalized next steps\n"
    "• **Application Guidance** - Know what documents you need\n\n"
    "What would you like help with today?"
)

FALLBACK_TEXT = (
    "I understand. To better assist you, could you tell me more about what you're looking for? "
    "You can ask me about:\n\n"
    "• Your profile analysis\n"
    "• University recommendations\n"
    "• Next steps and tasks\n"
    "• Application requirements"
)

PROFILE_MISSING_TEXT = (
    "I don't have your profile yet. Complete onboarding first and I'll analyze "
    "your strengths and the areas to improve."
)

NO_MATCHES_TEXT = (
    "I couldn't find universities in your preferred countries offering {field}. "
    "Try broadening your preferred countries or field of study in your profile."
)

NO_TASKS_TEXT = "You're on track! There are no new tasks to suggest right now."

RECOMMENDATIONS_HEADER = "Based on your profile, here are my top recommendations:\n\n"

TASKS_HEADER = "Here are your recommended next steps:\n\n"

# Application guidance reference data
DOCUMENT_CHECKLIST = [
    {"name": "Transcripts", "status": "required", "description": "Official academic transcripts from all institutions"},
    {"name": "Statement of Purpose", "status": "required", "description": "Personal essay explaining your goals"},
    {"name": "Recommendation Letters", "status": "required", "description": "2-3 letters from professors/employers"},
    {"name": "Resume/CV", "status": "required", "description": "Updated academic and professional resume"},
    {"name": "English Test Scores", "status": "required", "description": "IELTS/TOEFL score report"},
    {"name": "GRE/GMAT Scores", "status": "conditional", "description": "Required for most MS/MBA programs"},
    {"name": "Financial Documents", "status": "required", "description": "Bank statements, scholarship letters"},
    {"name": "Passport Copy", "status": "required", "description": "Valid passport copy"},
]

APPLICATION_TIMELINE = [
    {"period": "Month 1-2", "tasks": ["Research universities", "Take standardized tests", "Start SOP draft"], "status": "completed"},
    {"period": "Month 3-4", "tasks": ["Finalize university list", "Request transcripts", "Contact recommenders"], "status": "in-progress"},
    {"period": "Month 5-6", "tasks": ["Submit applications", "Follow up on LORs", "Prepare for interviews"], "status": "pending"},
    {"period": "Month 7+", "tasks": ["Receive decisions", "Apply for visa", "Plan relocation"], "status": "pending"},
]


def get_welcome_message():
    """Returns the opening counsellor message."""
    return WELCOME_MESSAGE

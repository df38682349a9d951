import logging
import os
from typing import List

def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]

class Settings:
    """Application settings loaded from environment variables."""

    # Server
    PORT: int = int(os.getenv("PORT", "8000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOWED_ORIGINS: list = _split_origins(
        os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173")
    )

    # Simulated latency (seconds)
    AUTH_DELAY_SECONDS: float = float(os.getenv("AUTH_DELAY_SECONDS", "1.5"))
    ONBOARDING_DELAY_SECONDS: float = float(os.getenv("ONBOARDING_DELAY_SECONDS", "1.5"))
    AI_REPLY_DELAY_SECONDS: float = float(os.getenv("AI_REPLY_DELAY_SECONDS", "1.0"))

    @classmethod
    def validate(cls):
        """Validate environment-derived values."""
        for name in ("AUTH_DELAY_SECONDS", "ONBOARDING_DELAY_SECONDS", "AI_REPLY_DELAY_SECONDS"):
            if getattr(cls, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if not cls.ALLOWED_ORIGINS:
            logging.getLogger(__name__).warning("ALLOWED_ORIGINS is empty. Browser clients will be rejected.")

settings = Settings()

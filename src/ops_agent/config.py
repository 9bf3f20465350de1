"""Runtime configuration for the store operations agent."""

import os
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from operations.schemas import DEFAULT_MAX_RETRIES
from sessions.store import DEFAULT_SESSION_TTL_SECONDS


class AgentSettings(BaseModel):
    """Settings read from the environment (and a .env file if present)."""
    model_name: str = Field("gpt-4o", description="Chat model used for planning and drafting")
    max_retries: int = Field(DEFAULT_MAX_RETRIES, ge=0, description="Retries per step beyond the first attempt")
    max_drive_cycles: int = Field(4, ge=1, description="Drives per turn while a step awaits a retry")
    retry_delay_seconds: float = Field(0.5, ge=0, description="Base backoff between drives")
    history_window: int = Field(10, ge=0, description="Prior user/assistant messages sent to the model")
    session_ttl_seconds: int = Field(DEFAULT_SESSION_TTL_SECONDS, gt=0, description="Session lifetime")
    log_level: str = Field("INFO", description="Logging level used by the CLI")


def load_settings() -> AgentSettings:
    """
    Build AgentSettings from environment variables.

    Returns:
        AgentSettings with defaults for anything not set

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    load_dotenv()

    values = {
        "model_name": os.getenv("MODEL_NAME"),
        "max_retries": os.getenv("OPERATION_MAX_RETRIES"),
        "max_drive_cycles": os.getenv("OPERATION_MAX_DRIVE_CYCLES"),
        "retry_delay_seconds": os.getenv("OPERATION_RETRY_DELAY_SECONDS"),
        "history_window": os.getenv("HISTORY_WINDOW"),
        "session_ttl_seconds": os.getenv("SESSION_TTL_SECONDS"),
        "log_level": os.getenv("LOG_LEVEL"),
    }
    return AgentSettings(**{key: value for key, value in values.items() if value not in (None, "")})

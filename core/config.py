"""
Runtime settings for the dashboard.

Values come from the process environment; a local .env file is loaded
first so OPENAI_API_KEY and friends work under `streamlit run` too.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    openai_api_key: str | None
    ai_model: str
    ai_timeout: float
    database_url: str
    registration_fee: int
    insight_window: int
    log_level: str

    # General ledger account codes
    revenue_account: str = "4001"
    expense_account: str = "5001"


def load_settings() -> Settings:
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        ai_model=os.getenv("HMS_AI_MODEL", "gpt-4o-mini"),
        ai_timeout=_env_float("HMS_AI_TIMEOUT", 30.0),
        database_url=os.getenv("HMS_DATABASE_URL", "sqlite://"),
        registration_fee=_env_int("HMS_REGISTRATION_FEE", 150),
        insight_window=_env_int("HMS_INSIGHT_WINDOW", 50),
        log_level=os.getenv("HMS_LOG_LEVEL", "INFO").upper(),
    )


settings = load_settings()

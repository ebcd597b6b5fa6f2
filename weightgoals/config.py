from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/weightgoals"
    default_tz: str = "UTC"  # Day boundaries for goal weeks are taken in this zone
    api_key: str | None = None

    # Goal evaluation defaults (callers may override tolerance per request)
    goal_tolerance_kg: float = 0.5  # Dead-band around target / planned weight
    goal_default_days: int = 28  # Goal length when no target date is given

    log_level: str = "INFO"
    log_file: str | None = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"
    log_json: bool = False  # Serialized records instead of the text format

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()

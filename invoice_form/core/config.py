from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_name: str = Field("invoice-form-gate", alias="APP_NAME")
    app_env: str = Field("dev", alias="APP_ENV")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # String lookup for validation dialogs
    locale: str = Field("en", alias="LOCALE")
    messages_file: str | None = Field(default=None, alias="MESSAGES_FILE")  # JSON object of key -> text overrides

    # Teams (optional notification sink for validation warnings)
    teams_webhook_url: str | None = Field(default=None, alias="TEAMS_WEBHOOK_URL")

    # CORS allowed origins (comma-separated list for production deployment)
    cors_origins: str = Field("http://localhost:3000,http://127.0.0.1:3000", alias="CORS_ORIGINS")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive = False, # Make environment variable names case-insensitive
        env_file = ".env", # Load environment variables from .env file, if available
        extra = "ignore", # Ignore any extra fields not defined in the model
    )

    # All env vars should be declared manually, never assume automatic behavior
    app_env: str = Field(validation_alias="APP_ENV", pattern=r'^(development|production)$', default="development")
    log_level: str = Field(validation_alias="LOG_LEVEL", default="INFO")

    # Database connection, required for every endpoint apart from health
    mongodb_uri: Optional[str] = Field(validation_alias="MONGODB_URI", default="mongodb://localhost:27017")
    mongodb_database: str = Field(validation_alias="MONGODB_DATABASE", default="attendance_system")
    # Wraps session creation and session close in a Mongo transaction (requires a replica set)
    atomic_writes: bool = Field(validation_alias="ATOMIC_WRITES", default=False)

    # Permission letter uploads
    upload_dir: str = Field(validation_alias="UPLOAD_DIR", default="uploads")
    max_upload_bytes: int = Field(validation_alias="MAX_UPLOAD_BYTES", default=5 * 1024 * 1024, gt=0)

    # until_now: [midnight, now) | calendar_day: [midnight, next midnight)
    present_today_window: str = Field(
        validation_alias="PRESENT_TODAY_WINDOW",
        pattern=r'^(until_now|calendar_day)$',
        default="until_now",
    )

    # Application Constants
    app_version: str = "1.0.0"
    uploads_url_prefix: str = "/uploads"

settings = Settings()

# MongoDB
STUDENTS_COLLECTION = "students"
COURSES_COLLECTION = "courses"
SESSIONS_COLLECTION = "attendance_sessions"
ATTENDANCES_COLLECTION = "attendances"

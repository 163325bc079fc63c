from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Reservation Intake Backend"
    API_PREFIX: str = "/api"

    # Server
    PORT: int = 8000
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_FILE: str = "logs/errors.log"

    # Storage: memory | csv | supabase
    STORE_BACKEND: str = "csv"
    CSV_PATH: str = "data/reservations.csv"

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SUPABASE_TABLE: str = "reservations"

    # Reservations
    RESERVATION_ID_PREFIX: str = "JBKNP"
    DEFAULT_ASSIGNED_STAFF: str = "Unassigned"
    TIMEZONE: str = "Asia/Jakarta"
    LOCK_TIMEOUT_SECONDS: float = 30.0
    RECENT_REGISTRANTS_LIMIT: int = 20

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()

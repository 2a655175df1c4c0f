from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Remote multi-tenant store
    DATABASE_URL: str = "sqlite:///./posgo.sqlite3"
    SECRET_KEY: str = "dev-insecure-key-change-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Demo mode: JSON document on disk, or in-memory when empty
    LOCAL_STORAGE_PATH: str = ""
    DEMO_USER_ID: str = "test-user-demo"

    # Customer-facing receipt delivery
    RECEIPTS_ENABLED: bool = True
    RECEIPT_WEBHOOK_URL: str = "https://webhook.red51.site/webhook/posgo_ticket"
    RECEIPT_WEBHOOK_TIMEOUT: float = 10.0
    RECEIPT_SENDS_PER_MINUTE: int = 10
    DEFAULT_COUNTRY_CODE: str = "51"

    LOG_LEVEL: str = "INFO"


settings = Settings()

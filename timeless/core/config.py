from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "timeless-api"

    STORE_PROVIDER: str = "memory"
    STORE_PATH: str = "./data/reservations.json"

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    API_BASE_URL: str = "http://localhost:4000"
    API_TIMEOUT_SECONDS: float = 10.0
    CONSOLE_POLL_INTERVAL_SECONDS: float = 4.0


settings = Settings()

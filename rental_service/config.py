from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str

    # Redis backs the rate limiter only
    REDIS_URL: str = "redis://localhost:6379/0"
    RATE_LIMIT_ENABLED: bool = True

    # Inclusive of both the rent and the return day
    MAX_RENTAL_DAYS: int = 7

    # Startup connection policy for the database
    DB_CONNECT_MAX_RETRIES: int = 5
    DB_CONNECT_RETRY_DELAY: float = 2.0
    CREATE_TABLES: bool = True

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")


settings = Settings()

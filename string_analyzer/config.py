from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"extra": "ignore", "env_file": ".env", "env_file_encoding": "utf-8"}

    APP_NAME: str = "String Analyzer Service"
    DATABASE_URL: str = "sqlite:///./strings.db"

    # Logging configuration used by string_analyzer.logging
    LOG_LEVEL: str = "INFO"
    CONSOLE_LOG_LEVEL: str = "INFO"

    # Rate limiting (in-memory slowapi limiter)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT: int = 60
    RATE_LIMIT_WINDOW: int = 60

    # When true, a natural language query that matches no rule is rejected with 400
    # instead of returning every stored string.
    NL_REJECT_UNRECOGNIZED: bool = False


settings = Settings()

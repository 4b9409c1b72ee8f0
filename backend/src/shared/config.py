from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    APP_NAME: str = "certkeys"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Telemetry
    OTEL_CONSOLE_EXPORT: bool = True


settings = Settings()

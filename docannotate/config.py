from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    app_name: str = "DocAnnotate"
    app_env: str = Field("dev", alias="APP_ENV")
    secret_key: str = Field("dev-secret-change-me", alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(60 * 8, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    cookie_name: str = Field("da_jwt", alias="COOKIE_NAME")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    import_timeout_seconds: float = Field(15.0, alias="IMPORT_TIMEOUT_SECONDS")
    max_document_bytes: int = Field(10 * 1024 * 1024, alias="MAX_DOCUMENT_BYTES")

    min_password_length: int = Field(6, alias="MIN_PASSWORD_LENGTH")
    password_hash_rounds: int = Field(14, alias="PASSWORD_HASH_ROUNDS")

    preferences_path: str | None = Field(default=None, alias="PREFERENCES_PATH")

    model_config = {"env_file": ".env", "extra": "ignore", "populate_by_name": True}

settings = Settings()

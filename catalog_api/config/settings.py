# catalog_api/config/settings.py
from urllib.parse import quote_plus

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Full URL wins; otherwise the PostgreSQL parts below are used.
    database_url_raw: str | None = Field(
        default=None, validation_alias=AliasChoices("database_url", "database_url_raw")
    )
    db_host: str | None = None
    db_port: int = 5432
    db_name: str | None = None
    db_user: str | None = None
    db_password: str | None = None
    sqlite_path: str = "./catalog.db"
    auto_create_schema: bool = True

    api_prefix: str = "/api"
    cors_origins_raw: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        validation_alias=AliasChoices("cors_origins", "cors_origins_raw"),
    )

    jwt_secret: str = DEV_JWT_SECRET
    jwt_issuer: str = "catalog-api"
    jwt_audience: str = "catalog-clients"
    jwt_access_minutes: int = 60
    jwt_check_active_user: bool = False

    password_iterations: int = 600_000
    password_min_length: int = 5

    page_default_size: int = 10
    page_max_size: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", "jwt_secret", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("jwt_access_minutes", "password_iterations", "page_default_size", "page_max_size")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be greater than 0")
        return v

    @model_validator(mode="after")
    def check_secret_and_pages(self) -> "Settings":
        if not self.jwt_secret:
            raise ValueError("jwt_secret must not be empty")
        if self.environment == "production" and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("jwt_secret must be set in production")
        if self.page_default_size > self.page_max_size:
            raise ValueError("page_default_size must not exceed page_max_size")
        return self

    @property
    def database_url(self) -> str:
        if self.database_url_raw:
            return self.database_url_raw

        if not self.db_host:
            return f"sqlite:///{self.sqlite_path}"

        user = quote_plus(self.db_user or "")
        password = quote_plus(self.db_password or "")
        return f"postgresql+psycopg2://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_raw.split(",") if o.strip()]


settings = Settings()

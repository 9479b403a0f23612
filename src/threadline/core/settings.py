"""Application settings and configuration.

This module defines all configuration options for the Threadline application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a `.env` file.
    """

    # Application metadata
    app_name: str = Field(default="Threadline", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./threadline.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    db_pool_pre_ping: bool = Field(default=True, alias="DB_POOL_PRE_PING")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # HTTP surface
    api_prefix: str = Field(default="/api", alias="API_PREFIX")

    # CORS configuration for the web frontend
    app_url: str | None = Field(default=None, alias="APP_URL")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization"],
        alias="CORS_ALLOW_HEADERS",
    )

    # Text summarization provider (Gemini generateContent API)
    summarizer_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUMMARIZER_API_KEY", "API_KEY"),
    )
    summarizer_base_url: str = Field(
        default="https://generativelanguage.googleapis.com",
        alias="SUMMARIZER_BASE_URL",
    )
    summarizer_model: str = Field(default="gemini-1.5-flash", alias="SUMMARIZER_MODEL")
    summarizer_timeout_seconds: float = Field(
        default=5.0,
        alias="SUMMARIZER_TIMEOUT_SECONDS",
    )
    summarizer_prompt: str = Field(
        default="Summarize the following set of replies:",
        alias="SUMMARIZER_PROMPT",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def allowed_origins(self) -> list[str]:
        """Return the origins allowed by CORS.

        A configured `APP_URL` pins the API to that single frontend origin;
        otherwise the `CORS_ORIGINS` list applies.
        """
        if self.app_url:
            return [self.app_url]
        return list(self.cors_origins)


settings = Settings()

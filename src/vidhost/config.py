"""Application configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Server
    service_name: str = Field(default="uploader-api", description="Name reported by /health")
    api_host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=8080, description="API server port")
    api_reload: bool = Field(default=False, description="Enable auto-reload for development")

    # Object storage
    storage_provider: Literal["s3", "memory"] = Field(
        default="s3",
        description="Object store backend (s3, memory)",
    )
    aws_region: str = Field(default="us-east-1", description="AWS region for S3")
    aws_access_key_id: str | None = Field(default=None, description="AWS access key ID")
    aws_secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    s3_bucket_name: str = Field(default="", description="Bucket that receives uploads")
    s3_public_bucket_name: str | None = Field(
        default=None,
        description="Bucket name override used when building public object URLs",
    )

    # Database
    database_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the DB_* parts when set",
    )
    db_host: str = Field(default="localhost", description="PostgreSQL host")
    db_port: int = Field(default=5432, description="PostgreSQL port")
    db_user: str = Field(default="vidhost", description="PostgreSQL user")
    db_password: str = Field(default="vidhost", description="PostgreSQL password")
    db_name: str = Field(default="vidhost", description="PostgreSQL database name")

    # Processor
    processor_api_url: str = Field(
        default="http://localhost:3000/process",
        description="Endpoint notified after each upload",
    )
    processor_trigger: Literal["http", "stub"] = Field(
        default="http",
        description="Processor notification backend (http, stub)",
    )

    # Celery (processor worker stub)
    celery_broker_url: str = Field(
        default="redis://localhost:6379/0",
        description="Celery broker URL",
    )
    celery_result_backend: str = Field(
        default="redis://localhost:6379/0",
        description="Celery result backend URL",
    )

    # Dashboard client
    uploader_api_url: str = Field(
        default="http://localhost:8081",
        description="Base URL of the upload API used by the dashboard",
    )
    analytics_api_url: str = Field(
        default="http://localhost:8083",
        description="Base URL of the analytics API used by the dashboard",
    )
    dashboard_poll_interval_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Refresh interval while videos are still processing",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    @property
    def sqlalchemy_url(self) -> str:
        """Database URL, built from the DB_* parts unless DATABASE_URL is set."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

"""
Core configuration using Pydantic Settings.
Loads from environment variables.
"""

from typing import Literal
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MailConfig(BaseModel):
    """SMTP settings handed to the email sender."""

    smtp_host: str
    smtp_port: int
    smtp_user: str | None = None
    smtp_password: str | None = None
    from_email: str
    from_name: str
    use_tls: bool = True


class StorageConfig(BaseModel):
    """S3 settings handed to the media storage client."""

    aws_access_key_id: str
    aws_secret_access_key: str
    region: str
    bucket: str
    public_base_url: str | None = None
    endpoint_url: str | None = None


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = Field(default="showbiz-api", alias="APP_NAME")
    app_version: str = "0.1.0"
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", alias="APP_ENV"
    )
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )
    port: int = Field(default=8000, alias="PORT")

    # API
    api_prefix: str = "/api"
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        alias="ALLOWED_ORIGINS",
    )

    # Database
    database_url: str = Field(..., alias="DATABASE_URL")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # Celery
    celery_broker_url: str = Field(
        default="redis://localhost:6379/0", alias="CELERY_BROKER_URL"
    )
    celery_result_backend: str = Field(
        default="redis://localhost:6379/1", alias="CELERY_RESULT_BACKEND"
    )
    celery_task_always_eager: bool = Field(
        default=False, alias="CELERY_TASK_ALWAYS_EAGER"
    )

    # S3
    aws_access_key_id: str = Field(..., alias="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: str = Field(..., alias="AWS_SECRET_ACCESS_KEY")
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")
    aws_s3_bucket: str = Field(..., alias="AWS_S3_BUCKET")
    aws_s3_public_url: str | None = Field(default=None, alias="AWS_S3_PUBLIC_URL")
    aws_s3_endpoint_url: str | None = Field(default=None, alias="AWS_S3_ENDPOINT_URL")

    # Auth
    jwt_secret_key: str = Field(..., alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_days: int = Field(default=15, alias="ACCESS_TOKEN_EXPIRE_DAYS")
    otp_expire_minutes: int = Field(default=10, alias="OTP_EXPIRE_MINUTES")
    reset_token_expire_minutes: int = Field(
        default=10, alias="RESET_TOKEN_EXPIRE_MINUTES"
    )

    # Logging
    log_request_body: bool = Field(default=False, alias="LOG_REQUEST_BODY")
    log_max_body_size: int = Field(default=1024, alias="LOG_MAX_BODY_SIZE")
    json_logs: bool = Field(default=True, alias="JSON_LOGS")

    # Email
    smtp_host: str = Field(default="smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="MAIL_USER")
    smtp_password: str | None = Field(default=None, alias="MAIL_PASS")
    from_email: str = Field(default="noreply@showbizapp.com", alias="FROM_EMAIL")
    from_name: str = Field(default="Showbiz App", alias="FROM_NAME")

    @property
    def mail(self) -> MailConfig:
        """SMTP configuration for the email sender."""
        return MailConfig(
            smtp_host=self.smtp_host,
            smtp_port=self.smtp_port,
            smtp_user=self.smtp_user,
            smtp_password=self.smtp_password,
            from_email=self.smtp_user or self.from_email,
            from_name=self.from_name,
        )

    @property
    def storage(self) -> StorageConfig:
        """S3 configuration for media uploads."""
        return StorageConfig(
            aws_access_key_id=self.aws_access_key_id,
            aws_secret_access_key=self.aws_secret_access_key,
            region=self.aws_region,
            bucket=self.aws_s3_bucket,
            public_base_url=self.aws_s3_public_url,
            endpoint_url=self.aws_s3_endpoint_url,
        )


# Global settings instance
settings = Settings()

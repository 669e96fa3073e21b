
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Vendor Onboarding API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"
    max_upload_size_mb: int = 10

    # Database (PostgreSQL via asyncpg, or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./vendor_onboarding.db",
        alias="DATABASE_URL",
    )

    # Object storage (S3)
    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")
    aws_bucket_name: str = Field(default="vendor-documents", alias="AWS_BUCKET_NAME")
    aws_access_key_id: str | None = Field(default=None, alias="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: str | None = Field(default=None, alias="AWS_SECRET_ACCESS_KEY")
    s3_endpoint_url: str | None = Field(
        default=None, alias="S3_ENDPOINT_URL",
    )  # e.g. a MinIO / LocalStack endpoint
    s3_object_acl: str | None = Field(default="public-read", alias="S3_OBJECT_ACL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

settings = Settings()

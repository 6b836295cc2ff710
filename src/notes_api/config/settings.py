# src/notes_api/config/settings.py
from typing import List, Optional
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from notes_api.config.settings import get_settings
        settings = get_settings()
        backend = settings.storage_backend
    """

    # Application Settings
    app_name: str = Field(
        default="notes-api",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="local-dev",
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # Backend selection
    storage_backend: str = Field(
        default="remote",
        description="Which adapter backs the editor: remote (row + blob store) or local (key-value store)"
    )

    row_store: str = Field(
        default="sqlite",
        description="Row store used by the remote backend: sqlite or supabase"
    )

    blob_store: str = Field(
        default="filesystem",
        description="Blob store used by the remote backend: filesystem, s3 or supabase"
    )

    # Local persistence
    db_path: str = Field(
        default="notes.db",
        description="SQLite file holding the messages and files tables"
    )

    kv_db_path: str = Field(
        default="notes_kv.db",
        description="SQLite file backing the persistent key-value store"
    )

    storage_dir: str = Field(
        default="storage",
        description="Local blob storage directory"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # S3 Configuration
    s3_bucket_name: str = Field(
        default="notes-files",
        description="S3 bucket for uploaded files"
    )

    s3_public_base_url: Optional[str] = Field(
        default=None,
        description="Base URL objects are publicly served from (defaults to the bucket's S3 URL)"
    )

    # Supabase Configuration
    supabase_url: Optional[str] = Field(
        default=None,
        alias="SUPABASE_URL",
        description="Project URL, e.g. https://<project>.supabase.co"
    )

    supabase_key: Optional[str] = Field(
        default=None,
        alias="SUPABASE_KEY",
        description="Publishable (anon) API key"
    )

    supabase_bucket: str = Field(
        default="files",
        description="Supabase Storage bucket for uploaded files"
    )

    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for HTTP calls to hosted stores"
    )

    # Key-value store keys
    messages_key: str = Field(default="messages")
    files_key: str = Field(default="files")
    theme_key: str = Field(default="theme")

    # Presentation
    date_locale: str = Field(
        default="en-US",
        description="Locale used when rendering timestamps on the page"
    )

    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('deployment_mode', mode='before')
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Normalize deployment mode values for backwards compatibility."""
        if v:
            mode_mapping = {
                "local-mock": "local-dev",
                "cloud": "aws-prod",
            }
            return mode_mapping.get(v, v)
        return v

    @field_validator('deployment_mode')
    @classmethod
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        valid_modes = ["local-dev", "aws-mock", "aws-prod"]
        if v not in valid_modes:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {valid_modes}")
        return v

    @field_validator('storage_backend')
    @classmethod
    def validate_storage_backend(cls, v):
        valid = ["remote", "local"]
        if v not in valid:
            raise ValueError(f"Invalid storage_backend: {v}. Must be one of {valid}")
        return v

    @field_validator('row_store')
    @classmethod
    def validate_row_store(cls, v):
        valid = ["sqlite", "supabase"]
        if v not in valid:
            raise ValueError(f"Invalid row_store: {v}. Must be one of {valid}")
        return v

    @field_validator('blob_store')
    @classmethod
    def validate_blob_store(cls, v):
        valid = ["filesystem", "s3", "supabase"]
        if v not in valid:
            raise ValueError(f"Invalid blob_store: {v}. Must be one of {valid}")
        return v

    @model_validator(mode='after')
    def fill_local_aws_defaults(self):
        """Point boto3 at moto with mock credentials in local modes."""
        if self.deployment_mode in ["local-dev", "aws-mock"]:
            if self.aws_endpoint_url is None:
                self.aws_endpoint_url = "http://localhost:5000"
            if self.aws_access_key_id is None:
                self.aws_access_key_id = "mock"
            if self.aws_secret_access_key is None:
                self.aws_secret_access_key = "mock"
        return self

    @model_validator(mode='after')
    def check_supabase_credentials(self):
        uses_supabase = self.storage_backend == "remote" and "supabase" in (self.row_store, self.blob_store)
        if uses_supabase and not (self.supabase_url and self.supabase_key):
            raise ValueError("supabase_url and supabase_key are required when a Supabase store is selected")
        return self

    @property
    def s3_public_url(self) -> str:
        """Base URL that object keys are appended to for public retrieval."""
        if self.s3_public_base_url:
            return self.s3_public_base_url.rstrip("/")
        if self.aws_endpoint_url:
            return f"{self.aws_endpoint_url.rstrip('/')}/{self.s3_bucket_name}"
        return f"https://{self.s3_bucket_name}.s3.{self.aws_region}.amazonaws.com"

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()

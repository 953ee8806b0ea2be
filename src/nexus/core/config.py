from functools import lru_cache

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Nexus Research Registry"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True  # Set to False in production

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full

    # Auth (tokens are issued by the identity provider, we only verify them)
    auth_jwt_secret: str
    auth_jwt_algorithm: str = "HS256"
    # Fixed identity used when no bearer token is sent. Never allowed in production.
    auth_placeholder_user_id: str | None = None
    auth_placeholder_user_name: str = "Development User"
    # Identities allowed to manage product types
    admin_user_ids: list[str] = []

    # Storage
    storage_backend: str = "local"  # local, supabase
    storage_root_folder: str = "ctein-nexus"
    storage_local_dir: str = "./var/uploads"
    storage_local_base_url: str = "http://localhost:8000/files"
    storage_timeout_seconds: int = 30
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_bucket: str = "attachments"

    # Uploads
    upload_max_bytes: int = 10 * 1024 * 1024
    upload_max_files: int = 5
    attachment_cleanup_policy: str = "log-and-continue"  # log-and-continue, raise

    # Public listing
    public_default_limit: int = 10
    public_showcase_limit: int = 6
    public_max_limit: int = 50

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("auth_jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "AUTH_JWT_SECRET must be changed from default value. "
                "Use the signing secret shared with the identity provider."
            )
        if len(v) < 32:
            raise ValueError("AUTH_JWT_SECRET must be at least 32 characters")
        return v

    @field_validator("auth_placeholder_user_id")
    @classmethod
    def validate_placeholder_user(cls, v: str | None, info: ValidationInfo) -> str | None:
        """Refuse the placeholder identity outside non-production environments."""
        if v is not None and info.data.get("app_env") == "production":
            raise ValueError("AUTH_PLACEHOLDER_USER_ID cannot be set when APP_ENV=production")
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        if v not in ("local", "supabase"):
            raise ValueError("STORAGE_BACKEND must be 'local' or 'supabase'")
        return v

    @field_validator("attachment_cleanup_policy")
    @classmethod
    def validate_cleanup_policy(cls, v: str) -> str:
        if v not in ("log-and-continue", "raise"):
            raise ValueError("ATTACHMENT_CLEANUP_POLICY must be 'log-and-continue' or 'raise'")
        return v

    @field_validator("public_default_limit", "public_showcase_limit", "public_max_limit")
    @classmethod
    def validate_positive_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Listing limits must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()

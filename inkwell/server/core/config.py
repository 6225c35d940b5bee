"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class SupabaseConfig(BaseModel):
    """Backend-as-a-service (Supabase) connection configuration."""

    url: str = Field(
        default="http://localhost:54321", alias="SUPABASE_URL", description="Supabase project URL"
    )
    key: Optional[str] = Field(
        default=None,
        alias="SUPABASE_KEY",
        description="Supabase service key used by the server-side client",
    )
    postgrest_timeout: int = Field(
        default=10, alias="SUPABASE_POSTGREST_TIMEOUT", description="Table query timeout in seconds"
    )
    storage_timeout: int = Field(
        default=30, alias="SUPABASE_STORAGE_TIMEOUT", description="Storage upload timeout in seconds"
    )

    model_config = {"populate_by_name": True}


class StorageBucketsConfig(BaseModel):
    """Storage bucket names, one per kind of uploaded file."""

    posts: str = Field(default="posts", alias="STORAGE_BUCKET_POSTS", description="Post posters")
    books: str = Field(default="books", alias="STORAGE_BUCKET_BOOKS", description="Book files")
    media: str = Field(default="media", alias="STORAGE_BUCKET_MEDIA", description="Book and video covers")
    authors: str = Field(default="authors", alias="STORAGE_BUCKET_AUTHORS", description="Author avatars")
    users: str = Field(default="user", alias="STORAGE_BUCKET_USERS", description="Reader avatars")

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Inkwell Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Inkwell server host address to bind to",
        alias="INKWELL_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Inkwell server port number",
        alias="INKWELL_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Inkwell server logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="INKWELL_LOG_LEVEL",
    )

    # =====================================================================
    # Backend-as-a-service
    # =====================================================================
    supabase_url: str = Field(default="http://localhost:54321", alias="SUPABASE_URL")
    supabase_key: Optional[str] = Field(default=None, alias="SUPABASE_KEY")
    supabase_postgrest_timeout: int = Field(default=10, alias="SUPABASE_POSTGREST_TIMEOUT")
    supabase_storage_timeout: int = Field(default=30, alias="SUPABASE_STORAGE_TIMEOUT")

    # =====================================================================
    # Storage buckets
    # =====================================================================
    storage_bucket_posts: str = Field(default="posts", alias="STORAGE_BUCKET_POSTS")
    storage_bucket_books: str = Field(default="books", alias="STORAGE_BUCKET_BOOKS")
    storage_bucket_media: str = Field(default="media", alias="STORAGE_BUCKET_MEDIA")
    storage_bucket_authors: str = Field(default="authors", alias="STORAGE_BUCKET_AUTHORS")
    storage_bucket_users: str = Field(default="user", alias="STORAGE_BUCKET_USERS")

    # =====================================================================
    # CORS (JSON lists in the environment, e.g. CORS_ORIGINS='["https://app.example"]')
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Content rules
    # =====================================================================
    max_cover_size_mb: float = Field(
        default=5.0,
        description="Largest accepted cover image, in megabytes",
        alias="INKWELL_MAX_COVER_SIZE_MB",
    )
    popular_limit: int = Field(
        default=10,
        description="Number of items kept by the 'popular' listing filter",
        alias="INKWELL_POPULAR_LIMIT",
    )

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def supabase(self) -> SupabaseConfig:
        """Get Supabase configuration from environment variables."""
        return SupabaseConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def buckets(self) -> StorageBucketsConfig:
        """Get storage bucket names from environment variables."""
        return StorageBucketsConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()

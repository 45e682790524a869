"""
Configuration settings for the email RAG pipeline.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Email RAG Pipeline"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Chunking ===
    CHUNK_SIZE: int = 512  # chars
    CHUNK_OVERLAP: int = 50  # chars
    BOUNDARY_SEARCH_WINDOW: int = 50  # max distance to a space when snapping chunk ends
    
    # === Pipeline Stage Toggles ===
    REMOVE_SIGNATURES: bool = True
    EXTRACT_ENTITIES: bool = True
    OPTIMIZE_FOR_RAG: bool = True
    
    # === Quality Gate ===
    QUALITY_THRESHOLD: float = 0.0  # 0-100, emails below get a warning
    SKIP_LOW_QUALITY: bool = False  # True: index parent document only for low-quality emails
    
    # === Search Documents ===
    MAX_KEYWORDS: int = 25
    CONTENT_KEYWORD_COUNT: int = 15  # most frequent body words considered for keywords
    MAX_FIELD_LENGTH: int = 32766  # Azure AI Search limit for a searchable string
    TRUNCATED_FIELD_LENGTH: int = 32760
    
    # === Batch Processing ===
    BATCH_MAX_WORKERS: int = 1  # >1 processes emails on a thread pool


# Global settings instance
settings = Settings()

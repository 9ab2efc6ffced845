from typing import List, Optional

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Certificados"
    VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"

    # --- Environment & Debug ---
    ENVIRONMENT: str = "local"
    DEBUG: bool = False  # Default to False for security
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None  # Sin valor: solo consola

    # --- Record store ---
    DATABASE_URL: str = "sqlite:///./certificates.db"
    CERTIFICATES_TABLE: str = "users_certificates"

    # --- Connection Pool (ignorado en SQLite) ---
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_PRE_PING: bool = True

    # --- Artifact store (S3) ---
    AWS_BUCKET_NAME: str = "certificates"
    AWS_URL_FILE: str = Field(
        default="http://localhost:4569/certificates",
        description="Prefijo público de los PDFs emitidos: {AWS_URL_FILE}/{id}.pdf",
    )
    AWS_REGION: str = "us-east-1"
    AWS_ENDPOINT_URL: Optional[str] = None
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[SecretStr] = None

    # --- Offline mode ---
    IS_OFFLINE: bool = False
    OFFLINE_OUTPUT_DIR: str = "storage"

    # --- CORS ---
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=list,
        description="List of allowed CORS origins. Configure in .env",
    )

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def default_allowed_origins(
        cls, v: Optional[List[str]], info: ValidationInfo
    ) -> Optional[List[str]]:
        env = info.data.get("ENVIRONMENT") or "local"
        if env != "production":
            if v is None:
                return ["http://localhost:5173", "http://localhost:3000"]
            if isinstance(v, str) and v.strip() in ("", "[]"):
                return ["http://localhost:5173", "http://localhost:3000"]
            if isinstance(v, list) and len(v) == 0:
                return ["http://localhost:5173", "http://localhost:3000"]
        return v

    @field_validator("AWS_URL_FILE", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("IS_OFFLINE", mode="after")
    @classmethod
    def validate_offline_mode(cls, v: bool, info: ValidationInfo) -> bool:
        """Offline artifacts never reach the public bucket, so block them in production."""
        env = info.data.get("ENVIRONMENT") or "local"
        if env == "production" and v:
            raise ValueError(
                "IS_OFFLINE=true is not allowed in production. "
                "Certificates must be uploaded to the bucket."
            )
        return v


settings = Settings()

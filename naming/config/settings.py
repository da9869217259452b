from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from typing import Optional, List
from dotenv import load_dotenv, find_dotenv

# Load environment variables from .env file (searching parent directories)
load_dotenv(find_dotenv(usecwd=True))


class NamingSettings(BaseSettings):
    """
    Settings for the naming client.
    All values are read once at construction and treated as read-only.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ═══════════════════════════════════════════════════════════════════
    # Cluster Settings
    # ═══════════════════════════════════════════════════════════════════
    NAMESPACE: str = "public"
    SERVER_ADDR: str = Field(default="", description="Comma separated host[:port] list")
    ENDPOINT: Optional[str] = None
    NAMING_DOMAIN: Optional[str] = Field(default=None, description="Fixed domain used when no server list is configured")
    DEFAULT_SERVER_PORT: int = 8848
    CONTEXT_PATH: str = "/nacos/v1/ns"

    # ═══════════════════════════════════════════════════════════════════
    # Request Settings
    # ═══════════════════════════════════════════════════════════════════
    HTTP_REQ_TIMEOUT: int = 3000  # milliseconds
    REQUEST_DOMAIN_RETRY_COUNT: int = 3
    ENCODING: str = "UTF-8"
    CLIENT_VERSION: str = "Naming-Python-Client:v1.0.0"

    # ═══════════════════════════════════════════════════════════════════
    # Heartbeat / Subscription Settings
    # ═══════════════════════════════════════════════════════════════════
    HB_FAIL_WAIT_TIME: int = 20000  # milliseconds
    UDP_PORT: int = 0
    CLIENT_IP: Optional[str] = None

    # ═══════════════════════════════════════════════════════════════════
    # Logging
    # ═══════════════════════════════════════════════════════════════════
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @property
    def server_list(self) -> List[str]:
        """Parse SERVER_ADDR into list"""
        return [addr.strip() for addr in self.SERVER_ADDR.split(",") if addr.strip()]

    @field_validator("HTTP_REQ_TIMEOUT", "REQUEST_DOMAIN_RETRY_COUNT")
    @classmethod
    def validate_positive(cls, v, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive, got {v}")
        return v

    @field_validator("HB_FAIL_WAIT_TIME", "UDP_PORT")
    @classmethod
    def validate_non_negative(cls, v, info):
        if v < 0:
            raise ValueError(f"{info.field_name} must not be negative, got {v}")
        return v

    @field_validator("CONTEXT_PATH")
    @classmethod
    def normalize_context_path(cls, v):
        """Context path always starts with '/' and never ends with one"""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v


@lru_cache()
def get_settings() -> NamingSettings:
    """Get cached settings instance"""
    return NamingSettings()

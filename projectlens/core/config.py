"""Configuration management for the project discovery service."""

from enum import Enum
from functools import lru_cache
from typing import Annotated, FrozenSet, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_RECOGNIZED_ROLES = [
    "kubevirt.io:admin",
    "kubevirt.io:edit",
    "kubevirt.io:view",
]


def _split_csv(v):
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Application
    app_name: str = "ProjectLens"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    # API Configuration
    api_prefix: str = "/api/v1"
    allowed_origins: Annotated[List[str], NoDecode] = Field(default_factory=list)

    # OAuth Proxy Configuration
    oauth_header_user: str = "X-Forwarded-User"
    oauth_header_email: str = "X-Forwarded-Email"
    oauth_header_groups: str = "X-Forwarded-Groups"

    # Project discovery
    recognized_roles: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_RECOGNIZED_ROLES)
    )

    # Cluster object custom resource
    cluster_object_group: str = "rbac.open-cluster-management.io"
    cluster_object_version: str = "v1alpha1"
    cluster_object_plural: str = "clusterpermissions"
    kube_in_cluster: bool = True

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_json: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # Health Check
    health_check_path: str = "/health"
    readiness_check_path: str = "/ready"

    @field_validator("recognized_roles", "allowed_origins", mode="before")
    @classmethod
    def parse_csv_list(cls, v):
        """Parse lists from comma-separated strings."""
        return _split_csv(v)

    @property
    def recognized_role_set(self) -> FrozenSet[str]:
        return frozenset(self.recognized_roles)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience function for getting settings
settings = get_settings()

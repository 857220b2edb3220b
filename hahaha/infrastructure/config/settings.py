"""
Application settings

Loaded from the environment with pydantic-settings (prefix ``HAHAHA_``).
"""
import socket
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the sidecar shutdown controller"""

    model_config = SettingsConfigDict(
        env_prefix="HAHAHA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============== Watch ==============
    label_selector: str = Field(default="nais.io/ginuudan=enabled")
    # A stopped watch thread lingers until its request ends, so this also bounds
    # shutdown time and stays below the default 30s termination grace period
    watch_timeout_seconds: int = Field(default=20, ge=1)
    default_namespace: str = Field(default="default", min_length=1)

    # ============== Kubernetes ==============
    kube_config_path: Optional[str] = Field(default=None)
    reporting_controller: str = Field(default="hahaha")
    reporting_instance: str = Field(default_factory=socket.gethostname)

    # ============== Shutdown ==============
    http_signal_timeout_seconds: float = Field(default=10.0, gt=0)
    kube_request_timeout_seconds: float = Field(default=30.0, gt=0)

    # ============== Metrics ==============
    metrics_host: str = Field(default="0.0.0.0")
    metrics_port: int = Field(default=8999, ge=1, le=65535)
    metrics_prefix: str = Field(default="hahaha", pattern=r"^[a-zA-Z_][a-zA-Z0-9_]*$")

    # ============== Logging ==============
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text")  # json, text (default: text for human-readable)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "text"}
        if v not in allowed:
            raise ValueError(f"log_format must be one of {allowed}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Return the settings singleton.

    lru_cache makes sure the environment is only read once.
    """
    return Settings()

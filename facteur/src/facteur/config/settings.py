"""
Configuration management for Facteur.

Hybrid configuration system using YAML files and environment variables.
Priority: Environment variables > YAML config > Pydantic defaults
"""

import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Facteur configuration schema.

    Loads configuration from:
    1. Environment variables (highest priority)
    2. YAML configuration files
    3. Pydantic defaults (lowest priority)

    Configuration files:
        - config/default.yaml: Base defaults
        - config/production.yaml: Production overrides
        - config/development.yaml: Development overrides
        - config/test.yaml: Test overrides
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Facteur"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="production", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8770, ge=1024, le=65535)

    # JWT Authentication
    jwt_secret: Optional[str] = Field(
        default=None, description="JWT secret key (from environment)"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    jwt_subject_claim: str = Field(
        default="sub", description="Claim holding the user id ('id' is the fallback)"
    )
    jwt_leeway_seconds: int = Field(default=0, ge=0)

    # Users
    auto_provision_users: bool = Field(
        default=True,
        description="Create a user record on first authenticated contact",
    )

    # Storage
    storage_backend: str = Field(default="sql", description="sql or memory")
    database_url: str = Field(default="sqlite+aiosqlite:///./facteur.db")
    database_echo: bool = Field(default=False)
    database_pool_size: int = Field(default=10, ge=1)

    # Connections
    heartbeat_interval: int = Field(default=30, ge=5, le=300)
    receive_timeout: float = Field(
        default=30.0, gt=0, description="Seconds between receive polls"
    )
    max_connections_per_user: int = Field(default=0, ge=0)
    max_total_connections: int = Field(default=0, ge=0)

    # Messages
    max_message_size: int = Field(
        default=65_536,
        ge=1024,
        description="Maximum WebSocket frame size in bytes",
    )
    max_content_length: int = Field(
        default=5_000, ge=1, description="Maximum message text length"
    )
    max_page_size: int = Field(default=100, ge=1)

    # Rate Limiting
    rate_limit_enabled: bool = Field(default=True, description="Enable rate limiting")
    rate_limit_events: int = Field(
        default=120, ge=1, description="Max inbound events per user per window"
    )
    rate_limit_window_seconds: int = Field(
        default=60, ge=1, description="Rate limit time window in seconds"
    )
    rate_limit_per_type: Dict[str, int] = Field(
        default_factory=dict, description="Per-event-type limits"
    )

    # Graceful Shutdown
    shutdown_grace_period: float = Field(
        default=1.0,
        ge=0,
        description="Seconds granted to clients after the shutdown notice",
    )

    # Logging
    log_level: str = Field(default="info")
    log_dir: Optional[str] = Field(default=None, description="Directory for facteur.log")
    verbose: int = Field(default=1, ge=0, le=3)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_lower

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in ("sql", "memory"):
            raise ValueError("storage_backend must be 'sql' or 'memory'")
        return v_lower

    @model_validator(mode="after")
    def require_secret_outside_tests(self) -> "Settings":
        if not self.jwt_secret and self.ENV != "test":
            raise ValueError("jwt_secret is required (set jwt_secret in the environment)")
        return self


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        loaded = yaml.safe_load(f)
    return loaded or {}


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing
    """
    # facteur/src/facteur/config/settings.py -> facteur/
    project_root = Path(__file__).resolve().parent.parent.parent.parent
    config_dir = Path(os.getenv("FACTEUR_CONFIG_DIR", project_root / "config"))

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    default_env_file, default_config_file = env_map.get(
        environment, (f".env.{environment}", f"{environment}.yaml")
    )
    env_file = env_file or default_env_file
    config_file = config_file or default_config_file

    # Load .env file FIRST (before Settings initialization)
    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    merged_config = _read_yaml(config_dir / "default.yaml")
    merged_config.update(_read_yaml(config_dir / config_file))
    # Init kwargs outrank the environment in pydantic-settings, so keys the
    # environment defines are left out of the YAML layer.
    for key in list(merged_config):
        if key in os.environ:
            del merged_config[key]

    merged_config["ENV"] = environment

    return Settings(**merged_config)


# Global settings singleton (lazy initialization)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or initialize global settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """
    Override global settings (for testing).

    Args:
        new_settings: New Settings instance to use
    """
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None

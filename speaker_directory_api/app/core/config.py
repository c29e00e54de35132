"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; the Gemini features only
work once ``GEMINI_API_KEY`` is set.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Speaker Directory API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the JSON document holding speakers and nominations.  A
    # relative path is resolved against the project root by the
    # ``store`` module.
    database_path: str = os.getenv("DATABASE_PATH", "database.json")

    # Text-completion backend used by the suggestion endpoints.
    gemini_api_key: str = os.getenv("GEMINI_API_KEY", "")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    gemini_base_url: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    gemini_timeout: float = float(os.getenv("GEMINI_TIMEOUT", "30"))

    # Single admin account.  When ``admin_gate`` is on, admin routes
    # require these credentials via HTTP Basic authentication.
    admin_username: str = os.getenv("ADMIN_USERNAME", "eoapacadmin")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "apac234")
    admin_gate: bool = os.getenv("ADMIN_GATE", "false").lower() in {"1", "true", "yes"}


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()

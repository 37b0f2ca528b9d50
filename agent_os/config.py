"""
Configuration module for Agent OS

Loads and validates configuration from environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Literal

from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

Provider = Literal["anthropic", "openai"]


class Config:
    """
    Centralized configuration for Agent OS.

    Provides type-safe access to configuration values. Missing credentials
    are not fatal here: planning degrades to the rule-based planner and
    agent calls fail with ConfigurationError.
    """

    # API Keys
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
    ANTHROPIC_API_KEY: Optional[str] = os.getenv("ANTHROPIC_API_KEY")

    # LLM Configuration
    DEFAULT_LLM_PROVIDER: Provider = os.getenv("DEFAULT_LLM_PROVIDER", "anthropic")  # type: ignore
    DEFAULT_MODEL: Optional[str] = os.getenv("DEFAULT_MODEL")

    # Planning
    REFINE_CONTEXT: str = os.getenv("REFINE_CONTEXT", "Workflow Orchestration")
    CAPABILITIES_FILE: Optional[Path] = (
        Path(os.environ["CAPABILITIES_FILE"]) if os.getenv("CAPABILITIES_FILE") else None
    )

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    @classmethod
    def validate(cls) -> bool:
        """
        Validate that required configuration is present.

        Returns:
            True if configuration is valid

        Raises:
            ConfigurationError: If required configuration is missing
        """
        errors = []

        if cls.DEFAULT_LLM_PROVIDER not in ("anthropic", "openai"):
            errors.append(f"DEFAULT_LLM_PROVIDER must be 'anthropic' or 'openai', got '{cls.DEFAULT_LLM_PROVIDER}'")
        elif cls.DEFAULT_LLM_PROVIDER == "openai" and not cls.OPENAI_API_KEY:
            errors.append("OPENAI_API_KEY must be set when DEFAULT_LLM_PROVIDER is 'openai'")
        elif cls.DEFAULT_LLM_PROVIDER == "anthropic" and not cls.ANTHROPIC_API_KEY:
            errors.append("ANTHROPIC_API_KEY must be set when DEFAULT_LLM_PROVIDER is 'anthropic'")

        if cls.CAPABILITIES_FILE is not None and not cls.CAPABILITIES_FILE.exists():
            errors.append(f"CAPABILITIES_FILE does not exist: {cls.CAPABILITIES_FILE}")

        if errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            raise ConfigurationError(error_msg)

        return True

    @classmethod
    def get_api_key(cls, provider: Provider) -> str:
        """
        Get API key for a specific provider.

        Args:
            provider: The LLM provider

        Returns:
            The API key

        Raises:
            ConfigurationError: If the API key is not set
        """
        if provider == "anthropic":
            if not cls.ANTHROPIC_API_KEY:
                raise ConfigurationError("ANTHROPIC_API_KEY is not set in environment")
            return cls.ANTHROPIC_API_KEY
        elif provider == "openai":
            if not cls.OPENAI_API_KEY:
                raise ConfigurationError("OPENAI_API_KEY is not set in environment")
            return cls.OPENAI_API_KEY
        else:
            raise ConfigurationError(f"Unknown provider: {provider}")

    @classmethod
    def is_configured(cls, provider: Optional[Provider] = None) -> bool:
        """Whether credentials exist for the provider (default provider if omitted)."""
        try:
            cls.get_api_key(provider or cls.DEFAULT_LLM_PROVIDER)
        except ConfigurationError:
            return False
        return True


# Validate configuration on import
try:
    Config.validate()
    logger.debug("Configuration loaded successfully")
except ConfigurationError as e:
    logger.warning(f"Configuration warning: {e}")

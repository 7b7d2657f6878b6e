"""
Design Service Configuration Module for StructAssist.

Loads the settings of the remote structural analysis/design service from
environment variables, optionally reading a ``.env`` file first.

Usage:
    config = DesignServiceConfig.from_env()
    client = DesignServiceClient(config)
"""

from dataclasses import dataclass
from typing import Optional
import os
import logging

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_URL = "http://localhost:8000"


@dataclass
class DesignServiceConfig:
    """Remote design service configuration.

    Attributes:
        base_url: Service root URL (``/analyse`` and ``/element`` are appended)
        timeout: Request timeout in seconds (default: 60)
        max_retries: Retry attempts after the first request (default: 3)
        retry_base_delay: Base delay for exponential backoff in seconds
    """

    base_url: str = DEFAULT_SERVICE_URL
    timeout: float = 60.0
    max_retries: int = 3
    retry_base_delay: float = 1.0

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.base_url:
            raise ValueError("Service URL is required")

        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")

        if self.max_retries < 0:
            raise ValueError("Max retries cannot be negative")

        if self.retry_base_delay < 0:
            raise ValueError("Retry delay cannot be negative")

        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "DesignServiceConfig":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to a .env file

        Returns:
            DesignServiceConfig instance with loaded configuration

        Raises:
            ValueError: If a numeric variable cannot be parsed
            FileNotFoundError: If env_file is specified but doesn't exist

        Environment Variables:
            STRUCTURAL_SERVICES_URL: Service root URL
            DESIGN_API_TIMEOUT: Request timeout in seconds
            DESIGN_API_MAX_RETRIES: Maximum retry attempts
        """
        if env_file:
            cls._load_env_file(env_file)

        base_url = os.getenv("STRUCTURAL_SERVICES_URL") or DEFAULT_SERVICE_URL
        try:
            timeout = float(os.getenv("DESIGN_API_TIMEOUT", "60"))
            max_retries = int(os.getenv("DESIGN_API_MAX_RETRIES", "3"))
        except ValueError as e:
            raise ValueError(f"Invalid design service setting: {e}")

        config = cls(base_url=base_url, timeout=timeout, max_retries=max_retries)
        logger.debug(f"Loaded design service config for {config.base_url}")
        return config

    @staticmethod
    def _load_env_file(env_file: str) -> None:
        """Load environment variables from .env file.

        Raises:
            FileNotFoundError: If env_file doesn't exist
        """
        from dotenv import load_dotenv

        if not os.path.exists(env_file):
            raise FileNotFoundError(f".env file not found: {env_file}")
        load_dotenv(env_file)

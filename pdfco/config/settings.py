"""
Configuration settings for the PDF.co action runner.
Load configuration from environment variables or a project .env file.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load environment variables from .env file
env_file = Path(__file__).parent.parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)


class Settings:
    """Application settings loaded from environment variables."""

    PROJECT_ROOT = Path(__file__).parent.parent.parent

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', '')

    # ============================================================================
    # PDF.co Configuration (API)
    # ============================================================================
    PDFCO_API_KEY = os.getenv('PDFCO_API_KEY', '')
    PDFCO_BASE_URL = os.getenv('PDFCO_BASE_URL', 'https://api.pdf.co')
    PDFCO_USER_AGENT = os.getenv('PDFCO_USER_AGENT', 'pdfco-actions/1.0')
    PDFCO_TIMEOUT = int(os.getenv('PDFCO_TIMEOUT', '30'))

    # Job polling
    PDFCO_POLL_INTERVAL = float(os.getenv('PDFCO_POLL_INTERVAL', '3'))
    PDFCO_POLL_MAX_ATTEMPTS = int(os.getenv('PDFCO_POLL_MAX_ATTEMPTS', '200'))

    # Batch runs
    PDFCO_CONCURRENCY = int(os.getenv('PDFCO_CONCURRENCY', '5'))

    @classmethod
    def validate_required_settings(cls) -> list[str]:
        """
        Validate that all required settings are configured.
        Returns list of missing required settings.
        """
        missing = []
        if not cls.PDFCO_API_KEY:
            missing.append('PDFCO_API_KEY')
        return missing


# Create settings instance
settings = Settings()


class ConfigValidationError(Exception):
    """Raised when client config validation fails."""
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Config validation failed: {'; '.join(errors)}")


@dataclass(frozen=True)
class ClientConfig:
    """
    Read-only configuration handed to the connector and the job poller.

    Built once per process (usually from ``settings``) and passed in
    explicitly; nothing in the dispatch core reads module globals.
    """
    api_key: str
    base_url: str = 'https://api.pdf.co'
    user_agent: str = 'pdfco-actions/1.0'
    timeout: int = 30
    poll_interval: float = 3.0
    poll_max_attempts: int = 200
    concurrency: int = 5

    @classmethod
    def from_settings(cls, source: Optional[Settings] = None, **overrides) -> 'ClientConfig':
        """Build a config from ``settings``; keyword overrides win."""
        source = source or settings
        values = {
            'api_key': source.PDFCO_API_KEY,
            'base_url': source.PDFCO_BASE_URL,
            'user_agent': source.PDFCO_USER_AGENT,
            'timeout': source.PDFCO_TIMEOUT,
            'poll_interval': source.PDFCO_POLL_INTERVAL,
            'poll_max_attempts': source.PDFCO_POLL_MAX_ATTEMPTS,
            'concurrency': source.PDFCO_CONCURRENCY,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def validate(self) -> List[str]:
        """Validate configuration. Returns list of errors (empty if valid)."""
        errors = []

        if not self.api_key:
            errors.append("API key is not set (PDFCO_API_KEY)")

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            errors.append(f"Invalid base URL: {self.base_url!r}")

        if self.timeout <= 0:
            errors.append(f"timeout must be positive, got {self.timeout}")
        if self.poll_interval < 0:
            errors.append(f"poll_interval must be >= 0, got {self.poll_interval}")
        if self.poll_max_attempts < 1:
            errors.append(f"poll_max_attempts must be >= 1, got {self.poll_max_attempts}")
        if self.concurrency < 1:
            errors.append(f"concurrency must be >= 1, got {self.concurrency}")

        return errors

    def ensure_valid(self) -> 'ClientConfig':
        """Raise ConfigValidationError if the config has problems."""
        errors = self.validate()
        if errors:
            raise ConfigValidationError(errors)
        return self

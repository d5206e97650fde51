"""Base class for HTTP API connectors."""
from abc import ABC, abstractmethod
import logging

from pdfco.config.settings import ClientConfig


class BaseConnector(ABC):
    """
    Shared plumbing for connectors that talk to one HTTP API.

    Holds the base URL and per-call timeout taken from a ClientConfig and
    joins endpoint paths onto the base URL. Subclasses attach credentials
    and own their sessions.
    """

    def __init__(self, name: str, config: ClientConfig):
        """
        Args:
            name: Connector name (used for the child logger)
            config: Client configuration (base URL, timeout)
        """
        self.name = name
        self.config = config
        self.base_url = config.base_url.rstrip('/')
        self.timeout = config.timeout
        self.logger = logging.getLogger(f'{__name__}.{name}')

    def _url(self, endpoint: str) -> str:
        return f'{self.base_url}/{endpoint.lstrip("/")}'

    @abstractmethod
    def authenticate(self) -> bool:
        """Attach credentials to outgoing requests."""

    @abstractmethod
    def validate_connection(self) -> bool:
        """Make one cheap authenticated call; False if it fails."""

    @abstractmethod
    def close(self) -> None:
        """Release sessions."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

"""Credential collaborator supplying the PDF.co request headers."""
from dataclasses import dataclass
from typing import Dict

from pdfco.config.settings import ClientConfig


@dataclass(frozen=True)
class Credentials:
    """API key plus the fixed client identifier sent with every request."""
    api_key: str
    user_agent: str

    @classmethod
    def from_config(cls, config: ClientConfig) -> 'Credentials':
        return cls(api_key=config.api_key, user_agent=config.user_agent)

    def headers(self) -> Dict[str, str]:
        return {
            'x-api-key': self.api_key,
            'user-agent': self.user_agent,
        }

    def __repr__(self) -> str:
        # Never expose the key in logs or tracebacks
        return f"Credentials(api_key='***', user_agent={self.user_agent!r})"

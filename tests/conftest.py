"""Pytest configuration and fixtures."""
import json
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from pdfco.config.settings import ClientConfig
from pdfco.connectors.pdfco_connector import PdfcoConnector


class StatusFeed:
    """
    Scripted job status endpoint.

    Returns the given records in order; once exhausted, keeps returning the
    last one (so a trailing 'working' simulates a job that never finishes).
    """

    def __init__(self, records: List[Dict[str, Any]]):
        self.records = list(records)
        self.calls: List[str] = []

    async def __call__(self, job_id: str) -> Dict[str, Any]:
        index = min(len(self.calls), len(self.records) - 1)
        self.calls.append(job_id)
        return self.records[index]


class FakeSleep:
    """Records requested waits instead of sleeping."""

    def __init__(self):
        self.waits: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


def build_response(
    status_code: int = 200,
    body: Optional[Any] = None,
    text: Optional[str] = None,
) -> MagicMock:
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = 'OK' if status_code < 400 else 'Error'
    if body is None:
        response.json.side_effect = ValueError('No JSON object could be decoded')
    else:
        response.json.return_value = body
    if text is not None:
        response.text = text
    else:
        response.text = json.dumps(body) if body is not None else ''
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status_code} Error')
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses."""
    return build_response


@pytest.fixture
def client_config() -> ClientConfig:
    """Client config with fast polling."""
    return ClientConfig(
        api_key='test-key',
        base_url='https://api.example.test',
        user_agent='pdfco-actions-tests/1.0',
        timeout=5,
        poll_interval=0.5,
        poll_max_attempts=5,
        concurrency=2,
    )


@pytest.fixture
def mock_session():
    """Mock authenticated API session."""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def mock_download_session():
    """Mock unauthenticated download session."""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def connector(client_config, mock_session, mock_download_session) -> PdfcoConnector:
    """PDF.co connector backed by mock sessions."""
    return PdfcoConnector(
        client_config,
        session=mock_session,
        download_session=mock_download_session,
    )


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def status_feed():
    """Factory for scripted job status feeds."""
    return StatusFeed

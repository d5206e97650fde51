"""Connector for the PDF.co REST API."""
import logging
from typing import Any, Dict, Optional

import requests

from pdfco.config.settings import ClientConfig
from pdfco.core.errors import ApiError, FetchError, TransportError
from pdfco.schemas.job import JOB_STATES
from .base_connector import BaseConnector
from .credentials import Credentials

logger = logging.getLogger(__name__)

JOB_CHECK_ENDPOINT = '/v1/job/check'
BALANCE_ENDPOINT = '/v1/account/credit/balance'


def _json_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_code(body: Dict[str, Any], fallback: int) -> int:
    """Pick the remote error code, falling back to the HTTP status."""
    code = body.get('status')
    try:
        return int(code)
    except (TypeError, ValueError):
        return fallback


class PdfcoConnector(BaseConnector):
    """
    Connector for the PDF.co API.

    Sends exactly one request per call and classifies the response:
    decoded JSON on success, ApiError for the remote error envelope,
    TransportError for everything else. Nothing is retried here.
    """

    def __init__(
        self,
        config: ClientConfig,
        credentials: Optional[Credentials] = None,
        session: Optional[requests.Session] = None,
        download_session: Optional[requests.Session] = None,
    ):
        """
        Initialize PDF.co connector.

        Args:
            config: Client configuration (base URL, timeout)
            credentials: Header source (default: built from config)
            session: Session used for authenticated API calls
            download_session: Session used for unauthenticated result downloads
        """
        super().__init__('pdfco', config)
        self.credentials = credentials or Credentials.from_config(config)
        self.session = session or requests.Session()
        # Result URLs are presigned; the API key must not travel with them
        self.download_session = download_session or requests.Session()
        self.authenticate()

    def authenticate(self) -> bool:
        """Attach the API key and client identifier to the API session."""
        self.session.headers.update(self.credentials.headers())
        self.logger.debug(f'Credentials attached for {self.name}')
        return True

    def validate_connection(self) -> bool:
        """Validate the API key by requesting the credit balance."""
        try:
            balance = self.get_balance()
        except (ApiError, TransportError) as e:
            self.logger.error(f'Connection validation error: {str(e)}')
            return False
        self.logger.info(
            f"Connection to {self.name} validated "
            f"({balance.get('remainingCredits', '?')} credits remaining)"
        )
        return True

    def _decode(self, response: requests.Response, url: str) -> Dict[str, Any]:
        """Classify a response into a decoded body or an error."""
        body = _json_body(response)

        if isinstance(body, dict) and body.get('error'):
            code = _error_code(body, response.status_code)
            message = body.get('message') or response.reason or 'Unknown error'
            self.logger.warning(f'API error from {url}: [{code}] {message}')
            raise ApiError(code, message)

        if not response.ok:
            raise TransportError(
                f'HTTP {response.status_code} from {url}: {response.reason}',
                status_code=response.status_code,
            )

        if not isinstance(body, dict):
            raise TransportError(
                f'Unexpected non-JSON response from {url}',
                status_code=response.status_code,
            )

        return body

    def _send_post(self, url: str, payload: Dict[str, Any]) -> requests.Response:
        self.logger.debug(f'POST {url}')
        try:
            return self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f'Request to {url} failed: {e}') from e

    def post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make a POST request with a JSON body.

        Args:
            endpoint: API path (e.g. '/v1/pdf/convert/to/text')
            payload: Request body

        Returns:
            Decoded JSON response

        Raises:
            TransportError: Connection fault or unstructured non-2xx response
            ApiError: Remote error envelope
        """
        url = self._url(endpoint)
        return self._decode(self._send_post(url, payload), url)

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a GET request. Same error rules as post()."""
        url = self._url(endpoint)
        self.logger.debug(f'GET {url}')
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f'Request to {url} failed: {e}') from e
        return self._decode(response, url)

    def get_status(self, job_id: str) -> Dict[str, Any]:
        """
        Query the status record of an async job.

        A record naming a job state is returned as-is, even when it also
        carries the error flag; the poller decides what a failed job means.
        Anything else follows the post() error rules.
        """
        url = self._url(JOB_CHECK_ENDPOINT)
        response = self._send_post(url, {'jobid': job_id})
        body = _json_body(response)
        if isinstance(body, dict) and isinstance(body.get('status'), str) \
                and body['status'] in JOB_STATES:
            return body
        return self._decode(response, url)

    def get_balance(self) -> Dict[str, Any]:
        """Return the account credit balance."""
        return self.get(BALANCE_ENDPOINT)

    def fetch(self, url: str) -> str:
        """
        Download result content from a result URL.

        Raises:
            FetchError: If the download fails or returns non-2xx
        """
        self.logger.debug(f'Fetching inline result from {url}')
        try:
            response = self.download_session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e
        return response.text

    def close(self) -> None:
        """Close the sessions."""
        self.session.close()
        self.download_session.close()
        self.logger.info(f'Closed connection to {self.name}')

"""
Action runner.

Executes actions against PDF.co: validate -> normalize -> dispatch ->
poll (for async jobs) -> materialize inline output. Batches of invocations
run concurrently, each owning its own payload, job handle and status records.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from pdfco.actions.registry import create_action
from pdfco.config.settings import ClientConfig
from pdfco.connectors.pdfco_connector import PdfcoConnector
from pdfco.core.errors import PdfcoError, TransportError
from pdfco.core.materializer import InlineMode, materialize
from pdfco.core.normalizer import sanitize_profiles
from pdfco.core.poller import JobPoller, Sleep
from pdfco.schemas.job import JobAcceptance

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of one invocation in a batch."""
    action: str
    success: bool
    envelope: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    exception: Optional[PdfcoError] = None
    duration_ms: int = 0


class ActionRunner:
    """Runs actions through a connector. Holds no per-invocation state."""

    def __init__(
        self,
        connector: PdfcoConnector,
        config: ClientConfig,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize runner.

        Args:
            connector: Request dispatcher for the PDF.co API
            config: Client configuration (polling budget, concurrency)
            sleep: Coroutine used between status checks
        """
        self.connector = connector
        self.config = config
        self.poller = JobPoller.from_config(self._check_status, config, sleep=sleep)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "ActionRunner":
        """Build a runner with a fresh connector for config."""
        return cls(PdfcoConnector(config.ensure_valid()), config)

    async def _check_status(self, job_id: str) -> Dict[str, Any]:
        return await asyncio.to_thread(self.connector.get_status, job_id)

    async def _fetch(self, url: str) -> str:
        return await asyncio.to_thread(self.connector.fetch, url)

    async def run_action(
        self,
        endpoint: str,
        payload: Mapping[str, Any],
        inline_mode: InlineMode = InlineMode.NONE,
    ) -> Dict[str, Any]:
        """
        Execute one request and return its result envelope.

        Args:
            endpoint: API path chosen by the action
            payload: Assembled request payload
            inline_mode: Decode strategy for inline result content

        Returns:
            The immediate response, or the terminal job record; with ``body``
            attached when inline content was fetched

        Raises:
            TransportError, ApiError, JobFailedError, JobTimeoutError, FetchError
        """
        payload = sanitize_profiles(dict(payload))

        response = await asyncio.to_thread(self.connector.post, endpoint, payload)

        if response.get("jobId"):
            try:
                acceptance = JobAcceptance.model_validate(response)
            except ValidationError as e:
                raise TransportError(f"Malformed job submission response from {endpoint}: {e}") from e
            logger.info(f"{endpoint}: job {acceptance.job_id} accepted")
            envelope = await self.poller.wait(acceptance.job_id)
        else:
            logger.info(f"{endpoint}: completed synchronously")
            envelope = response

        return await materialize(
            envelope,
            inline=bool(payload.get("inline")),
            mode=inline_mode,
            fetch=self._fetch,
        )

    async def run(self, action_name: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate parameters for a named action and execute it.

        Raises:
            UnknownActionError: No such action
            ActionValidationError: Invalid parameters (nothing is sent)
        """
        prepared = create_action(action_name).prepare(params)
        return await self.run_action(prepared.endpoint, prepared.payload, prepared.inline_mode)

    async def _run_item(self, action_name: str, params: Mapping[str, Any], capture: bool) -> ActionResult:
        start_time = time.time()
        try:
            envelope = await self.run(action_name, params)
        except PdfcoError as e:
            if not capture:
                raise
            logger.error(f"{action_name} failed: {e}")
            return ActionResult(
                action=action_name,
                success=False,
                error=str(e),
                exception=e,
                duration_ms=int((time.time() - start_time) * 1000),
            )
        return ActionResult(
            action=action_name,
            success=True,
            envelope=envelope,
            duration_ms=int((time.time() - start_time) * 1000),
        )

    async def run_batch(
        self,
        items: Sequence[Tuple[str, Mapping[str, Any]]],
        concurrency: Optional[int] = None,
        continue_on_fail: bool = False,
    ) -> List[ActionResult]:
        """
        Run several invocations concurrently.

        Args:
            items: (action name, params) pairs
            concurrency: Maximum invocations in flight (default: config.concurrency)
            continue_on_fail: Record errors per item instead of raising

        Returns:
            One ActionResult per item, in input order

        Raises:
            PdfcoError: First failure, when continue_on_fail is False; the
                remaining invocations are cancelled
        """
        semaphore = asyncio.Semaphore(concurrency or self.config.concurrency)

        async def run_with_semaphore(action_name: str, params: Mapping[str, Any]) -> ActionResult:
            async with semaphore:
                return await self._run_item(action_name, params, capture=continue_on_fail)

        tasks = [
            asyncio.ensure_future(run_with_semaphore(name, params))
            for name, params in items
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
